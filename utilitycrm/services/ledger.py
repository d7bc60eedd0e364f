"""
Commission ledger: stores the payment schedule of each contract.

The engine in services.commission only computes payments. This module owns
their persistence: one CommissionEntry per payment, created Unpaid and
settled later by back-office.

Amounts are rounded half-up one payment at a time, so twelve stored
installments may not add up exactly to the unrounded recurring share
(INBORSA on 3000 kWh stores 12 x 11.38 = 136.56 for a 136.50 share).
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from utilitycrm.config import settings
from utilitycrm.models import CommissionEntry, CommissionStatus, Offer, Provider
from utilitycrm.services.commission import (
    CommissionPayment,
    CommissionRequest,
    calculate_commissions,
)

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    """Raised when a contract's commissions cannot be scheduled."""


@dataclass(frozen=True)
class ContractTerms:
    """The parts of a contract record the commission schedule depends on."""

    contract_id: str
    agent_id: str
    agent_commission_rate: float
    base_commission: float
    start_date: date
    annual_consumption: Optional[float] = None


def to_stored_amount(amount: float, places: Optional[int] = None) -> Decimal:
    """Round an engine amount to the ledger's precision, half-up.

    Each payment is rounded on its own; no remainder is carried between
    installments.
    """
    if places is None:
        places = settings.amount_decimal_places
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP)


async def schedule_contract_commissions(
    db: AsyncSession,
    terms: ContractTerms,
    offer: Offer,
) -> List[CommissionPayment]:
    """
    Compute and store the commission schedule of a new contract.

    The offer supplies the formula and, through its provider, the provider
    name the engine dispatches on. Payments whose amount rounds to zero
    are not stored; the returned list holds exactly the stored payments,
    with their stored (rounded) amounts.

    Raises:
        LedgerError: offer inactive or its provider missing
        MissingRequiredField: propagated from the engine, nothing is stored
    """
    if not offer.active:
        logger.warning(
            f"Contract {terms.contract_id}: offer {offer.id} is not active"
        )
        raise LedgerError(f"Offer '{offer.id}' is not active")

    provider = await db.get(Provider, offer.provider_id)
    if provider is None:
        raise LedgerError(f"Provider '{offer.provider_id}' of offer '{offer.id}' does not exist")

    request = CommissionRequest(
        contract_id=terms.contract_id,
        agent_id=terms.agent_id,
        agent_commission_rate=terms.agent_commission_rate,
        base_commission=terms.base_commission,
        offer_commission_formula=offer.formula,
        provider=provider.name,
        start_date=terms.start_date,
        annual_consumption=terms.annual_consumption,
    )
    payments = calculate_commissions(request)

    stored = []
    for payment in payments:
        amount = to_stored_amount(payment.amount)
        if amount <= 0:
            logger.debug(
                f"Contract {terms.contract_id}: {payment.type.value} payment of "
                f"{payment.amount} on {payment.payment_date} rounds to zero, skipped"
            )
            continue
        db.add(
            CommissionEntry(
                agent_id=payment.agent_id,
                contract_id=payment.contract_id,
                offer_id=offer.id,
                amount=amount,
                payment_date=payment.payment_date,
                payment_type=payment.type,
                status=CommissionStatus.UNPAID,
            )
        )
        stored.append(replace(payment, amount=float(amount)))

    await db.flush()

    logger.info(
        f"Scheduled {len(stored)} commission entries for contract {terms.contract_id} "
        f"(agent {terms.agent_id}, offer {offer.id})"
    )
    return stored


async def list_entries(
    db: AsyncSession,
    agent_id: Optional[str] = None,
    contract_id: Optional[str] = None,
    status: Optional[CommissionStatus] = None,
) -> List[CommissionEntry]:
    """List ledger entries, oldest payment date first."""
    query = select(CommissionEntry)

    if agent_id:
        query = query.where(CommissionEntry.agent_id == agent_id)
    if contract_id:
        query = query.where(CommissionEntry.contract_id == contract_id)
    if status:
        query = query.where(CommissionEntry.status == status)

    query = query.order_by(CommissionEntry.payment_date, CommissionEntry.id)

    result = await db.execute(query)
    return list(result.scalars().all())


async def update_status(
    db: AsyncSession,
    entry_id: int,
    status: CommissionStatus,
) -> Optional[CommissionEntry]:
    """Set the settlement status of an entry. Returns None if it does not exist."""
    entry = await db.get(CommissionEntry, entry_id)
    if entry is None:
        return None

    old_status = entry.status
    entry.status = status
    await db.flush()
    await db.refresh(entry)

    logger.info(
        f"Commission entry {entry_id}: {old_status.value} -> {status.value}"
    )
    return entry


def summarize(entries: Iterable[CommissionEntry]) -> Dict[str, Decimal]:
    """Total amount per status, every status present."""
    totals = {s.value: Decimal("0") for s in CommissionStatus}
    for entry in entries:
        totals[entry.status.value] += entry.amount
    return totals
