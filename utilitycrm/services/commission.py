"""
Commission schedule calculation for agents.

Rules:
- Standard formula, or any provider other than Edison:
  one-time payment of base commission x agent rate on the start date
- Edison TOP50: the same one-time payment (when base commission > 0)
  plus 12 monthly payments of 0.6% of annual consumption / 12 x agent rate
- Edison INBORSA / INBORSA TOP: 6.5% / 5% of annual consumption x agent rate,
  paid 30% up front and 70% over the following 12 months
- Payments with a zero or negative amount are never emitted

All amounts are plain floats; rounding belongs to whoever stores or displays
them.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from utilitycrm.models.commission import CommissionFormula, PaymentType

logger = logging.getLogger(__name__)

# Provider whose non-Standard offers use consumption-based formulas
SPECIAL_FORMULA_PROVIDER = "edison"

# Share of annual consumption paid per formula
TOP50_CONSUMPTION_FACTOR = 0.006
INBORSA_FACTOR = 0.065
INBORSA_TOP_FACTOR = 0.05

# INBORSA split between the up-front and the monthly part
ONE_TIME_SHARE = 0.30
RECURRING_SHARE = 0.70

RECURRING_MONTHS = 12


class CommissionError(Exception):
    """Base class for commission calculation failures."""


class MissingRequiredField(CommissionError):
    """A field the selected formula depends on was not supplied."""

    def __init__(self, field_name: str, message: str):
        super().__init__(message)
        self.field_name = field_name


@dataclass(frozen=True)
class CommissionRequest:
    """Contract terms the engine needs to build a payment schedule."""

    contract_id: str
    agent_id: str
    agent_commission_rate: float
    base_commission: float
    offer_commission_formula: CommissionFormula
    provider: str
    start_date: date
    annual_consumption: Optional[float] = None


@dataclass(frozen=True)
class CommissionPayment:
    """A single scheduled payment to an agent."""

    agent_id: str
    contract_id: str
    amount: float
    payment_date: date
    type: PaymentType


def requires_special_formula(provider: str, formula: CommissionFormula) -> bool:
    """Whether the consumption-based Edison formulas apply.

    Only Edison offers with a formula other than Standard qualify; the
    provider name is compared case-insensitively.
    """
    return (
        provider.lower() == SPECIAL_FORMULA_PROVIDER
        and formula != CommissionFormula.STANDARD
    )


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the target month.

    Jan 31 + 1 month is Feb 29 in a leap year and Feb 28 otherwise.
    """
    return start + relativedelta(months=months)


def calculate_commissions(request: CommissionRequest) -> List[CommissionPayment]:
    """Build the commission payment schedule for a contract.

    Args:
        request: Contract terms, offer formula and agent rate

    Returns:
        Payments in emission order: one-time first, then the recurring
        installments month by month. Zero-amount payments are dropped.

    Raises:
        MissingRequiredField: annual consumption is missing for an Edison
            offer with a non-Standard formula
    """
    formula = CommissionFormula(request.offer_commission_formula)

    if requires_special_formula(request.provider, formula):
        if request.annual_consumption is None:
            raise MissingRequiredField(
                "annual_consumption",
                "Annual consumption is required for special Edison commission formulas.",
            )
        payments = _special_formula_payments(request, formula)
    else:
        payments = _standard_payments(request)

    result = [p for p in payments if p.amount > 0]
    logger.debug(
        f"Contract {request.contract_id}: {len(result)} commission payments "
        f"({formula.value}, provider={request.provider})"
    )
    return result


def _standard_payments(request: CommissionRequest) -> List[CommissionPayment]:
    amount = request.base_commission * request.agent_commission_rate
    if amount <= 0:
        return []
    return [_one_time(request, amount)]


def _special_formula_payments(
    request: CommissionRequest,
    formula: CommissionFormula,
) -> List[CommissionPayment]:
    consumption = request.annual_consumption
    rate = request.agent_commission_rate

    if formula == CommissionFormula.TOP50:
        payments = []
        if request.base_commission > 0:
            payments.append(_one_time(request, request.base_commission * rate))
        monthly = (consumption * TOP50_CONSUMPTION_FACTOR / RECURRING_MONTHS) * rate
        payments.extend(_recurring(request, monthly))
        return payments

    if formula in (CommissionFormula.INBORSA, CommissionFormula.INBORSA_TOP):
        factor = INBORSA_FACTOR if formula == CommissionFormula.INBORSA else INBORSA_TOP_FACTOR
        total_formula_commission = consumption * factor
        agent_total = total_formula_commission * rate

        payments = [_one_time(request, agent_total * ONE_TIME_SHARE)]
        payments.extend(
            _recurring(request, (agent_total * RECURRING_SHARE) / RECURRING_MONTHS)
        )
        return payments

    # STANDARD never reaches here, requires_special_formula excludes it
    raise ValueError(f"Unhandled commission formula: {formula!r}")


def _one_time(request: CommissionRequest, amount: float) -> CommissionPayment:
    return CommissionPayment(
        agent_id=request.agent_id,
        contract_id=request.contract_id,
        amount=amount,
        payment_date=request.start_date,
        type=PaymentType.ONE_TIME,
    )


def _recurring(request: CommissionRequest, amount: float) -> List[CommissionPayment]:
    return [
        CommissionPayment(
            agent_id=request.agent_id,
            contract_id=request.contract_id,
            amount=amount,
            payment_date=add_months(request.start_date, month),
            type=PaymentType.RECURRING,
        )
        for month in range(1, RECURRING_MONTHS + 1)
    ]
