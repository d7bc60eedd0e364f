"""
Offer catalog: providers, offers and their commission formulas.

The default dataset mirrors the brokerage's current provider portfolio and
is inserted on startup. Only Edison offers may carry a consumption-based
formula; offers of every other provider are stored as Standard.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from utilitycrm.models import CommissionFormula, Department, Offer, Provider
from utilitycrm.services.commission import (
    INBORSA_FACTOR,
    INBORSA_TOP_FACTOR,
    SPECIAL_FORMULA_PROVIDER,
    TOP50_CONSUMPTION_FACTOR,
)

logger = logging.getLogger(__name__)

RECURRING_FACTORS = {
    CommissionFormula.TOP50: TOP50_CONSUMPTION_FACTOR,
    CommissionFormula.INBORSA: INBORSA_FACTOR,
    CommissionFormula.INBORSA_TOP: INBORSA_TOP_FACTOR,
}

DEFAULT_PROVIDERS = [
    ("edison", "Edison", Department.ENERGIA),
    ("enel", "Enel Energia", Department.ENERGIA),
    ("eni", "Eni Plenitude", Department.ENERGIA),
    ("sorgenia", "Sorgenia", Department.ENERGIA),
    ("tim", "TIM", Department.TELEFONIA),
    ("vodafone", "Vodafone", Department.TELEFONIA),
    ("wind", "WindTre", Department.TELEFONIA),
    ("leaseplan", "LeasePlan", Department.NOLEGGIO),
    ("ald", "ALD Automotive", Department.NOLEGGIO),
]

DEFAULT_OFFERS = [
    ("edison-top50", "TOP50", "edison", Department.ENERGIA, CommissionFormula.TOP50),
    ("edison-inborsa", "INBORSA", "edison", Department.ENERGIA, CommissionFormula.INBORSA),
    ("enel-flex", "Flex", "enel", Department.ENERGIA, CommissionFormula.STANDARD),
    ("enel-sempre-con-te", "Sempre con te", "enel", Department.ENERGIA, CommissionFormula.STANDARD),
    ("eni-link", "Link", "eni", Department.ENERGIA, CommissionFormula.STANDARD),
    ("eni-trend-casa", "Trend Casa", "eni", Department.ENERGIA, CommissionFormula.STANDARD),
    ("sorgenia-next-energy", "Next Energy Sunlight", "sorgenia", Department.ENERGIA, CommissionFormula.STANDARD),
    ("tim-fibra", "TIM Fibra", "tim", Department.TELEFONIA, CommissionFormula.STANDARD),
    ("vodafone-giga", "Vodafone Giga Family", "vodafone", Department.TELEFONIA, CommissionFormula.STANDARD),
    ("leaseplan-suv", "Noleggio SUV", "leaseplan", Department.NOLEGGIO, CommissionFormula.STANDARD),
]


class CatalogError(Exception):
    """Raised when a catalog write is refused."""


@dataclass
class OfferDraft:
    """Fields of a new offer as entered by back-office."""

    id: str
    name: str
    provider_id: str
    department: Department
    formula: CommissionFormula = CommissionFormula.STANDARD
    active: bool = True
    description: Optional[str] = None
    base_value: Optional[Decimal] = None
    agent_one_time_percentage: Optional[Decimal] = None
    recurring_factor: Optional[Decimal] = None


def default_recurring_factor(formula: CommissionFormula) -> Optional[float]:
    """Share of annual consumption a formula pays, None for Standard."""
    return RECURRING_FACTORS.get(formula)


def allowed_formulas(provider: Provider) -> List[CommissionFormula]:
    """Formulas an offer of this provider may use."""
    if provider.name.lower() == SPECIAL_FORMULA_PROVIDER:
        return list(CommissionFormula)
    return [CommissionFormula.STANDARD]


async def seed_catalog(db: AsyncSession) -> int:
    """
    Insert default providers and offers that are not in the database yet.

    Existing rows are left untouched, so this is safe to run on every
    startup.

    Returns:
        Number of rows inserted
    """
    created = 0

    for provider_id, name, department in DEFAULT_PROVIDERS:
        if await db.get(Provider, provider_id) is None:
            db.add(Provider(id=provider_id, name=name, department=department))
            created += 1

    await db.flush()

    for offer_id, name, provider_id, department, formula in DEFAULT_OFFERS:
        if await db.get(Offer, offer_id) is None:
            factor = default_recurring_factor(formula)
            db.add(
                Offer(
                    id=offer_id,
                    name=name,
                    provider_id=provider_id,
                    department=department,
                    formula=formula,
                    active=True,
                    recurring_factor=Decimal(str(factor)) if factor is not None else None,
                )
            )
            created += 1

    await db.flush()

    if created:
        logger.info(f"Seeded catalog with {created} rows")
    return created


async def list_providers(
    db: AsyncSession,
    department: Optional[Department] = None,
) -> List[Provider]:
    """List providers, optionally for one department."""
    query = select(Provider).order_by(Provider.name)
    if department:
        query = query.where(Provider.department == department)

    result = await db.execute(query)
    return list(result.scalars().all())


async def list_offers(
    db: AsyncSession,
    provider_id: Optional[str] = None,
    department: Optional[Department] = None,
    active_only: bool = False,
) -> List[Offer]:
    """List offers filtered by provider, department and active flag."""
    query = select(Offer).order_by(Offer.provider_id, Offer.name)

    if provider_id:
        query = query.where(Offer.provider_id == provider_id)
    if department:
        query = query.where(Offer.department == department)
    if active_only:
        query = query.where(Offer.active.is_(True))

    result = await db.execute(query)
    return list(result.scalars().all())


async def get_offer(db: AsyncSession, offer_id: str) -> Optional[Offer]:
    """Get an offer by id."""
    return await db.get(Offer, offer_id)


async def get_provider(db: AsyncSession, provider_id: str) -> Optional[Provider]:
    """Get a provider by id."""
    return await db.get(Provider, provider_id)


async def create_offer(db: AsyncSession, draft: OfferDraft) -> Offer:
    """
    Create an offer.

    A non-Standard formula on a provider other than Edison is downgraded to
    Standard. A consumption-based formula without an explicit recurring
    factor gets the formula's default factor. The factor is kept for display
    in settings; calculate_commissions always applies the formula's own factor.

    Raises:
        CatalogError: unknown provider, provider outside the offer's
            department, or duplicate offer id
    """
    provider = await get_provider(db, draft.provider_id)
    if provider is None:
        logger.warning(f"Offer {draft.id} refused: unknown provider {draft.provider_id}")
        raise CatalogError(f"Provider '{draft.provider_id}' does not exist")

    if provider.department != draft.department:
        logger.warning(
            f"Offer {draft.id} refused: provider {provider.id} belongs to "
            f"{provider.department.value}, not {draft.department.value}"
        )
        raise CatalogError(
            f"Provider '{provider.id}' does not belong to department "
            f"'{draft.department.value}'"
        )

    if await get_offer(db, draft.id) is not None:
        logger.warning(f"Offer {draft.id} refused: id already in use")
        raise CatalogError(f"Offer '{draft.id}' already exists")

    formula = draft.formula
    if formula not in allowed_formulas(provider):
        logger.info(
            f"Offer {draft.id}: formula {formula.value} not available for "
            f"{provider.name}, using Standard"
        )
        formula = CommissionFormula.STANDARD

    recurring_factor = draft.recurring_factor
    if formula == CommissionFormula.STANDARD:
        recurring_factor = None
    elif recurring_factor is None:
        recurring_factor = Decimal(str(default_recurring_factor(formula)))

    offer = Offer(
        id=draft.id,
        name=draft.name,
        provider_id=provider.id,
        department=draft.department,
        formula=formula,
        active=draft.active,
        description=draft.description,
        base_value=draft.base_value,
        agent_one_time_percentage=draft.agent_one_time_percentage,
        recurring_factor=recurring_factor,
    )
    db.add(offer)
    await db.flush()

    logger.info(f"Created offer {offer.id} ({formula.value}) for {provider.name}")
    return offer
