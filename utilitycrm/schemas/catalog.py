"""Offer catalog schemas."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from utilitycrm.models.catalog import Department
from utilitycrm.models.commission import CommissionFormula
from utilitycrm.services.catalog import OfferDraft


class ProviderResponse(BaseModel):
    """Provider as listed in settings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    name: str
    department: Department


class OfferResponse(BaseModel):
    """Offer with its commission parameters."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    name: str
    provider_id: str
    department: Department
    formula: CommissionFormula
    active: bool
    description: Optional[str] = None
    base_value: Optional[Decimal] = None
    agent_one_time_percentage: Optional[Decimal] = None
    recurring_factor: Optional[Decimal] = None


class OfferCreate(BaseModel):
    """New offer from the settings form."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(..., min_length=1, max_length=100, pattern="^[a-z0-9-]+$")
    name: str = Field(..., min_length=1, max_length=255)
    provider_id: str = Field(..., min_length=1, max_length=50)
    department: Department
    formula: CommissionFormula = CommissionFormula.STANDARD
    active: bool = True
    description: Optional[str] = Field(None, max_length=2000)
    base_value: Optional[Decimal] = Field(None, ge=0)
    agent_one_time_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    recurring_factor: Optional[Decimal] = Field(
        None,
        gt=0,
        le=1,
        description=(
            "Informational only: commission schedules always use the "
            "formula's fixed factor. Ignored for Standard offers."
        ),
    )

    def to_draft(self) -> OfferDraft:
        return OfferDraft(**self.model_dump())
