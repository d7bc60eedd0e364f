"""
Provider and Offer models for the offer catalog.
"""

from decimal import Decimal
from enum import Enum
from typing import List, Optional

from sqlalchemy import Boolean, ForeignKey, Numeric, Text
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from utilitycrm.models.base import SlugModel
from utilitycrm.models.commission import CommissionFormula


class Department(str, Enum):
    """Business line a provider or offer belongs to."""
    ENERGIA = "energia"        # Electricity and gas
    TELEFONIA = "telefonia"    # Mobile and fixed line
    NOLEGGIO = "noleggio"      # Long-term vehicle rental


class Provider(SlugModel):
    """A utility or service provider whose offers the brokerage sells."""

    __tablename__ = "providers"

    department: Mapped[Department] = mapped_column(
        SQLAlchemyEnum(
            Department,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
        index=True,
    )

    # Relationships
    offers: Mapped[List["Offer"]] = relationship(
        "Offer",
        back_populates="provider",
    )

    def __repr__(self) -> str:
        return f"<Provider(id='{self.id}', name='{self.name}')>"


class Offer(SlugModel):
    """
    A commercial offer of a provider.

    The formula decides how agent commissions are scheduled for contracts
    signed on this offer. Only the special provider (Edison) may use a
    non-Standard formula.
    """

    __tablename__ = "offers"

    provider_id: Mapped[str] = mapped_column(
        ForeignKey("providers.id"),
        nullable=False,
        index=True,
    )
    department: Mapped[Department] = mapped_column(
        SQLAlchemyEnum(
            Department,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )
    formula: Mapped[CommissionFormula] = mapped_column(
        SQLAlchemyEnum(
            CommissionFormula,
            values_callable=lambda x: [e.value for e in x],
        ),
        default=CommissionFormula.STANDARD,
        nullable=False,
    )
    active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Standard formula parameters
    base_value: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2),
        nullable=True,
        comment="Default commission value of a contract on this offer",
    )
    agent_one_time_percentage: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(5, 2),
        nullable=True,
        comment="Suggested agent share of the base value, 0-100",
    )

    # Recurring formula parameters
    recurring_factor: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(8, 4),
        nullable=True,
        comment="Share of annual consumption paid as commission (display only, "
        "the schedule uses the formula's fixed factor)",
    )

    # Relationships
    provider: Mapped["Provider"] = relationship(
        "Provider",
        back_populates="offers",
    )

    def __repr__(self) -> str:
        return f"<Offer(id='{self.id}', formula={self.formula.value})>"
