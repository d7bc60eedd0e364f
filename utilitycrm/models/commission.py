"""
Commission enums and the CommissionEntry ledger model.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import Date, Numeric, String
from sqlalchemy import Enum as SQLAlchemyEnum
from sqlalchemy.orm import Mapped, mapped_column

from utilitycrm.models.base import LedgerModel


class CommissionFormula(str, Enum):
    """Commission calculation strategy attached to an offer."""
    STANDARD = "Standard"          # One-time share of the base commission
    TOP50 = "TOP50"                # Base one-time + 12 monthly on consumption
    INBORSA = "INBORSA"            # 30/70 split of 6.5% of consumption
    INBORSA_TOP = "INBORSA TOP"    # 30/70 split of 5% of consumption


class PaymentType(str, Enum):
    """Kind of scheduled commission payment."""
    ONE_TIME = "OneTime"
    RECURRING = "Recurring"


class CommissionStatus(str, Enum):
    """Settlement status of a ledger entry."""
    UNPAID = "Unpaid"
    PAID = "Paid"
    FLAGGED = "Flagged"    # Held for back-office review


class CommissionEntry(LedgerModel):
    """
    One scheduled commission payment owed to an agent.

    Entries are written by the ledger service from the engine's output,
    one per payment, and only their status changes afterwards.
    """

    __tablename__ = "commission_entries"

    agent_id: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )
    contract_id: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )
    offer_id: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )
    payment_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        index=True,
    )
    payment_type: Mapped[PaymentType] = mapped_column(
        SQLAlchemyEnum(
            PaymentType,
            values_callable=lambda x: [e.value for e in x],
        ),
        nullable=False,
    )
    status: Mapped[CommissionStatus] = mapped_column(
        SQLAlchemyEnum(
            CommissionStatus,
            values_callable=lambda x: [e.value for e in x],
        ),
        default=CommissionStatus.UNPAID,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<CommissionEntry(id={self.id}, contract_id='{self.contract_id}', "
            f"amount={self.amount}, status={self.status.value})>"
        )
