"""
Commission schemas.

Field names are camelCase on the wire (contractId, startDate, ...) and
snake_case in Python; dates travel as ISO-8601 strings.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from utilitycrm.models.commission import CommissionFormula, CommissionStatus, PaymentType
from utilitycrm.services.commission import CommissionPayment, CommissionRequest
from utilitycrm.services.ledger import ContractTerms


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class CommissionRequestSchema(CamelModel):
    """Input of a direct commission calculation."""

    contract_id: str = Field(..., min_length=1, max_length=100)
    agent_id: str = Field(..., min_length=1, max_length=100)
    agent_commission_rate: float = Field(..., ge=0, le=1)
    base_commission: float = Field(..., ge=0)
    offer_commission_formula: CommissionFormula
    annual_consumption: Optional[float] = Field(None, ge=0)
    provider: str = Field(..., min_length=1, max_length=255)
    start_date: date

    def to_request(self) -> CommissionRequest:
        return CommissionRequest(
            contract_id=self.contract_id,
            agent_id=self.agent_id,
            agent_commission_rate=self.agent_commission_rate,
            base_commission=self.base_commission,
            offer_commission_formula=self.offer_commission_formula,
            provider=self.provider,
            start_date=self.start_date,
            annual_consumption=self.annual_consumption,
        )


class ScheduleContractRequest(CamelModel):
    """A newly created contract whose commissions should be scheduled."""

    contract_id: str = Field(..., min_length=1, max_length=100)
    agent_id: str = Field(..., min_length=1, max_length=100)
    offer_id: str = Field(..., min_length=1, max_length=100)
    agent_commission_rate: float = Field(..., ge=0, le=1)
    base_commission: float = Field(0, ge=0)
    annual_consumption: Optional[float] = Field(None, ge=0)
    start_date: date

    def to_terms(self) -> ContractTerms:
        return ContractTerms(
            contract_id=self.contract_id,
            agent_id=self.agent_id,
            agent_commission_rate=self.agent_commission_rate,
            base_commission=self.base_commission,
            start_date=self.start_date,
            annual_consumption=self.annual_consumption,
        )


class CommissionPaymentSchema(CamelModel):
    """One scheduled payment."""

    agent_id: str
    contract_id: str
    amount: float
    payment_date: date
    type: PaymentType

    @classmethod
    def from_payment(cls, payment: CommissionPayment) -> "CommissionPaymentSchema":
        return cls(
            agent_id=payment.agent_id,
            contract_id=payment.contract_id,
            amount=payment.amount,
            payment_date=payment.payment_date,
            type=payment.type,
        )


class CommissionScheduleResponse(CamelModel):
    """Result of a calculation: payments in emission order."""

    payments: List[CommissionPaymentSchema]

    @classmethod
    def from_payments(cls, payments: List[CommissionPayment]) -> "CommissionScheduleResponse":
        return cls(payments=[CommissionPaymentSchema.from_payment(p) for p in payments])


class CommissionEntryResponse(CamelModel):
    """Stored ledger entry."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    agent_id: str
    contract_id: str
    offer_id: Optional[str]
    amount: Decimal
    payment_date: date
    payment_type: PaymentType
    status: CommissionStatus
    created_at: datetime
    updated_at: Optional[datetime]


class CommissionListResponse(CamelModel):
    """Ledger entries with per-status totals."""

    items: List[CommissionEntryResponse]
    total: int
    totals: Dict[str, Decimal]


class CommissionStatusUpdate(CamelModel):
    """Settle, flag or reopen an entry."""

    status: CommissionStatus
