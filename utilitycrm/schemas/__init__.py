"""Pydantic schemas for request/response validation."""

from utilitycrm.schemas.catalog import OfferCreate, OfferResponse, ProviderResponse
from utilitycrm.schemas.commission import (
    CommissionEntryResponse,
    CommissionListResponse,
    CommissionPaymentSchema,
    CommissionRequestSchema,
    CommissionScheduleResponse,
    CommissionStatusUpdate,
    ScheduleContractRequest,
)

__all__ = [
    # Catalog
    "OfferCreate",
    "OfferResponse",
    "ProviderResponse",
    # Commission
    "CommissionEntryResponse",
    "CommissionListResponse",
    "CommissionPaymentSchema",
    "CommissionRequestSchema",
    "CommissionScheduleResponse",
    "CommissionStatusUpdate",
    "ScheduleContractRequest",
]
