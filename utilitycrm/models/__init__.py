"""
Database models for the utility CRM.

All models are exported here for convenient imports:
    from utilitycrm.models import Offer, CommissionEntry, etc.
"""

from utilitycrm.models.base import Base, LedgerModel, SlugModel, TimestampMixin
from utilitycrm.models.catalog import Department, Offer, Provider
from utilitycrm.models.commission import (
    CommissionEntry,
    CommissionFormula,
    CommissionStatus,
    PaymentType,
)

__all__ = [
    # Base
    "Base",
    "LedgerModel",
    "SlugModel",
    "TimestampMixin",
    # Catalog
    "Department",
    "Provider",
    "Offer",
    # Commission
    "CommissionEntry",
    "CommissionFormula",
    "CommissionStatus",
    "PaymentType",
]
