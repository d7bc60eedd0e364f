"""Business logic services."""

from utilitycrm.services.commission import (
    CommissionError,
    MissingRequiredField,
    calculate_commissions,
)
from utilitycrm.services.ledger import schedule_contract_commissions

__all__ = [
    "calculate_commissions",
    "CommissionError",
    "MissingRequiredField",
    "schedule_contract_commissions",
]
