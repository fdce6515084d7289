"""
Database models package.

All models must be imported here so that Base.metadata knows
every table before create_all() runs.
"""

from bank_api.models.base import Base
from bank_api.models.enums import (
    TransactionType,
    TransactionStatus,
    OperationType,
)
from bank_api.models.account import Account, beneficiary_links
from bank_api.models.transaction import Transaction

__all__ = [
    "Base",
    "TransactionType",
    "TransactionStatus",
    "OperationType",
    "Account",
    "beneficiary_links",
    "Transaction",
]
