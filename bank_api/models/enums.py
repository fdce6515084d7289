"""
Shared enumerations for database models and API schemas.

Values are the lowercase strings clients see on the wire.
"""

import enum


class TransactionType(str, enum.Enum):
    """Kind of ledger entry. Only transfers exist today."""
    TRANSFER = "transfer"


class TransactionStatus(str, enum.Enum):
    """Set once at creation; ledger entries never change state."""
    COMPLETED = "completed"


class OperationType(str, enum.Enum):
    """Direction of a ledger entry from one account's point of view."""
    SENT = "sent"
    RECEIVED = "received"
