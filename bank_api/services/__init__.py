"""Business logic services."""

from bank_api.services.auth_service import AuthService
from bank_api.services.user_service import UserService
from bank_api.services.transfer_service import TransferService, TransferResult
from bank_api.services.statement_service import StatementService

__all__ = [
    "AuthService",
    "UserService",
    "TransferService",
    "TransferResult",
    "StatementService",
]
