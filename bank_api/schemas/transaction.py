"""
Pydantic schemas for transfers, statements, and ledger queries.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from bank_api.models.enums import TransactionType, TransactionStatus, OperationType
from bank_api.schemas.common import MoneyAmount


class TransferRequest(BaseModel):
    beneficiary_id: int
    amount: Decimal = Field(ge=Decimal("0.01"), decimal_places=2)
    description: str = Field(default="", max_length=255)


class TransactionResponse(BaseModel):
    id: int
    sender_id: int
    beneficiary_id: int
    amount: MoneyAmount
    description: str
    transaction_type: TransactionType
    status: TransactionStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class TransferResponse(BaseModel):
    """
    The new transaction plus both sides' balances before and
    after, so a client can reconcile without another request.
    """
    message: str = "Transfer completed successfully"
    transaction: TransactionResponse
    previous_sender_balance: MoneyAmount
    new_sender_balance: MoneyAmount
    previous_beneficiary_balance: MoneyAmount
    new_beneficiary_balance: MoneyAmount

    model_config = {"from_attributes": True}


class StatementEntryResponse(TransactionResponse):
    sender_name: str
    beneficiary_name: str
    operation_type: OperationType | None = None


class StatementUser(BaseModel):
    id: int
    username: str
    current_balance: MoneyAmount

    model_config = {"from_attributes": True}


class StatementResponse(BaseModel):
    message: str = "Statement retrieved successfully"
    user: StatementUser
    transactions: list[StatementEntryResponse]

    model_config = {"from_attributes": True}


class TransactionDetailResponse(BaseModel):
    message: str = "Transaction found"
    transaction: StatementEntryResponse


class TransactionListResponse(BaseModel):
    message: str = "Transactions retrieved"
    transactions: list[StatementEntryResponse]
    total: int


class TransactionStatistics(BaseModel):
    total_transactions: int
    total_sent: MoneyAmount
    total_received: MoneyAmount
    current_balance: MoneyAmount

    model_config = {"from_attributes": True}


class StatsResponse(BaseModel):
    message: str = "Statistics calculated"
    user: StatementUser
    statistics: TransactionStatistics
