"""
Statement service: read-only views over the ledger.

Ledger entries are joined with account usernames and, when
viewed from one account, tagged as sent or received. Nothing
here writes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from bank_api.exceptions import Forbidden, InvalidRequest, NotFound
from bank_api.models.enums import OperationType, TransactionStatus, TransactionType
from bank_api.models.transaction import Transaction
from bank_api.repositories.account_store import AccountStore, as_id
from bank_api.repositories.ledger_store import LedgerStore

# Shown in place of a username whose account no longer resolves.
UNKNOWN_ACCOUNT_NAME = "User not found"

DEFAULT_STATEMENT_LIMIT = 10
STATS_LIMIT = 1000


@dataclass(frozen=True)
class StatementEntry:
    id: int
    sender_id: int
    beneficiary_id: int
    amount: Decimal
    description: str
    transaction_type: TransactionType
    status: TransactionStatus
    created_at: datetime
    sender_name: str
    beneficiary_name: str
    operation_type: OperationType | None = None


@dataclass(frozen=True)
class AccountSummary:
    id: int
    username: str
    current_balance: Decimal


@dataclass(frozen=True)
class Statement:
    user: AccountSummary
    transactions: list[StatementEntry] = field(default_factory=list)


@dataclass(frozen=True)
class TransactionStats:
    user: AccountSummary
    total_transactions: int
    total_sent: Decimal
    total_received: Decimal
    current_balance: Decimal


class StatementService:

    def __init__(self, db: Session):
        self.db = db
        self.accounts = AccountStore(db)
        self.ledger = LedgerStore(db)

    def _username(self, account_id) -> str:
        try:
            return self.accounts.find_by_id(account_id).username
        except NotFound:
            return UNKNOWN_ACCOUNT_NAME

    def _enrich(
        self, txn: Transaction, viewer_id: int | None = None
    ) -> StatementEntry:
        operation_type = None
        if viewer_id is not None:
            operation_type = (
                OperationType.SENT if txn.sender_id == viewer_id
                else OperationType.RECEIVED
            )
        return StatementEntry(
            id=txn.id,
            sender_id=txn.sender_id,
            beneficiary_id=txn.beneficiary_id,
            amount=txn.amount,
            description=txn.description,
            transaction_type=txn.transaction_type,
            status=txn.status,
            created_at=txn.created_at,
            sender_name=self._username(txn.sender_id),
            beneficiary_name=self._username(txn.beneficiary_id),
            operation_type=operation_type,
        )

    def statement_for(
        self, account_id, limit: int = DEFAULT_STATEMENT_LIMIT
    ) -> Statement:
        """The account's latest ``limit`` transactions, newest first."""
        account = self.accounts.find_by_id(account_id)
        if limit < 1:
            raise InvalidRequest("Limit must be a positive number")

        transactions = self.ledger.recent_for_account(account.id, limit)
        return Statement(
            user=AccountSummary(
                id=account.id,
                username=account.username,
                current_balance=account.balance,
            ),
            transactions=[self._enrich(t, account.id) for t in transactions],
        )

    def transaction_by_id(self, transaction_id, requesting_account_id) -> StatementEntry:
        """
        One transaction, visible only to its sender or beneficiary.
        """
        txn = self.ledger.find_by_id(transaction_id)
        if not txn:
            raise NotFound("Transaction not found")

        viewer_id = as_id(requesting_account_id)
        if viewer_id not in (txn.sender_id, txn.beneficiary_id):
            raise Forbidden("Access denied to this transaction")

        return self._enrich(txn, viewer_id)

    def all_transactions(self) -> list[StatementEntry]:
        """Every ledger entry with both usernames. Administrative view."""
        return [self._enrich(t) for t in self.ledger.find_all()]

    def stats_for(self, account_id) -> TransactionStats:
        statement = self.statement_for(account_id, STATS_LIMIT)
        sent = [t.amount for t in statement.transactions
                if t.operation_type == OperationType.SENT]
        received = [t.amount for t in statement.transactions
                    if t.operation_type == OperationType.RECEIVED]
        return TransactionStats(
            user=statement.user,
            total_transactions=len(statement.transactions),
            total_sent=sum(sent, Decimal("0.00")),
            total_received=sum(received, Decimal("0.00")),
            current_balance=statement.user.current_balance,
        )
