"""
Ledger store: the append-only list of completed transfers.

There is no update or delete path. Once append() returns, the
entry is final.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from bank_api.models.base import utcnow
from bank_api.models.enums import TransactionType, TransactionStatus
from bank_api.models.transaction import Transaction
from bank_api.money import to_money
from bank_api.repositories.account_store import as_id


class LedgerStore:
    """
    All ledger reads and writes pass through this store.

    The store takes a database session as a constructor
    argument and never commits. The caller controls the
    transaction boundary.
    """

    def __init__(self, db: Session):
        self.db = db

    def append(
        self,
        sender_id: int,
        beneficiary_id: int,
        amount: Decimal,
        description: str = "",
        kind: TransactionType = TransactionType.TRANSFER,
    ) -> Transaction:
        """Record a completed transfer under the next sequential id."""
        current_max = self.db.execute(select(func.max(Transaction.id))).scalar()
        txn = Transaction(
            id=(current_max or 0) + 1,
            sender_id=sender_id,
            beneficiary_id=beneficiary_id,
            amount=to_money(amount),
            description=description or "",
            transaction_type=kind,
            status=TransactionStatus.COMPLETED,
            created_at=utcnow(),
        )
        self.db.add(txn)
        self.db.flush()
        return txn

    def find_by_id(self, transaction_id) -> Transaction | None:
        key = as_id(transaction_id)
        if key is None:
            return None
        return self.db.get(Transaction, key)

    def find_all(self) -> list[Transaction]:
        """Every ledger entry, oldest first."""
        entries = self.db.execute(
            select(Transaction).order_by(Transaction.id)
        ).scalars().all()
        return list(entries)

    def _involving(self, account_id):
        key = as_id(account_id)
        return or_(
            Transaction.sender_id == key,
            Transaction.beneficiary_id == key,
        )

    def find_by_account(self, account_id) -> list[Transaction]:
        """Entries where the account is sender or beneficiary, oldest first."""
        entries = self.db.execute(
            select(Transaction)
            .where(self._involving(account_id))
            .order_by(Transaction.id)
        ).scalars().all()
        return list(entries)

    def recent_for_account(self, account_id, limit: int = 10) -> list[Transaction]:
        """The account's newest ``limit`` entries, newest first."""
        entries = self.db.execute(
            select(Transaction)
            .where(self._involving(account_id))
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .limit(limit)
        ).scalars().all()
        return list(entries)

    def find_by_date_range(
        self, account_id, start: datetime, end: datetime
    ) -> list[Transaction]:
        """Entries for the account created between start and end, inclusive."""
        entries = self.db.execute(
            select(Transaction)
            .where(
                self._involving(account_id),
                Transaction.created_at >= start,
                Transaction.created_at <= end,
            )
            .order_by(Transaction.created_at, Transaction.id)
        ).scalars().all()
        return list(entries)
