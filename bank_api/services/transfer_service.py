"""
Transfer service: moves money between two accounts.

A transfer is checked in a fixed order and the first failing
check wins:

1. sender, beneficiary and amount are all given
2. the amount is positive and in whole cents
3. the sender exists
4. the beneficiary exists
5. sender and beneficiary differ
6. amounts above NON_BENEFICIARY_LIMIT need the beneficiary on
   the sender's beneficiary list
7. the sender can cover the amount

Only then are both balances updated and the ledger entry
appended and the session committed, all under one lock, so a
transfer on another session never starts from a balance older
than the last completed transfer.
"""

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.orm import Session

from bank_api.exceptions import BankingError, Forbidden, InvalidRequest, NotFound
from bank_api.models.enums import TransactionType
from bank_api.models.transaction import Transaction
from bank_api.money import is_whole_cents, parse_amount, to_money
from bank_api.repositories.account_store import AccountStore
from bank_api.repositories.ledger_store import LedgerStore

logger = logging.getLogger(__name__)

NON_BENEFICIARY_LIMIT = Decimal("5000.00")
MAX_DESCRIPTION_LENGTH = 255

# Held from the first check until the transfer is committed, so
# no other transfer sees one balance moved and the other not.
_transfer_lock = threading.Lock()


@dataclass(frozen=True)
class TransferResult:
    transaction: Transaction
    previous_sender_balance: Decimal
    new_sender_balance: Decimal
    previous_beneficiary_balance: Decimal
    new_beneficiary_balance: Decimal


def _missing(value) -> bool:
    return value is None or value == ""


class TransferService:

    def __init__(self, db: Session):
        self.db = db
        self.accounts = AccountStore(db)
        self.ledger = LedgerStore(db)

    def execute_transfer(
        self,
        sender_id,
        beneficiary_id,
        amount,
        description: str = "",
    ) -> TransferResult:
        """
        Transfer ``amount`` from sender to beneficiary.

        Commits the session on success. Raises InvalidRequest,
        NotFound or Forbidden; nothing is written when any check
        fails.
        """
        with _transfer_lock:
            try:
                result = self._execute(sender_id, beneficiary_id, amount, description)
            except BankingError as e:
                logger.warning(
                    "Transfer %s -> %s of %s rejected: %s",
                    sender_id, beneficiary_id, amount, e.message,
                )
                raise

        logger.info(
            "Transfer %s: %s -> %s amount %s",
            result.transaction.id,
            result.transaction.sender_id,
            result.transaction.beneficiary_id,
            result.transaction.amount,
        )
        return result

    def _execute(self, sender_id, beneficiary_id, amount, description) -> TransferResult:
        if _missing(sender_id) or _missing(beneficiary_id) or _missing(amount):
            raise InvalidRequest("Sender, beneficiary and amount are required")

        try:
            amount = parse_amount(amount)
        except ValueError:
            raise InvalidRequest("Amount must be a valid number") from None

        if amount <= 0:
            raise InvalidRequest("Amount must be greater than zero")

        if not is_whole_cents(amount):
            raise InvalidRequest("Amount must have at most two decimal places")
        amount = to_money(amount)

        description = description or ""
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise InvalidRequest(
                f"Description must have at most {MAX_DESCRIPTION_LENGTH} characters"
            )

        # Reload both rows: a long-lived session may hold balances
        # that another session has since changed.
        try:
            sender = self.accounts.find_by_id(sender_id, reload=True)
        except NotFound:
            raise NotFound("Sender user not found") from None

        try:
            beneficiary = self.accounts.find_by_id(beneficiary_id, reload=True)
        except NotFound:
            raise NotFound("Beneficiary user not found") from None

        if sender.id == beneficiary.id:
            raise InvalidRequest("Cannot transfer to yourself")

        if (
            amount > NON_BENEFICIARY_LIMIT
            and not self.accounts.is_beneficiary(sender.id, beneficiary.id)
        ):
            raise Forbidden(
                f"Transfers to non-beneficiaries are limited to ${NON_BENEFICIARY_LIMIT}"
            )

        if sender.balance < amount:
            raise InvalidRequest("Insufficient balance")

        previous_sender_balance = sender.balance
        previous_beneficiary_balance = beneficiary.balance
        new_sender_balance = previous_sender_balance - amount
        new_beneficiary_balance = previous_beneficiary_balance + amount

        self.accounts.update(sender.id, balance=new_sender_balance)
        self.accounts.update(beneficiary.id, balance=new_beneficiary_balance)
        transaction = self.ledger.append(
            sender_id=sender.id,
            beneficiary_id=beneficiary.id,
            amount=amount,
            description=description,
            kind=TransactionType.TRANSFER,
        )
        self.db.commit()

        return TransferResult(
            transaction=transaction,
            previous_sender_balance=previous_sender_balance,
            new_sender_balance=new_sender_balance,
            previous_beneficiary_balance=previous_beneficiary_balance,
            new_beneficiary_balance=new_beneficiary_balance,
        )
