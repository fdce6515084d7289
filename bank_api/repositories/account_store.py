"""
Account store: lookup, creation and updates of accounts.

The store is deliberately dumb. Uniqueness of username and
email is checked by the callers before create(), and update()
writes whatever it is given. Business rules live in the
services.
"""

from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from bank_api.exceptions import NotFound
from bank_api.models.account import Account, beneficiary_links
from bank_api.money import to_money


def as_id(value) -> int | None:
    """Coerce an id given as int or numeric string. None if impossible."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class AccountStore:

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        username: str,
        password_hash: str,
        email: str,
        initial_balance: Decimal = Decimal("0.00"),
    ) -> Account:
        """Insert an account with the next free id (max + 1, or 1)."""
        current_max = self.db.execute(select(func.max(Account.id))).scalar()
        account = Account(
            id=(current_max or 0) + 1,
            username=username,
            password_hash=password_hash,
            email=email,
            balance=to_money(initial_balance),
        )
        self.db.add(account)
        self.db.flush()
        return account

    def find_by_id(self, account_id, reload: bool = False) -> Account:
        """
        Get an account by ID. Raises NotFound when absent.

        With ``reload`` the row is read from the database even when
        the session already holds the account.
        """
        key = as_id(account_id)
        account = (
            self.db.get(Account, key, populate_existing=reload)
            if key is not None else None
        )
        if not account:
            raise NotFound("User not found")
        return account

    def find_by_username(self, username: str) -> Account | None:
        return self.db.execute(
            select(Account).where(Account.username == username)
        ).scalar_one_or_none()

    def find_by_email(self, email: str) -> Account | None:
        return self.db.execute(
            select(Account).where(Account.email == email)
        ).scalar_one_or_none()

    def update(self, account_id, **fields) -> Account | None:
        """
        Merge the given fields into the stored account.

        ``beneficiaries`` is given as a list of account ids; ids
        that match no account are dropped. Returns None when the
        account does not exist.
        """
        key = as_id(account_id)
        account = self.db.get(Account, key) if key is not None else None
        if not account:
            return None

        for name, value in fields.items():
            if name == "beneficiaries":
                ids = [i for i in (as_id(v) for v in value) if i is not None]
                found = {
                    a.id: a for a in self.db.execute(
                        select(Account).where(Account.id.in_(ids))
                    ).scalars()
                } if ids else {}
                value = [found[i] for i in dict.fromkeys(ids) if i in found]
            elif name == "balance":
                value = to_money(value)
            setattr(account, name, value)

        self.db.flush()
        return account

    def list_all(self) -> list[Account]:
        """All accounts in id order."""
        accounts = self.db.execute(
            select(Account).order_by(Account.id)
        ).scalars().all()
        return list(accounts)

    def is_beneficiary(self, owner_id, candidate_id) -> bool:
        """True iff candidate_id is in owner_id's beneficiary set."""
        owner, candidate = as_id(owner_id), as_id(candidate_id)
        if owner is None or candidate is None:
            return False
        link = self.db.execute(
            select(beneficiary_links.c.owner_id).where(
                beneficiary_links.c.owner_id == owner,
                beneficiary_links.c.beneficiary_id == candidate,
            )
        ).first()
        return link is not None
