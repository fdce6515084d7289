"""
User service: profiles and beneficiary lists.
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from bank_api.exceptions import InvalidRequest, NotFound
from bank_api.models.account import Account
from bank_api.repositories.account_store import AccountStore, as_id
from bank_api.schemas.user import AccountUpdate

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: Session):
        self.db = db
        self.accounts = AccountStore(db)

    def get_all_users(self) -> list[Account]:
        return self.accounts.list_all()

    def get_user(self, account_id) -> Account:
        return self.accounts.find_by_id(account_id)

    def _require_beneficiary(self, beneficiary_id) -> Account:
        try:
            return self.accounts.find_by_id(beneficiary_id)
        except NotFound:
            raise NotFound("Beneficiary user not found") from None

    def update_user(self, account_id, request: AccountUpdate) -> Account:
        """
        Apply a typed update to the account.

        Only email and the beneficiary list can change. A new
        beneficiary list replaces the old one and is checked the
        same way add_beneficiary checks a single entry.
        """
        fields = request.model_dump(exclude_none=True)
        if not fields:
            raise InvalidRequest("No valid fields provided for update")

        account = self.accounts.find_by_id(account_id)

        if "email" in fields:
            holder = self.accounts.find_by_email(fields["email"])
            if holder and holder.id != account.id:
                raise InvalidRequest("User with this email already exists")

        if "beneficiaries" in fields:
            ids = list(dict.fromkeys(fields["beneficiaries"]))
            for beneficiary_id in ids:
                if beneficiary_id == account.id:
                    raise InvalidRequest("Cannot add yourself as a beneficiary")
                self._require_beneficiary(beneficiary_id)
            fields["beneficiaries"] = ids

        updated = self.accounts.update(account.id, **fields)
        if updated is None:
            raise NotFound("User not found")
        logger.info("Updated account %s fields %s", account.id, sorted(fields))
        return updated

    def add_beneficiary(self, account_id, beneficiary_id) -> Account:
        """Authorize beneficiary_id for transfers above the limit."""
        account = self.accounts.find_by_id(account_id)
        beneficiary = self._require_beneficiary(beneficiary_id)

        if account.id == beneficiary.id:
            raise InvalidRequest("Cannot add yourself as a beneficiary")

        if beneficiary.id in account.beneficiary_ids:
            raise InvalidRequest("User is already in the beneficiaries list")

        updated = self.accounts.update(
            account.id, beneficiaries=account.beneficiary_ids + [beneficiary.id]
        )
        logger.info("Account %s added beneficiary %s", account.id, beneficiary.id)
        return updated

    def remove_beneficiary(self, account_id, beneficiary_id) -> Account:
        account = self.accounts.find_by_id(account_id)
        key = as_id(beneficiary_id)

        if key not in account.beneficiary_ids:
            raise InvalidRequest("User is not in the beneficiaries list")

        updated = self.accounts.update(
            account.id,
            beneficiaries=[i for i in account.beneficiary_ids if i != key],
        )
        logger.info("Account %s removed beneficiary %s", account.id, key)
        return updated

    def get_balance(self, account_id) -> Decimal:
        return self.accounts.find_by_id(account_id).balance
