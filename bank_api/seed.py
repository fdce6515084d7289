"""
Demo data loaded at startup.

Two accounts: ``admin`` with 10000.00 who lists ``user1`` as a
beneficiary, and ``user1`` with 5000.00 and no beneficiaries.
Both log in with the password ``password``.
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from bank_api.repositories.account_store import AccountStore
from bank_api.services.auth_service import hash_password

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"


def seed_demo_data(db: Session) -> bool:
    """
    Create the demo accounts if the store is empty.

    Returns True when data was added. Commits on success.
    """
    accounts = AccountStore(db)
    if accounts.list_all():
        return False

    password_hash = hash_password(DEMO_PASSWORD)
    admin = accounts.create(
        username="admin",
        password_hash=password_hash,
        email="admin@example.com",
        initial_balance=Decimal("10000.00"),
    )
    user1 = accounts.create(
        username="user1",
        password_hash=password_hash,
        email="user1@example.com",
        initial_balance=Decimal("5000.00"),
    )
    accounts.update(admin.id, beneficiaries=[user1.id])
    db.commit()

    logger.info("Seeded demo accounts %s and %s", admin.username, user1.username)
    return True
