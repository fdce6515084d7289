"""Session-bound stores for accounts and the transaction ledger."""

from bank_api.repositories.account_store import AccountStore
from bank_api.repositories.ledger_store import LedgerStore

__all__ = ["AccountStore", "LedgerStore"]
