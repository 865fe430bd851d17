"""SQLAlchemy models for the Ledger API."""

from ledger_api.models.account import Account
from ledger_api.models.category import Category
from ledger_api.models.tag import Tag, TransactionTag
from ledger_api.models.transaction import Transaction

__all__ = [
    "Account",
    "Category",
    "Tag",
    "Transaction",
    "TransactionTag",
]
