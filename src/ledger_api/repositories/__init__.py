"""Repository layer for data access patterns."""

from ledger_api.repositories.account_repository import (
    AccountNotFoundError,
    AccountRepository,
)
from ledger_api.repositories.category_repository import (
    CategoryId,
    CategoryName,
    CategoryNameConflictError,
    CategoryNotFoundError,
    CategoryRef,
    CategoryRepository,
    parse_category_ref,
)
from ledger_api.repositories.tag_repository import TagNotFoundError, TagRepository
from ledger_api.repositories.transaction_repository import (
    TransactionNotFoundError,
    TransactionRepository,
    TransactionView,
)

__all__ = [
    "AccountNotFoundError",
    "AccountRepository",
    "CategoryId",
    "CategoryName",
    "CategoryNameConflictError",
    "CategoryNotFoundError",
    "CategoryRef",
    "CategoryRepository",
    "TagNotFoundError",
    "TagRepository",
    "TransactionNotFoundError",
    "TransactionRepository",
    "TransactionView",
    "parse_category_ref",
]
