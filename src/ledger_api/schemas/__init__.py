"""Pydantic schemas for API request/response validation."""

from ledger_api.schemas.catalog import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    TagCreate,
    TagResponse,
)
from ledger_api.schemas.transaction import (
    MerchantTotals,
    SpendingStatsResponse,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)

__all__ = [
    "AccountCreate",
    "AccountResponse",
    "AccountUpdate",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "MerchantTotals",
    "SpendingStatsResponse",
    "TagCreate",
    "TagResponse",
    "TransactionCreate",
    "TransactionResponse",
    "TransactionUpdate",
]
