"""API routers."""

from ledger_api.routers.accounts import router as accounts_router
from ledger_api.routers.categories import router as categories_router
from ledger_api.routers.tags import router as tags_router
from ledger_api.routers.transactions import router as transactions_router

__all__ = [
    "accounts_router",
    "categories_router",
    "tags_router",
    "transactions_router",
]
