"""Business logic services."""

from ledger_api.services.stats_service import (
    MerchantSpend,
    SpendingStats,
    StatsService,
)
from ledger_api.services.transaction_service import (
    TransactionService,
    validate_transaction_input,
)

__all__ = [
    # Stats
    "MerchantSpend",
    "SpendingStats",
    "StatsService",
    # Transactions
    "TransactionService",
    "validate_transaction_input",
]
