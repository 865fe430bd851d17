"""TransactionRepository for ledger rows, tag links and denormalized reads."""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from sqlalchemy import delete
from sqlalchemy.orm import Session

from ledger_api.core.errors import NotFoundError
from ledger_api.models.tag import TransactionTag
from ledger_api.models.transaction import Transaction
from ledger_api.queries.transaction_query import (
    TransactionFilters,
    build_transaction_by_id_query,
    build_transaction_query,
)
from ledger_api.repositories.tag_repository import TagRepository


class TransactionNotFoundError(NotFoundError):
    """Raised when a transaction is not found."""

    pass


@dataclass
class TransactionView:
    """A transaction joined with its category, account and tags."""

    id: uuid.UUID
    merchant: str
    amount: Decimal
    type: str
    category_id: uuid.UUID
    category_icon: str | None
    transaction_date: date
    transaction_time: time | None
    tags: list[str]
    notes: str | None
    account_name: str | None
    created_at: datetime
    updated_at: datetime

    @property
    def occurred_at(self) -> datetime:
        """Date and time combined; a missing time counts as midnight."""
        return datetime.combine(self.transaction_date, self.transaction_time or time())


def _to_view(row: Any) -> TransactionView:
    return TransactionView(
        id=row.id,
        merchant=row.merchant_name,
        amount=Decimal(row.amount),
        type=row.type,
        category_id=row.category_id,
        category_icon=row.category_icon,
        transaction_date=row.transaction_date,
        transaction_time=row.transaction_time,
        tags=sorted(row.tags or []),
        notes=row.notes,
        account_name=row.account_name,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class TransactionRepository:
    """Repository for transaction rows and their tag associations."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy database session.
        """
        self._session = session

    def add(self, transaction: Transaction) -> Transaction:
        """Insert a transaction row and assign its identifier."""
        self._session.add(transaction)
        self._session.flush()
        return transaction

    def get(self, transaction_id: uuid.UUID) -> Transaction:
        """Get a transaction row by ID.

        Raises:
            TransactionNotFoundError: If transaction doesn't exist.
        """
        transaction = self._session.get(Transaction, transaction_id)
        if transaction is None:
            raise TransactionNotFoundError("Transaction not found")
        return transaction

    def replace_tags(
        self, transaction_id: uuid.UUID, tag_ids: Iterable[uuid.UUID]
    ) -> None:
        """Make the transaction's tag links exactly ``tag_ids``.

        Existing links are always deleted first and the new set re-inserted,
        so no stale link survives.
        """
        self._session.execute(
            delete(TransactionTag).where(TransactionTag.transaction_id == transaction_id)
        )
        for tag_id in dict.fromkeys(tag_ids):
            self._session.add(TransactionTag(transaction_id=transaction_id, tag_id=tag_id))
        self._session.flush()

    def delete(self, transaction_id: uuid.UUID) -> None:
        """Delete a transaction and its tag links.

        Raises:
            TransactionNotFoundError: If transaction doesn't exist.
        """
        transaction = self.get(transaction_id)
        self._session.execute(
            delete(TransactionTag).where(TransactionTag.transaction_id == transaction_id)
        )
        self._session.delete(transaction)
        self._session.flush()

    def get_view(self, transaction_id: uuid.UUID) -> TransactionView | None:
        """Fetch one transaction in its denormalized shape."""
        row = self._session.execute(build_transaction_by_id_query(transaction_id)).first()
        return _to_view(row) if row is not None else None

    def list_views(self, filters: TransactionFilters) -> list[TransactionView]:
        """Fetch transactions matching ``filters`` in display order.

        Tag names are resolved to identifiers first; names that match no tag
        simply narrow the result, possibly to nothing.
        """
        tag_ids = None
        if filters.tags:
            tag_ids = TagRepository(self._session).get_ids_by_names(filters.tags)
        rows = self._session.execute(build_transaction_query(filters, tag_ids)).all()
        return [_to_view(row) for row in rows]
