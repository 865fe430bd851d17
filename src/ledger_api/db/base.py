"""SQLAlchemy declarative base."""

from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


# Import all models here for Alembic to discover them
# This ensures all models are registered with the Base.metadata
def import_models() -> None:
    """Import all models to register them with SQLAlchemy metadata."""
    from ledger_api.models import (  # noqa: F401
        Account,
        Category,
        Tag,
        Transaction,
        TransactionTag,
    )


def utcnow() -> datetime:
    """Naive UTC timestamp used for created_at/updated_at columns."""
    return datetime.now(UTC).replace(tzinfo=None)
