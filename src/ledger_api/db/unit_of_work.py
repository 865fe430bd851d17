"""Transaction boundaries and SQLAlchemy error translation."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ledger_api.core.errors import (
    ConflictError,
    InvalidReferenceError,
    LedgerError,
    StoreError,
)

logger = logging.getLogger(__name__)

FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"


def _sqlstate(exc: IntegrityError) -> str | None:
    # psycopg 3 exposes sqlstate, psycopg2 pgcode
    return getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    code = _sqlstate(exc)
    if code is not None:
        return code == FOREIGN_KEY_VIOLATION
    return "FOREIGN KEY" in str(exc.orig).upper()


def is_unique_violation(exc: IntegrityError) -> bool:
    code = _sqlstate(exc)
    if code is not None:
        return code == UNIQUE_VIOLATION
    return "UNIQUE" in str(exc.orig).upper()


@contextmanager
def unit_of_work(
    session: Session,
    operation: str,
    *,
    reference_message: str = "Invalid category or account reference",
    conflict_message: str = "Record already exists",
) -> Iterator[Session]:
    """Run the enclosed writes as one atomic transaction.

    Commits when the block completes. On any failure the session is rolled
    back before the error propagates, so no partial write is ever visible.
    Integrity errors become reference or conflict errors; any other database
    failure becomes a ``StoreError`` for ``operation``.
    """
    try:
        yield session
        session.commit()
    except LedgerError:
        session.rollback()
        raise
    except IntegrityError as exc:
        session.rollback()
        if is_foreign_key_violation(exc):
            logger.warning("%s rejected: foreign key violation", operation)
            raise InvalidReferenceError(reference_message) from exc
        if is_unique_violation(exc):
            logger.warning("%s rejected: unique violation", operation)
            raise ConflictError(conflict_message) from exc
        logger.exception("%s failed with an integrity error", operation)
        raise StoreError(operation, str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("%s failed", operation)
        raise StoreError(operation, str(exc)) from exc
    except Exception:
        session.rollback()
        raise


@contextmanager
def reading(operation: str) -> Iterator[None]:
    """Translate database failures raised by plain reads."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("%s failed", operation)
        raise StoreError(operation, str(exc)) from exc
