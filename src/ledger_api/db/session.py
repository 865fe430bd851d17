"""Database session management."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ledger_api.db.engine import Database


def get_database(request: Request) -> Database:
    """Return the database owned by the running application."""
    return request.app.state.database


def get_db(
    database: Database = Depends(get_database),  # noqa: B008
) -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = database.session()
    try:
        yield db
    finally:
        db.close()


DbSession = Annotated[Session, Depends(get_db)]
