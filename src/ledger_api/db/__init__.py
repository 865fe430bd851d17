"""Database module for Ledger API."""

from ledger_api.db.base import Base
from ledger_api.db.engine import Database, create_store_engine
from ledger_api.db.session import DbSession, get_db
from ledger_api.db.unit_of_work import reading, unit_of_work

__all__ = [
    "Base",
    "Database",
    "DbSession",
    "create_store_engine",
    "get_db",
    "reading",
    "unit_of_work",
]
