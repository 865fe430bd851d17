"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ledger_api.core.config import Settings
from ledger_api.db.base import Base, import_models
from ledger_api.db.engine import Database, create_store_engine
from ledger_api.main import create_app
from ledger_api.models import Account, Category

# ============================================================================
# Helper functions
# ============================================================================


def get_test_database_url() -> str | None:
    """Get database URL from environment for integration tests.

    Returns None if DATABASE_URL is not set, indicating PostgreSQL is not available.
    """
    url = os.environ.get("DATABASE_URL")
    if url and url.startswith("postgresql"):
        return url
    return None


# ============================================================================
# Unit test fixtures (SQLite in-memory)
# ============================================================================


@pytest.fixture
def test_engine() -> Generator[Engine, None, None]:
    """Create an in-memory SQLite engine with foreign keys enabled.

    Uses StaticPool to share a single connection across all threads,
    so the TestClient and the test session see the same database.
    """
    engine = create_store_engine("sqlite://", poolclass=StaticPool)
    import_models()
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(test_engine: Engine) -> Generator[Session, None, None]:
    """Create a session on the in-memory database."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=test_engine
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def database(test_engine: Engine) -> Database:
    """Wrap the test engine the way the application owns it."""
    return Database.from_engine(test_engine)


@pytest.fixture
def settings() -> Settings:
    """Settings for the test application."""
    return Settings(database_url="sqlite://", debug=False)


@pytest.fixture
def client(settings: Settings, database: Database) -> TestClient:
    """Create a test client bound to the in-memory database."""
    return TestClient(create_app(settings=settings, database=database))


@pytest.fixture
def food_category(db_session: Session) -> Category:
    """An expense category named Food."""
    category = Category(name="Food", type="expense", icon="🍔", color="#F97316")
    db_session.add(category)
    db_session.commit()
    return category


@pytest.fixture
def salary_category(db_session: Session) -> Category:
    """An income category named Salary."""
    category = Category(name="Salary", type="income", icon="💰")
    db_session.add(category)
    db_session.commit()
    return category


@pytest.fixture
def visa_account(db_session: Session) -> Account:
    """A credit account named Visa."""
    account = Account(name="Visa", type="credit")
    db_session.add(account)
    db_session.commit()
    return account


# ============================================================================
# Integration test fixtures (PostgreSQL)
# ============================================================================


@pytest.fixture(scope="session")
def postgres_engine() -> Generator[Engine, None, None]:
    """Create a PostgreSQL engine with the ledger tables for integration tests."""
    url = get_test_database_url()
    if not url:
        pytest.skip("DATABASE_URL not set - skipping PostgreSQL integration tests")

    engine = create_engine(url)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        pytest.skip(f"Could not connect to PostgreSQL: {e}")

    import_models()
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def postgres_session(postgres_engine: Engine) -> Generator[Session, None, None]:
    """Create a PostgreSQL session; all ledger rows are removed afterwards."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=postgres_engine
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        with postgres_engine.connect() as conn:
            for table in ("transaction_tags", "transactions", "tags", "accounts", "categories"):
                conn.execute(text(f"DELETE FROM {table}"))
            conn.commit()


# ============================================================================
# Markers
# ============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (SQLite)")
    config.addinivalue_line("markers", "integration: Integration tests (PostgreSQL)")


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    """Automatically mark tests based on their location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "repositories" in str(item.fspath) or "queries" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
