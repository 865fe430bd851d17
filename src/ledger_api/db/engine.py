"""SQLAlchemy engine configuration and the injected connection pool owner."""

import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ledger_api.core.config import Settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, _record):  # type: ignore[no-untyped-def]
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_store_engine(
    url: str,
    *,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: float = 10.0,
    statement_timeout_ms: int = 30000,
    **kwargs: object,
) -> Engine:
    """Create an engine with bounded pool checkout and statement time.

    SQLite engines get foreign keys switched on for every connection and use
    the busy timeout as their query bound. PostgreSQL connections are opened
    with a server side ``statement_timeout``.
    """
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={
                "check_same_thread": False,
                "timeout": statement_timeout_ms / 1000,
            },
            **kwargs,
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    connect_args: dict[str, object] = {}
    if url.startswith("postgresql"):
        connect_args["options"] = f"-c statement_timeout={statement_timeout_ms}"
        connect_args["connect_timeout"] = max(1, int(pool_timeout))

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_timeout=pool_timeout,
        connect_args=connect_args,
        **kwargs,
    )


class Database:
    """Owns the engine and session factory for one application instance.

    Constructed by the composition root, opened at startup and closed at
    shutdown. Nothing in the package looks the engine up globally.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: float = 10.0,
        statement_timeout_ms: int = 30000,
    ) -> None:
        self.url = url
        self._engine_options = {
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_timeout": pool_timeout,
            "statement_timeout_ms": statement_timeout_ms,
        }
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker[Session] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build an unopened database from application settings."""
        return cls(
            settings.database_url,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            statement_timeout_ms=settings.statement_timeout_ms,
        )

    @classmethod
    def from_engine(cls, engine: Engine) -> "Database":
        """Wrap an existing engine; the result is already open."""
        database = cls(engine.url.render_as_string(hide_password=False))
        database._bind(engine)
        return database

    def _bind(self, engine: Engine) -> None:
        self._engine = engine
        self._sessionmaker = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    def open(self) -> None:
        """Create the engine and its pool. Calling it twice is a no-op."""
        if self._engine is not None:
            return
        self._bind(create_store_engine(self.url, **self._engine_options))  # type: ignore[arg-type]
        logger.info("Database pool opened (%s)", self.engine.url.render_as_string())

    def close(self) -> None:
        """Dispose of the pool, closing every pooled connection."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Database pool closed")

    def session(self) -> Session:
        """Check out a new session bound to the pool."""
        if self._sessionmaker is None:
            raise RuntimeError("Database is not open")
        return self._sessionmaker()

    def check_health(self) -> dict[str, str]:
        """Check database connectivity."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {"status": "connected"}
        except Exception as e:
            return {"status": "disconnected", "error": str(e)}
