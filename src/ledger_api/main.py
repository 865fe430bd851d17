"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ledger_api import __version__
from ledger_api.core.config import Settings, get_settings
from ledger_api.core.errors import LedgerError, StoreError, ValidationError
from ledger_api.core.logging import configure_logging
from ledger_api.db.engine import Database
from ledger_api.routers import (
    accounts_router,
    categories_router,
    tags_router,
    transactions_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the connection pool at startup and dispose of it at shutdown."""
    database: Database = app.state.database
    database.open()
    try:
        yield
    finally:
        database.close()


def _error_body(exc: LedgerError, settings: Settings) -> dict[str, object]:
    body: dict[str, object] = {"message": exc.message}
    if isinstance(exc, ValidationError) and exc.errors:
        body["errors"] = exc.errors
    if isinstance(exc, StoreError) and settings.debug and exc.detail:
        body["error"] = exc.detail
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy to stable status/message pairs."""

    @app.exception_handler(LedgerError)
    async def handle_ledger_error(request: Request, exc: LedgerError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc, request.app.state.settings),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            location = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
            errors.setdefault(".".join(location) or "request", []).append(error["msg"])
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Something went wrong!"},
        )


def create_app(
    settings: Settings | None = None, database: Database | None = None
) -> FastAPI:
    """Compose the application.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
        database: Database to serve from; built from settings when omitted.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Ledger API",
        description="Personal finance ledger API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Register routers
    app.include_router(transactions_router, prefix="/api", tags=["transactions"])
    app.include_router(categories_router, prefix="/api", tags=["categories"])
    app.include_router(accounts_router, prefix="/api", tags=["accounts"])
    app.include_router(tags_router, prefix="/api", tags=["tags"])

    @app.get("/health")
    def health_check(request: Request) -> dict[str, str | dict[str, str]]:
        """Health check endpoint with database status."""
        db_status = check_database_health(request.app.state.database)
        overall_status = "healthy" if db_status["status"] == "connected" else "degraded"
        return {
            "status": overall_status,
            "version": __version__,
            "database": db_status,
        }

    @app.get("/")
    def root() -> dict[str, object]:
        """Root endpoint."""
        return {
            "message": "Ledger API",
            "version": __version__,
            "endpoints": {
                "health": "/health",
                "transactions": "/api/transactions",
                "categories": "/api/categories",
                "accounts": "/api/accounts",
                "tags": "/api/tags",
            },
        }

    return app


def check_database_health(database: Database) -> dict[str, str]:
    """Check database connectivity."""
    if not database.is_open:
        return {"status": "disconnected", "error": "Database pool is not open"}
    return database.check_health()


app = create_app()


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
