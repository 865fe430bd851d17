"""Error taxonomy shared by repositories, services and routers.

Each error carries the HTTP status it maps to. Routers never build error
responses themselves; the handlers registered in ``ledger_api.main`` turn these
exceptions into ``{"message": ...}`` bodies.
"""


class LedgerError(Exception):
    """Base class for all expected ledger failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Raised when a required field is missing or malformed."""

    status_code = 400

    def __init__(
        self, message: str, errors: dict[str, list[str]] | None = None
    ) -> None:
        super().__init__(message)
        self.errors = errors or {}


class InvalidReferenceError(LedgerError):
    """Raised when a category or account reference does not resolve."""

    status_code = 400


class NotFoundError(LedgerError):
    """Raised when an identifier has no row."""

    status_code = 404


class ConflictError(LedgerError):
    """Raised when a write violates a uniqueness constraint."""

    status_code = 400


class StoreError(LedgerError):
    """Raised for connection, timeout or unexpected database failures.

    The public message never contains driver detail; ``detail`` holds it for
    logging and for development mode responses.
    """

    status_code = 500

    def __init__(self, operation: str, detail: str | None = None) -> None:
        super().__init__(f"Failed to {operation}")
        self.operation = operation
        self.detail = detail
