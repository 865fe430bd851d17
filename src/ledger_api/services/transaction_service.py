"""TransactionService: validated, atomic writes and denormalized reads."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy.orm import Session

from ledger_api.core.errors import ValidationError
from ledger_api.db.base import utcnow
from ledger_api.db.unit_of_work import reading, unit_of_work
from ledger_api.models.transaction import TRANSACTION_TYPES, Transaction
from ledger_api.queries.transaction_query import TransactionFilters
from ledger_api.repositories.account_repository import AccountRepository
from ledger_api.repositories.category_repository import (
    CategoryRef,
    CategoryRepository,
    parse_category_ref,
)
from ledger_api.repositories.tag_repository import TagRepository
from ledger_api.repositories.transaction_repository import (
    TransactionNotFoundError,
    TransactionRepository,
    TransactionView,
)
from ledger_api.schemas.transaction import TransactionCreate, TransactionUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("merchant", "amount", "type", "category", "date")
UPDATABLE_FIELDS = frozenset(
    {
        "merchant",
        "amount",
        "type",
        "category",
        "date",
        "time",
        "tags",
        "notes",
        "payment_method",
    }
)
CENTS = Decimal("0.01")
# Numeric(12, 2) holds at most ten integer digits
MAX_AMOUNT = Decimal("1e10")

_FIELD_LABELS = {
    "merchant": "Merchant",
    "amount": "Amount",
    "type": "Type",
    "category": "Category",
    "date": "Date",
}


@dataclass
class TransactionInput:
    """Validated transaction fields; only keys that were supplied are set."""

    values: dict[str, Any] = field(default_factory=dict)

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __getitem__(self, name: str) -> Any:
        return self.values[name]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value: Any) -> Decimal:
    """Parse a non-negative amount rounded to cents.

    Raises:
        ValueError: If the value is not a finite number, is negative or does
            not fit the amount column.
    """
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError("Amount must be a number") from None
    if not amount.is_finite():
        raise ValueError("Amount must be a number")
    if amount < 0:
        raise ValueError("Amount must be a positive number")
    try:
        amount = amount.quantize(CENTS)
    except InvalidOperation:
        raise ValueError("Amount is too large") from None
    if amount >= MAX_AMOUNT:
        raise ValueError("Amount is too large")
    return amount


def parse_occurrence(value: str) -> tuple[date, time | None]:
    """Split an ISO date or date-time into calendar date and time of day.

    A bare date has no time of day; it is shown as midnight on read.

    Raises:
        ValueError: If the value is not a valid ISO date or date-time.
    """
    text = value.strip()
    if "T" in text or " " in text:
        moment = datetime.fromisoformat(text)
        return moment.date(), moment.time()
    return date.fromisoformat(text), None


def normalize_tags(names: list[str] | None) -> list[str]:
    """Trim tag names, drop blanks and duplicates, keep first-seen order."""
    cleaned = (name.strip() for name in names or [])
    return list(dict.fromkeys(name for name in cleaned if name))


def validate_transaction_input(
    data: dict[str, Any], *, partial: bool
) -> TransactionInput:
    """Validate raw request fields, collecting every problem per field.

    Args:
        data: Field values keyed by schema field name.
        partial: True for updates, where only supplied fields are checked.

    Returns:
        The parsed values.

    Raises:
        ValidationError: With per-field messages, before anything is written.
    """
    errors: dict[str, list[str]] = {}
    values: dict[str, Any] = {}
    missing = False

    for name in REQUIRED_FIELDS:
        if (not partial or name in data) and _is_blank(data.get(name)):
            verb = "is required" if not partial else "cannot be empty"
            errors.setdefault(name, []).append(f"{_FIELD_LABELS[name]} {verb}")
            missing = True

    if not _is_blank(data.get("merchant")):
        values["merchant"] = data["merchant"].strip()

    if not _is_blank(data.get("type")):
        if data["type"] not in TRANSACTION_TYPES:
            errors.setdefault("type", []).append(
                'Invalid type. Must be "expense" or "income"'
            )
        else:
            values["type"] = data["type"]

    if not _is_blank(data.get("amount")):
        try:
            values["amount"] = parse_amount(data["amount"])
        except ValueError as e:
            errors.setdefault("amount", []).append(str(e))

    if not _is_blank(data.get("category")):
        values["category"] = parse_category_ref(data["category"])

    if not _is_blank(data.get("date")):
        try:
            values["date"] = parse_occurrence(data["date"])
        except ValueError:
            errors.setdefault("date", []).append("Invalid date format")

    if "time" in data:
        if _is_blank(data["time"]):
            values["time"] = None
        else:
            try:
                values["time"] = time.fromisoformat(data["time"].strip())
            except ValueError:
                errors.setdefault("time", []).append("Invalid time format")

    if "tags" in data:
        values["tags"] = normalize_tags(data["tags"])
    if "notes" in data:
        values["notes"] = data["notes"]
    if "payment_method" in data:
        method = data["payment_method"]
        values["payment_method"] = None if _is_blank(method) else method.strip()

    if errors:
        message = "Missing required fields" if missing else "Invalid transaction data"
        raise ValidationError(message, errors)
    return TransactionInput(values)


class TransactionService:
    """Orchestrates transaction writes as single units of work.

    Every create or update resolves its category, account and tags inside the
    same database transaction as the row write, so a failure at any step
    leaves nothing behind. Results are re-read through the denormalized view
    so writes and reads return the same shape.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the service with a database session.

        Args:
            session: SQLAlchemy database session for this request.
        """
        self._session = session
        self._transactions = TransactionRepository(session)
        self._categories = CategoryRepository(session)
        self._accounts = AccountRepository(session)
        self._tags = TagRepository(session)

    # --- Reads ---

    def get(self, transaction_id: uuid.UUID) -> TransactionView:
        """Fetch one transaction.

        Raises:
            TransactionNotFoundError: If transaction doesn't exist.
        """
        with reading("fetch transaction"):
            view = self._transactions.get_view(transaction_id)
        if view is None:
            raise TransactionNotFoundError("Transaction not found")
        return view

    def search(self, filters: TransactionFilters) -> list[TransactionView]:
        """Fetch transactions matching ``filters``."""
        with reading("fetch transactions"):
            return self._transactions.list_views(filters)

    # --- Writes ---

    def create(self, payload: TransactionCreate) -> TransactionView:
        """Create a transaction with its account and tag links.

        Raises:
            ValidationError: If input is missing or malformed.
            InvalidReferenceError: If the category does not resolve.
            ConflictError: If the row violates a uniqueness constraint.
            StoreError: On any other database failure.
        """
        fields = validate_transaction_input(
            payload.model_dump(exclude_unset=True), partial=False
        )
        transaction_date, transaction_time = fields["date"]
        if "time" in fields:
            transaction_time = fields["time"]

        with unit_of_work(
            self._session,
            "create transaction",
            conflict_message="Transaction already exists",
        ):
            category_id = self._resolve_category(fields["category"])
            account_id = self._resolve_account(fields.values.get("payment_method"))
            transaction = self._transactions.add(
                Transaction(
                    merchant_name=fields["merchant"],
                    amount=fields["amount"],
                    type=fields["type"],
                    category_id=category_id,
                    account_id=account_id,
                    transaction_date=transaction_date,
                    transaction_time=transaction_time,
                    notes=fields.values.get("notes"),
                    source="manual",
                )
            )
            self._transactions.replace_tags(
                transaction.id, self._resolve_tags(fields.values.get("tags", []))
            )
            transaction_id = transaction.id

        logger.info("Created transaction %s", transaction_id)
        return self.get(transaction_id)

    def update(
        self, transaction_id: uuid.UUID, payload: TransactionUpdate
    ) -> TransactionView:
        """Apply a partial update; a supplied tag list replaces all links.

        Raises:
            ValidationError: If no fields are supplied or a value is malformed.
            TransactionNotFoundError: If transaction doesn't exist.
            InvalidReferenceError: If the category does not resolve.
            StoreError: On any other database failure.
        """
        present = payload.model_fields_set & UPDATABLE_FIELDS
        if not present:
            raise ValidationError("No fields to update")
        fields = validate_transaction_input(
            payload.model_dump(include=set(present)), partial=True
        )

        with unit_of_work(
            self._session,
            "update transaction",
            conflict_message="Transaction already exists",
        ):
            transaction = self._transactions.get(transaction_id)

            if "merchant" in fields:
                transaction.merchant_name = fields["merchant"]
            if "amount" in fields:
                transaction.amount = fields["amount"]
            if "type" in fields:
                transaction.type = fields["type"]
            if "category" in fields:
                transaction.category_id = self._resolve_category(fields["category"])
            if "payment_method" in fields:
                transaction.account_id = self._resolve_account(fields["payment_method"])
            if "date" in fields:
                transaction.transaction_date, transaction.transaction_time = fields["date"]
            if "time" in fields:
                transaction.transaction_time = fields["time"]
            if "notes" in fields:
                transaction.notes = fields["notes"]
            transaction.updated_at = utcnow()
            self._session.flush()

            if "tags" in fields:
                self._transactions.replace_tags(
                    transaction.id, self._resolve_tags(fields["tags"])
                )

        logger.info("Updated transaction %s (%s)", transaction_id, ", ".join(sorted(present)))
        return self.get(transaction_id)

    def delete(self, transaction_id: uuid.UUID) -> None:
        """Delete a transaction and its tag links.

        Raises:
            TransactionNotFoundError: If transaction doesn't exist.
        """
        with unit_of_work(self._session, "delete transaction"):
            self._transactions.delete(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)

    # --- Resolution helpers ---

    def _resolve_category(self, ref: CategoryRef) -> uuid.UUID:
        return self._categories.resolve(ref)

    def _resolve_account(self, payment_method: str | None) -> uuid.UUID | None:
        if payment_method is None:
            return None
        return self._accounts.get_or_create(payment_method).id

    def _resolve_tags(self, names: list[str]) -> list[uuid.UUID]:
        return [self._tags.find_or_create(name).id for name in names]
