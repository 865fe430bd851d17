"""StatsService for spending and income aggregates over a date window."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.orm import Session

from ledger_api.db.unit_of_work import reading
from ledger_api.models.transaction import Transaction


@dataclass
class MerchantSpend:
    """Expense count and total for one merchant."""

    count: int
    total: Decimal


@dataclass
class SpendingStats:
    """Aggregates for one date window."""

    total_spent: Decimal = Decimal("0")
    total_income: Decimal = Decimal("0")
    category_breakdown: dict[str, Decimal] = field(default_factory=dict)
    merchant_breakdown: dict[str, MerchantSpend] = field(default_factory=dict)


def date_window(
    start_date: date | None, end_date: date | None
) -> list[ColumnElement[bool]]:
    """Inclusive window predicates; a missing bound leaves that side open."""
    predicates: list[ColumnElement[bool]] = []
    if start_date is not None:
        predicates.append(Transaction.transaction_date >= start_date)
    if end_date is not None:
        predicates.append(Transaction.transaction_date <= end_date)
    return predicates


class StatsService:
    """Computes totals by type, expense totals by category and by merchant.

    The three aggregations run as separate queries that share one window
    predicate, so a transaction outside the window counts towards none.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the service with a database session.

        Args:
            session: SQLAlchemy database session.
        """
        self._session = session

    def compute(
        self, start_date: date | None = None, end_date: date | None = None
    ) -> SpendingStats:
        """Compute all aggregates for the window."""
        window = date_window(start_date, end_date)
        stats = SpendingStats()
        with reading("fetch stats"):
            for type_, total in self._totals_by_type(window):
                if type_ == "expense":
                    stats.total_spent = Decimal(total)
                elif type_ == "income":
                    stats.total_income = Decimal(total)
            stats.category_breakdown = self._expense_by_category(window)
            stats.merchant_breakdown = self._expense_by_merchant(window)
        return stats

    def _totals_by_type(
        self, window: list[ColumnElement[bool]]
    ) -> list[tuple[str, Decimal]]:
        stmt = (
            select(Transaction.type, func.sum(Transaction.amount))
            .where(*window)
            .group_by(Transaction.type)
        )
        return [(row[0], row[1]) for row in self._session.execute(stmt).all()]

    def _expense_by_category(
        self, window: list[ColumnElement[bool]]
    ) -> dict[str, Decimal]:
        stmt = (
            select(Transaction.category_id, func.sum(Transaction.amount))
            .where(Transaction.type == "expense", *window)
            .group_by(Transaction.category_id)
        )
        return {
            str(category_id): Decimal(total)
            for category_id, total in self._session.execute(stmt).all()
        }

    def _expense_by_merchant(
        self, window: list[ColumnElement[bool]]
    ) -> dict[str, MerchantSpend]:
        total = func.sum(Transaction.amount).label("total")
        stmt = (
            select(Transaction.merchant_name, func.count(Transaction.id), total)
            .where(Transaction.type == "expense", *window)
            .group_by(Transaction.merchant_name)
            .order_by(total.desc(), Transaction.merchant_name)
        )
        return {
            merchant: MerchantSpend(count=count, total=Decimal(amount))
            for merchant, count, amount in self._session.execute(stmt).all()
        }
