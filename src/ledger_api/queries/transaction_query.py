"""Builds the denormalized transaction read query from a filter set.

Every filter that is present appends one predicate and one bound parameter to
an ordered list. Parameters are named ``p1``, ``p2``... in the order filters
are applied, so the same filter set always compiles to the same statement
with the same parameter mapping. The builder never touches the database: tag
names must be resolved to identifiers by the caller first.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from sqlalchemy import Date, Integer, Select, String, Uuid, bindparam, false, select
from sqlalchemy.sql.elements import BindParameter, ColumnElement

from ledger_api.db.aggregates import json_name_array
from ledger_api.models.account import Account
from ledger_api.models.category import Category
from ledger_api.models.tag import Tag, TransactionTag
from ledger_api.models.transaction import Transaction


@dataclass
class TransactionFilters:
    """Optional constraints for listing transactions. None means unconstrained."""

    start_date: date | None = None
    end_date: date | None = None
    categories: list[uuid.UUID] | None = None
    merchants: list[str] | None = None
    tags: list[str] | None = None
    type: str | None = None
    limit: int | None = None
    offset: int | None = None


@dataclass
class PredicateList:
    """Ordered (predicate, parameter) pairs with sequential parameter names."""

    pairs: list[tuple[ColumnElement[bool], BindParameter[Any] | None]] = field(
        default_factory=list
    )
    _count: int = 0

    def param(
        self, value: Any, type_: Any = None, *, expanding: bool = False
    ) -> BindParameter[Any]:
        """Allocate the next numbered parameter."""
        self._count += 1
        return bindparam(f"p{self._count}", value, type_=type_, expanding=expanding)

    def add(
        self, predicate: ColumnElement[bool], parameter: BindParameter[Any] | None
    ) -> None:
        self.pairs.append((predicate, parameter))

    @property
    def predicates(self) -> list[ColumnElement[bool]]:
        return [predicate for predicate, _ in self.pairs]

    @property
    def parameters(self) -> dict[str, Any]:
        return {p.key: p.value for _, p in self.pairs if p is not None}


def denormalized_view() -> Select[Any]:
    """Projection shared by single and list reads.

    One row per transaction with its category icon, account name and the
    JSON array of its tag names.
    """
    return (
        select(
            Transaction.id,
            Transaction.merchant_name,
            Transaction.amount,
            Transaction.type,
            Transaction.category_id,
            Category.icon.label("category_icon"),
            Transaction.transaction_date,
            Transaction.transaction_time,
            json_name_array(Tag.name).label("tags"),
            Transaction.notes,
            Account.name.label("account_name"),
            Transaction.created_at,
            Transaction.updated_at,
        )
        .select_from(Transaction)
        .outerjoin(Category, Transaction.category_id == Category.id)
        .outerjoin(Account, Transaction.account_id == Account.id)
        .outerjoin(TransactionTag, Transaction.id == TransactionTag.transaction_id)
        .outerjoin(Tag, TransactionTag.tag_id == Tag.id)
        .group_by(Transaction.id, Category.id, Account.id)
    )


def build_predicates(
    filters: TransactionFilters, tag_ids: list[uuid.UUID] | None = None
) -> PredicateList:
    """Translate filters into an ordered predicate list.

    Args:
        filters: The filter set.
        tag_ids: Identifiers resolved from ``filters.tags``. An empty list
            means none of the requested tags exist, which matches nothing.

    Returns:
        The predicates in application order.
    """
    predicates = PredicateList()

    if filters.start_date is not None:
        p = predicates.param(filters.start_date, Date())
        predicates.add(Transaction.transaction_date >= p, p)

    if filters.end_date is not None:
        p = predicates.param(filters.end_date, Date())
        predicates.add(Transaction.transaction_date <= p, p)

    if filters.categories:
        p = predicates.param(list(filters.categories), Uuid(), expanding=True)
        predicates.add(Transaction.category_id.in_(p), p)

    if filters.merchants:
        p = predicates.param(list(filters.merchants), String(), expanding=True)
        predicates.add(Transaction.merchant_name.in_(p), p)

    if filters.type:
        p = predicates.param(filters.type, String())
        predicates.add(Transaction.type == p, p)

    if filters.tags:
        if not tag_ids:
            predicates.add(false(), None)
        else:
            p = predicates.param(list(tag_ids), Uuid(), expanding=True)
            tagged = select(TransactionTag.transaction_id).where(
                TransactionTag.tag_id.in_(p)
            )
            predicates.add(Transaction.id.in_(tagged), p)

    return predicates


def build_transaction_query(
    filters: TransactionFilters, tag_ids: list[uuid.UUID] | None = None
) -> Select[Any]:
    """Build the filtered, ordered and paginated list query."""
    predicates = build_predicates(filters, tag_ids)
    stmt = denormalized_view()
    if predicates.pairs:
        stmt = stmt.where(*predicates.predicates)

    stmt = stmt.order_by(
        Transaction.transaction_date.desc(),
        Transaction.transaction_time.desc().nulls_last(),
        Transaction.created_at.desc(),
        Transaction.id,
    )

    if filters.limit:
        stmt = stmt.limit(predicates.param(filters.limit, Integer()))
    if filters.offset:
        stmt = stmt.offset(predicates.param(filters.offset, Integer()))
    return stmt


def build_transaction_by_id_query(transaction_id: uuid.UUID) -> Select[Any]:
    """Build the single transaction read over the same projection."""
    return denormalized_view().where(
        Transaction.id == bindparam("p1", transaction_id, type_=Uuid())
    )
