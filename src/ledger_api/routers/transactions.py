"""FastAPI router for transaction endpoints."""

import uuid
from datetime import date
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ledger_api.core.errors import ValidationError
from ledger_api.db.session import get_db
from ledger_api.queries.transaction_query import TransactionFilters
from ledger_api.repositories.transaction_repository import TransactionView
from ledger_api.schemas.transaction import (
    MerchantTotals,
    SpendingStatsResponse,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)
from ledger_api.services.stats_service import SpendingStats, StatsService
from ledger_api.services.transaction_service import TransactionService

router = APIRouter()


def get_transaction_service(
    db: Session = Depends(get_db),  # noqa: B008
) -> TransactionService:
    """Get transaction service."""
    return TransactionService(db)


def get_stats_service(
    db: Session = Depends(get_db),  # noqa: B008
) -> StatsService:
    """Get stats service."""
    return StatsService(db)


def _split(value: str | None) -> list[str] | None:
    if value is None:
        return None
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or None


def _parse_category_ids(value: str | None) -> list[uuid.UUID] | None:
    items = _split(value)
    if items is None:
        return None
    try:
        return [uuid.UUID(item) for item in items]
    except ValueError:
        raise ValidationError(
            "Invalid filter", {"categories": ["Categories must be category ids"]}
        ) from None


def _to_response(view: TransactionView) -> TransactionResponse:
    return TransactionResponse(
        id=view.id,
        merchant=view.merchant,
        amount=float(view.amount),
        type=view.type,
        category=view.category_id,
        category_icon=view.category_icon,
        date=view.occurred_at.isoformat(),
        tags=view.tags,
        notes=view.notes,
        payment_method=view.account_name,
        created_at=view.created_at.isoformat(),
        updated_at=view.updated_at.isoformat(),
    )


def _stats_to_response(stats: SpendingStats) -> SpendingStatsResponse:
    return SpendingStatsResponse(
        total_spent=float(stats.total_spent),
        total_income=float(stats.total_income),
        category_breakdown={
            category_id: float(total)
            for category_id, total in stats.category_breakdown.items()
        },
        merchant_breakdown={
            merchant: MerchantTotals(count=spend.count, total=float(spend.total))
            for merchant, spend in stats.merchant_breakdown.items()
        },
    )


@router.get("/transactions", response_model=list[TransactionResponse])
def list_transactions(
    service: Annotated[TransactionService, Depends(get_transaction_service)],
    start_date: Annotated[date | None, Query(alias="startDate")] = None,
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
    categories: str | None = None,
    merchants: str | None = None,
    tags: str | None = None,
    type: Literal["expense", "income"] | None = None,
    limit: Annotated[int | None, Query(ge=1)] = None,
    offset: Annotated[int | None, Query(ge=0)] = None,
) -> list[TransactionResponse]:
    """List transactions, newest first, with optional filters.

    ``categories``, ``merchants`` and ``tags`` take comma separated values.
    """
    filters = TransactionFilters(
        start_date=start_date,
        end_date=end_date,
        categories=_parse_category_ids(categories),
        merchants=_split(merchants),
        tags=_split(tags),
        type=type,
        limit=limit,
        offset=offset,
    )
    return [_to_response(view) for view in service.search(filters)]


@router.get("/transactions/stats", response_model=SpendingStatsResponse)
def get_stats(
    service: Annotated[StatsService, Depends(get_stats_service)],
    start_date: Annotated[date | None, Query(alias="startDate")] = None,
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
) -> SpendingStatsResponse:
    """Totals by type plus expense breakdowns by category and merchant."""
    return _stats_to_response(service.compute(start_date, end_date))


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: uuid.UUID,
    service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> TransactionResponse:
    """Get one transaction."""
    return _to_response(service.get(transaction_id))


@router.post(
    "/transactions",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_transaction(
    request: TransactionCreate,
    service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> TransactionResponse:
    """Create a transaction."""
    return _to_response(service.create(request))


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: uuid.UUID,
    request: TransactionUpdate,
    service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> TransactionResponse:
    """Update the supplied fields of a transaction."""
    return _to_response(service.update(transaction_id, request))


@router.delete("/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: uuid.UUID,
    service: Annotated[TransactionService, Depends(get_transaction_service)],
) -> Response:
    """Delete a transaction."""
    service.delete(transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
