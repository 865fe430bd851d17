"""FastAPI router for account endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ledger_api.db.session import DbSession, get_db
from ledger_api.db.unit_of_work import reading, unit_of_work
from ledger_api.repositories.account_repository import AccountRepository
from ledger_api.schemas.catalog import AccountCreate, AccountResponse, AccountUpdate

router = APIRouter()

DUPLICATE_NAME = "Account name already exists"


def get_account_repo(
    db: Session = Depends(get_db),  # noqa: B008
) -> AccountRepository:
    """Get account repository."""
    return AccountRepository(db)


@router.get("/accounts", response_model=list[AccountResponse])
def list_accounts(
    repo: Annotated[AccountRepository, Depends(get_account_repo)],
) -> list[AccountResponse]:
    """List accounts by name."""
    with reading("fetch accounts"):
        return [AccountResponse.model_validate(a) for a in repo.get_all()]


@router.post(
    "/accounts",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_account(
    request: AccountCreate,
    db: DbSession,
    repo: Annotated[AccountRepository, Depends(get_account_repo)],
) -> AccountResponse:
    """Create an account."""
    with unit_of_work(db, "create account", conflict_message=DUPLICATE_NAME):
        account = repo.create(name=request.name, type=request.type)
    return AccountResponse.model_validate(account)


@router.put("/accounts/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: uuid.UUID,
    request: AccountUpdate,
    db: DbSession,
    repo: Annotated[AccountRepository, Depends(get_account_repo)],
) -> AccountResponse:
    """Rename an account or change its type."""
    with unit_of_work(db, "update account", conflict_message=DUPLICATE_NAME):
        account = repo.update(account_id, **request.model_dump(exclude_none=True))
    return AccountResponse.model_validate(account)


@router.delete("/accounts/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: uuid.UUID,
    db: DbSession,
    repo: Annotated[AccountRepository, Depends(get_account_repo)],
) -> Response:
    """Delete an account; its transactions are kept without an account."""
    with unit_of_work(db, "delete account"):
        repo.delete(account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
