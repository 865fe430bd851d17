"""FastAPI router for category endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ledger_api.db.session import DbSession, get_db
from ledger_api.db.unit_of_work import reading, unit_of_work
from ledger_api.repositories.category_repository import CategoryRepository
from ledger_api.schemas.catalog import CategoryCreate, CategoryResponse, CategoryUpdate

router = APIRouter()

DUPLICATE_NAME = "Category name already exists"


def get_category_repo(
    db: Session = Depends(get_db),  # noqa: B008
) -> CategoryRepository:
    """Get category repository."""
    return CategoryRepository(db)


@router.get("/categories", response_model=list[CategoryResponse])
def list_categories(
    repo: Annotated[CategoryRepository, Depends(get_category_repo)],
) -> list[CategoryResponse]:
    """List categories grouped by type."""
    with reading("fetch categories"):
        return [CategoryResponse.model_validate(c) for c in repo.get_all()]


@router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    request: CategoryCreate,
    db: DbSession,
    repo: Annotated[CategoryRepository, Depends(get_category_repo)],
) -> CategoryResponse:
    """Create a category."""
    with unit_of_work(db, "create category", conflict_message=DUPLICATE_NAME):
        category = repo.create(**request.model_dump())
    return CategoryResponse.model_validate(category)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: uuid.UUID,
    request: CategoryUpdate,
    db: DbSession,
    repo: Annotated[CategoryRepository, Depends(get_category_repo)],
) -> CategoryResponse:
    """Update a category. Icon and color may be cleared with null."""
    fields = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key in ("icon", "color")
    }
    with unit_of_work(db, "update category", conflict_message=DUPLICATE_NAME):
        category = repo.update(category_id, **fields)
    return CategoryResponse.model_validate(category)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: uuid.UUID,
    db: DbSession,
    repo: Annotated[CategoryRepository, Depends(get_category_repo)],
) -> Response:
    """Delete a category that no transaction uses."""
    with unit_of_work(
        db,
        "delete category",
        reference_message="Category is used by existing transactions",
    ):
        repo.delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
