"""FastAPI router for tag endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ledger_api.db.session import DbSession, get_db
from ledger_api.db.unit_of_work import reading, unit_of_work
from ledger_api.repositories.tag_repository import TagRepository
from ledger_api.schemas.catalog import TagCreate, TagResponse

router = APIRouter()


def get_tag_repo(
    db: Session = Depends(get_db),  # noqa: B008
) -> TagRepository:
    """Get tag repository."""
    return TagRepository(db)


@router.get("/tags", response_model=list[TagResponse])
def list_tags(
    repo: Annotated[TagRepository, Depends(get_tag_repo)],
) -> list[TagResponse]:
    """List tags by name."""
    with reading("fetch tags"):
        return [TagResponse.model_validate(t) for t in repo.get_all()]


@router.post("/tags", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
def create_tag(
    request: TagCreate,
    db: DbSession,
    repo: Annotated[TagRepository, Depends(get_tag_repo)],
) -> TagResponse:
    """Create a tag, or return the existing tag with the same name."""
    with unit_of_work(db, "create tag"):
        tag = repo.find_or_create(request.name)
    return TagResponse.model_validate(tag)


@router.put("/tags/{tag_id}", response_model=TagResponse)
def rename_tag(
    tag_id: uuid.UUID,
    request: TagCreate,
    db: DbSession,
    repo: Annotated[TagRepository, Depends(get_tag_repo)],
) -> TagResponse:
    """Rename a tag."""
    with unit_of_work(db, "update tag", conflict_message="Tag name already exists"):
        tag = repo.rename(tag_id, request.name)
    return TagResponse.model_validate(tag)


@router.delete("/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tag(
    tag_id: uuid.UUID,
    db: DbSession,
    repo: Annotated[TagRepository, Depends(get_tag_repo)],
) -> Response:
    """Delete a tag and detach it from every transaction."""
    with unit_of_work(db, "delete tag"):
        repo.delete(tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
