"""TagRepository for idempotent tag resolution."""

import uuid
from collections.abc import Iterable

from sqlalchemy import insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from ledger_api.core.errors import NotFoundError
from ledger_api.models.tag import Tag

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class TagNotFoundError(NotFoundError):
    """Raised when a tag is not found."""

    pass


class TagRepository:
    """Repository for tag lookup, find-or-create and maintenance.

    Concurrent requests may try to create the same tag name at once. The
    unique constraint on ``tags.name`` decides the winner: the insert is an
    ``ON CONFLICT DO NOTHING`` upsert and the row is always re-read by name,
    so every caller ends up with the single surviving identifier.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy database session.
        """
        self._session = session

    def get(self, tag_id: uuid.UUID) -> Tag:
        """Get a tag by ID.

        Raises:
            TagNotFoundError: If tag doesn't exist.
        """
        tag = self._session.get(Tag, tag_id)
        if tag is None:
            raise TagNotFoundError(f"Tag {tag_id} not found")
        return tag

    def get_by_name(self, name: str) -> Tag | None:
        """Find a tag by exact name."""
        stmt = select(Tag).where(Tag.name == name)
        return self._session.execute(stmt).scalars().first()

    def get_all(self) -> list[Tag]:
        """Get all tags ordered by name."""
        return list(self._session.execute(select(Tag).order_by(Tag.name)).scalars().all())

    def get_ids_by_names(self, names: Iterable[str]) -> list[uuid.UUID]:
        """Resolve tag names to identifiers. Unknown names are skipped.

        Args:
            names: Tag names to look up.

        Returns:
            Identifiers of the tags that exist, possibly empty.
        """
        wanted = sorted({name for name in names if name})
        if not wanted:
            return []
        stmt = select(Tag.id).where(Tag.name.in_(wanted)).order_by(Tag.name)
        return list(self._session.execute(stmt).scalars().all())

    def find_or_create(self, name: str) -> Tag:
        """Return the tag called ``name``, creating it on first use.

        Args:
            name: The tag name.

        Returns:
            The Tag with that name. Calling twice never duplicates it.
        """
        tag = self.get_by_name(name)
        if tag is not None:
            return tag

        dialect = self._session.get_bind().dialect.name
        upsert = _UPSERT_INSERTS.get(dialect)
        if upsert is None:
            # No native upsert; the unique constraint surfaces races as conflicts
            stmt = insert(Tag).values(id=uuid.uuid4(), name=name)
        else:
            stmt = (
                upsert(Tag)
                .values(id=uuid.uuid4(), name=name)
                .on_conflict_do_nothing(index_elements=["name"])
            )
        self._session.execute(stmt)

        tag = self.get_by_name(name)
        if tag is None:
            raise RuntimeError(f"Tag {name!r} missing after upsert")
        return tag

    def rename(self, tag_id: uuid.UUID, name: str) -> Tag:
        """Rename a tag.

        Raises:
            TagNotFoundError: If tag doesn't exist.
        """
        tag = self.get(tag_id)
        tag.name = name
        self._session.flush()
        return tag

    def delete(self, tag_id: uuid.UUID) -> None:
        """Delete a tag; its transaction links go with it.

        Raises:
            TagNotFoundError: If tag doesn't exist.
        """
        tag = self.get(tag_id)
        self._session.delete(tag)
        self._session.flush()
