"""CategoryRepository for category lookups and maintenance."""

import uuid
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ledger_api.core.errors import ConflictError, InvalidReferenceError, NotFoundError
from ledger_api.models.category import Category


class CategoryNotFoundError(NotFoundError):
    """Raised when a category is not found."""

    pass


class CategoryNameConflictError(ConflictError):
    """Raised when a category name is taken, ignoring case."""

    def __init__(self) -> None:
        super().__init__("Category name already exists")


@dataclass(frozen=True)
class CategoryId:
    """A category referenced by its canonical identifier."""

    value: uuid.UUID


@dataclass(frozen=True)
class CategoryName:
    """A category referenced by its display name."""

    value: str


CategoryRef = CategoryId | CategoryName


def parse_category_ref(raw: str) -> CategoryRef:
    """Classify a client supplied category reference.

    Anything that parses as a UUID is an identifier; everything else is a
    display name.
    """
    text = raw.strip()
    try:
        return CategoryId(uuid.UUID(text))
    except ValueError:
        return CategoryName(text)


class CategoryRepository:
    """Repository for category CRUD operations and reference resolution."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy database session.
        """
        self._session = session

    def create(
        self,
        name: str,
        type: str,
        icon: str | None = None,
        color: str | None = None,
    ) -> Category:
        """Create a category.

        Args:
            name: Unique category name.
            type: Either "expense" or "income".
            icon: Optional icon (emoji or icon key).
            color: Optional display color.

        Returns:
            The created Category.

        Raises:
            CategoryNameConflictError: If the name is taken, ignoring case.
        """
        if self.get_by_name(name) is not None:
            raise CategoryNameConflictError()
        category = Category(name=name, type=type, icon=icon, color=color)
        self._session.add(category)
        self._session.flush()
        return category

    def get(self, category_id: uuid.UUID) -> Category:
        """Get a category by ID.

        Raises:
            CategoryNotFoundError: If category doesn't exist.
        """
        category = self._session.get(Category, category_id)
        if category is None:
            raise CategoryNotFoundError(f"Category {category_id} not found")
        return category

    def get_by_name(self, name: str) -> Category | None:
        """Find a category by name, ignoring case.

        Rows created before names were unique regardless of case may still
        collide; the earliest name in sort order wins.
        """
        stmt = (
            select(Category)
            .where(func.lower(Category.name) == name.strip().lower())
            .order_by(Category.name, Category.id)
        )
        return self._session.execute(stmt).scalars().first()

    def get_all(self) -> list[Category]:
        """Get all categories ordered by type then name."""
        stmt = select(Category).order_by(Category.type, Category.name)
        return list(self._session.execute(stmt).scalars().all())

    def resolve(self, ref: CategoryRef) -> uuid.UUID:
        """Resolve a category reference to a canonical identifier.

        Args:
            ref: Identifier or display name.

        Returns:
            The identifier of an existing category.

        Raises:
            InvalidReferenceError: If no category matches.
        """
        if isinstance(ref, CategoryId):
            category = self._session.get(Category, ref.value)
        else:
            category = self.get_by_name(ref.value)
        if category is None:
            raise InvalidReferenceError("Invalid category")
        return category.id

    def update(
        self,
        category_id: uuid.UUID,
        **fields: str | None,
    ) -> Category:
        """Update the given category fields.

        Raises:
            CategoryNotFoundError: If category doesn't exist.
            CategoryNameConflictError: If the new name is taken, ignoring case.
        """
        category = self.get(category_id)
        name = fields.get("name")
        if name is not None:
            existing = self.get_by_name(name)
            if existing is not None and existing.id != category.id:
                raise CategoryNameConflictError()
        for field, value in fields.items():
            setattr(category, field, value)
        self._session.flush()
        return category

    def delete(self, category_id: uuid.UUID) -> None:
        """Delete a category.

        Raises:
            CategoryNotFoundError: If category doesn't exist.
        """
        category = self.get(category_id)
        self._session.delete(category)
        self._session.flush()
