"""Tests for CategoryRepository."""

import uuid

import pytest
from sqlalchemy.orm import Session

from ledger_api.core.errors import InvalidReferenceError
from ledger_api.models.category import Category
from ledger_api.repositories.category_repository import (
    CategoryId,
    CategoryName,
    CategoryNameConflictError,
    CategoryNotFoundError,
    CategoryRepository,
    parse_category_ref,
)


class TestParseCategoryRef:
    """Tests for parse_category_ref()."""

    def test_uuid_text_is_an_identifier(self) -> None:
        """Test that a UUID string is classified as an identifier."""
        category_id = uuid.uuid4()

        assert parse_category_ref(str(category_id)) == CategoryId(category_id)

    def test_other_text_is_a_name(self) -> None:
        """Test that anything else is classified as a display name."""
        assert parse_category_ref("  Food ") == CategoryName("Food")


class TestCategoryRepositoryCreate:
    """Tests for CategoryRepository.create()."""

    def test_create_category(self, db_session: Session) -> None:
        """Test creating a category assigns an identifier."""
        repo = CategoryRepository(db_session)

        category = repo.create(name="Travel", type="expense", icon="✈️", color="#0EA5E9")

        assert category.id is not None
        assert category.name == "Travel"
        assert category.type == "expense"
        assert category.icon == "✈️"

    def test_create_name_taken_ignoring_case(
        self, db_session: Session, food_category: Category
    ) -> None:
        """Test a name differing only in case is rejected."""
        repo = CategoryRepository(db_session)

        with pytest.raises(CategoryNameConflictError, match="Category name already exists"):
            repo.create(name="FOOD", type="expense")


class TestCategoryRepositoryGet:
    """Tests for CategoryRepository lookups."""

    def test_get_existing(self, db_session: Session, food_category: Category) -> None:
        """Test getting a category by ID."""
        repo = CategoryRepository(db_session)

        assert repo.get(food_category.id).name == "Food"

    def test_get_missing_raises(self, db_session: Session) -> None:
        """Test getting an unknown category raises CategoryNotFoundError."""
        repo = CategoryRepository(db_session)

        with pytest.raises(CategoryNotFoundError):
            repo.get(uuid.uuid4())

    def test_get_by_name_ignores_case(
        self, db_session: Session, food_category: Category
    ) -> None:
        """Test name lookup is case insensitive."""
        repo = CategoryRepository(db_session)

        found = repo.get_by_name("fOOd")

        assert found is not None
        assert found.id == food_category.id

    def test_get_all_orders_by_type_then_name(self, db_session: Session) -> None:
        """Test categories are listed expense first, alphabetically."""
        repo = CategoryRepository(db_session)
        repo.create(name="Salary", type="income")
        repo.create(name="Transport", type="expense")
        repo.create(name="Food", type="expense")

        names = [category.name for category in repo.get_all()]

        assert names == ["Food", "Transport", "Salary"]


class TestCategoryRepositoryResolve:
    """Tests for CategoryRepository.resolve()."""

    def test_resolve_by_id(self, db_session: Session, food_category: Category) -> None:
        """Test an identifier reference resolves to itself."""
        repo = CategoryRepository(db_session)

        assert repo.resolve(CategoryId(food_category.id)) == food_category.id

    def test_resolve_by_name(self, db_session: Session, food_category: Category) -> None:
        """Test a display name resolves to the category's identifier."""
        repo = CategoryRepository(db_session)

        assert repo.resolve(CategoryName("food")) == food_category.id

    def test_resolve_unknown_id_raises(self, db_session: Session) -> None:
        """Test an unknown identifier is an invalid reference."""
        repo = CategoryRepository(db_session)

        with pytest.raises(InvalidReferenceError, match="Invalid category"):
            repo.resolve(CategoryId(uuid.uuid4()))

    def test_resolve_unknown_name_raises(self, db_session: Session) -> None:
        """Test an unknown name is an invalid reference."""
        repo = CategoryRepository(db_session)

        with pytest.raises(InvalidReferenceError):
            repo.resolve(CategoryName("Nope"))


class TestCategoryRepositoryUpdateDelete:
    """Tests for CategoryRepository.update() and delete()."""

    def test_update_fields(self, db_session: Session, food_category: Category) -> None:
        """Test updating name and clearing the icon."""
        repo = CategoryRepository(db_session)

        updated = repo.update(food_category.id, name="Dining", icon=None)

        assert updated.name == "Dining"
        assert updated.icon is None
        assert updated.color == "#F97316"

    def test_update_to_name_taken_ignoring_case(
        self, db_session: Session, food_category: Category
    ) -> None:
        """Test renaming onto another category's name in other case is rejected."""
        repo = CategoryRepository(db_session)
        travel = repo.create(name="Travel", type="expense")

        with pytest.raises(CategoryNameConflictError):
            repo.update(travel.id, name="food")

    def test_update_own_name_case(
        self, db_session: Session, food_category: Category
    ) -> None:
        """Test a category may change the case of its own name."""
        repo = CategoryRepository(db_session)

        updated = repo.update(food_category.id, name="FOOD")

        assert updated.name == "FOOD"

    def test_delete(self, db_session: Session, food_category: Category) -> None:
        """Test deleting removes the category."""
        repo = CategoryRepository(db_session)

        repo.delete(food_category.id)

        assert db_session.get(Category, food_category.id) is None

    def test_delete_missing_raises(self, db_session: Session) -> None:
        """Test deleting an unknown category raises."""
        repo = CategoryRepository(db_session)

        with pytest.raises(CategoryNotFoundError):
            repo.delete(uuid.uuid4())
