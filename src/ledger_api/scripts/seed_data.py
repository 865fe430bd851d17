"""Seed data script for populating default categories, accounts and tags."""

import argparse
import sys

from sqlalchemy import delete
from sqlalchemy.orm import Session

from ledger_api.core.config import get_settings
from ledger_api.db.engine import Database
from ledger_api.models import Account, Category, Tag, Transaction, TransactionTag
from ledger_api.repositories.account_repository import AccountRepository
from ledger_api.repositories.category_repository import CategoryRepository
from ledger_api.repositories.tag_repository import TagRepository

DEFAULT_CATEGORIES = [
    {"name": "Food & Dining", "type": "expense", "icon": "🍔", "color": "#F97316"},
    {"name": "Groceries", "type": "expense", "icon": "🛒", "color": "#22C55E"},
    {"name": "Transport", "type": "expense", "icon": "🚗", "color": "#3B82F6"},
    {"name": "Shopping", "type": "expense", "icon": "🛍️", "color": "#EC4899"},
    {"name": "Entertainment", "type": "expense", "icon": "🎬", "color": "#A855F7"},
    {"name": "Bills & Utilities", "type": "expense", "icon": "💡", "color": "#EAB308"},
    {"name": "Housing", "type": "expense", "icon": "🏠", "color": "#14B8A6"},
    {"name": "Health", "type": "expense", "icon": "💊", "color": "#EF4444"},
    {"name": "Travel", "type": "expense", "icon": "✈️", "color": "#0EA5E9"},
    {"name": "Education", "type": "expense", "icon": "📚", "color": "#6366F1"},
    {"name": "Personal Care", "type": "expense", "icon": "💇", "color": "#F472B6"},
    {"name": "Subscriptions", "type": "expense", "icon": "📺", "color": "#8B5CF6"},
    {"name": "Gifts & Donations", "type": "expense", "icon": "🎁", "color": "#F43F5E"},
    {"name": "Other", "type": "expense", "icon": "📦", "color": "#6B7280"},
    {"name": "Salary", "type": "income", "icon": "💰", "color": "#10B981"},
    {"name": "Freelance", "type": "income", "icon": "💼", "color": "#059669"},
    {"name": "Investments", "type": "income", "icon": "📈", "color": "#16A34A"},
    {"name": "Refunds", "type": "income", "icon": "↩️", "color": "#84CC16"},
    {"name": "Other Income", "type": "income", "icon": "💵", "color": "#65A30D"},
]

DEFAULT_ACCOUNTS = [
    {"name": "Cash", "type": "cash"},
    {"name": "Checking Account", "type": "checking"},
    {"name": "Credit Card", "type": "credit"},
]

DEFAULT_TAGS = ["essential", "recurring", "work", "travel", "family", "online"]


def seed(session: Session, clear: bool = False) -> dict[str, int]:
    """Insert default categories, accounts and tags that are not present yet.

    Args:
        session: SQLAlchemy database session.
        clear: If True, delete all ledger data before seeding.

    Returns:
        Number of rows created per table.
    """
    if clear:
        # Children first due to foreign keys
        for model in (TransactionTag, Transaction, Tag, Account, Category):
            session.execute(delete(model))
        session.flush()
        print("Cleared existing ledger data")

    categories = CategoryRepository(session)
    accounts = AccountRepository(session)
    tags = TagRepository(session)
    created = {"categories": 0, "accounts": 0, "tags": 0}

    for data in DEFAULT_CATEGORIES:
        if categories.get_by_name(data["name"]) is None:
            categories.create(**data)
            created["categories"] += 1

    for data in DEFAULT_ACCOUNTS:
        if accounts.get_by_name(data["name"]) is None:
            accounts.create(**data)
            created["accounts"] += 1

    for name in DEFAULT_TAGS:
        if tags.get_by_name(name) is None:
            tags.find_or_create(name)
            created["tags"] += 1

    return created


def seed_database(clear: bool = False) -> dict[str, int]:
    """Seed the database configured in the environment."""
    database = Database.from_settings(get_settings())
    database.open()
    db = database.session()
    try:
        created = seed(db, clear=clear)
        db.commit()
        for table, count in created.items():
            print(f"  {table}: {count} created")
        return created
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        database.close()


def main() -> int:
    """CLI entrypoint for seed data script."""
    parser = argparse.ArgumentParser(
        description="Seed the ledger with default categories, accounts and tags."
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete existing ledger data before seeding",
    )

    args = parser.parse_args()

    try:
        seed_database(clear=args.clear)
        return 0
    except Exception as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
