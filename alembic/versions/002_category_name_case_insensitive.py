"""Make category names unique regardless of case.

Revision ID: 002_category_name_ci
Revises: 001_ledger_tables
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002_category_name_ci"
down_revision: str | None = "001_ledger_tables"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Add a unique index on lower(name)."""
    op.create_index(
        "uq_categories_name_lower",
        "categories",
        [sa.text("lower(name)")],
        unique=True,
    )


def downgrade() -> None:
    """Drop the case-insensitive unique index."""
    op.drop_index("uq_categories_name_lower", table_name="categories")
