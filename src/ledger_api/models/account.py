"""Account model for payment methods."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ledger_api.db.base import Base, utcnow

ACCOUNT_TYPES = ("checking", "savings", "credit", "cash", "other")
DEFAULT_ACCOUNT_TYPE = "other"


class Account(Base):
    """Stores payment accounts such as cards, cash or bank accounts."""

    __tablename__ = "accounts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DEFAULT_ACCOUNT_TYPE
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, name='{self.name}', type='{self.type}')>"
