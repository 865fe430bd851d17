"""AccountRepository for payment accounts."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_api.core.errors import NotFoundError
from ledger_api.models.account import DEFAULT_ACCOUNT_TYPE, Account

logger = logging.getLogger(__name__)


class AccountNotFoundError(NotFoundError):
    """Raised when an account is not found."""

    pass


class AccountRepository:
    """Repository for account CRUD operations."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy database session.
        """
        self._session = session

    def create(self, name: str, type: str = DEFAULT_ACCOUNT_TYPE) -> Account:
        """Create a new account.

        Args:
            name: Unique account name, e.g. "Visa".
            type: Account type (checking, savings, credit, cash, other).

        Returns:
            The created Account.
        """
        account = Account(name=name, type=type)
        self._session.add(account)
        self._session.flush()
        return account

    def get(self, account_id: uuid.UUID) -> Account:
        """Get an account by ID.

        Raises:
            AccountNotFoundError: If account doesn't exist.
        """
        account = self._session.get(Account, account_id)
        if account is None:
            raise AccountNotFoundError(f"Account {account_id} not found")
        return account

    def get_by_name(self, name: str) -> Account | None:
        """Find an account by exact name."""
        stmt = select(Account).where(Account.name == name)
        return self._session.execute(stmt).scalars().first()

    def get_all(self) -> list[Account]:
        """Get all accounts ordered by name."""
        stmt = select(Account).order_by(Account.name)
        return list(self._session.execute(stmt).scalars().all())

    def get_or_create(self, name: str) -> Account:
        """Resolve a payment method name, creating a generic account if needed.

        Args:
            name: The payment method name.

        Returns:
            The existing or newly created Account.
        """
        account = self.get_by_name(name)
        if account is not None:
            return account
        account = self.create(name=name, type=DEFAULT_ACCOUNT_TYPE)
        logger.info("Created account %s for payment method %r", account.id, name)
        return account

    def update(self, account_id: uuid.UUID, **fields: str) -> Account:
        """Update the given account fields.

        Raises:
            AccountNotFoundError: If account doesn't exist.
        """
        account = self.get(account_id)
        for field, value in fields.items():
            setattr(account, field, value)
        self._session.flush()
        return account

    def delete(self, account_id: uuid.UUID) -> None:
        """Delete an account. Transactions keep existing with no account.

        Raises:
            AccountNotFoundError: If account doesn't exist.
        """
        account = self.get(account_id)
        self._session.delete(account)
        self._session.flush()
