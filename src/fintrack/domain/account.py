"""Account domain service."""

from typing import Optional
from fintrack.database.base import Database
from fintrack.domain.entities import ACCOUNT_TYPES, Account as AccountEntity
from fintrack.domain.errors import ConflictError, ValidationError


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, account_type: str = "Checking Account") -> int:
        """Create a new account.

        Args:
            name: Account name
            account_type: One of ACCOUNT_TYPES

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is blank or the type is unknown
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        if account_type not in ACCOUNT_TYPES:
            raise ValidationError(
                f"Unknown account type '{account_type}'. Expected one of: {', '.join(ACCOUNT_TYPES)}"
            )

        # Check if account with same name exists
        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")

        return self.db.create_account(name=name, account_type=account_type)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()
