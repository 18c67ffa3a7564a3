"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from fintrack.domain.entities import (
    Account,
    Category,
    Subcategory,
    Debt,
    Investment,
    Transaction,
    TransactionKind,
    TransactionLink,
)


class Database(ABC):
    """Abstract database interface for fintrack.

    This is the persistence boundary: the domain services only talk to
    storage through these methods.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Run the enclosed writes as one unit.

        Everything written inside the block is committed when the outermost
        block exits normally and rolled back if it raises. Nested blocks join
        the enclosing one.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, account_type: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, category_type: str) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories."""
        pass

    @abstractmethod
    def create_subcategory(self, category_id: int, name: str) -> int:
        """Create a subcategory under a category. Returns subcategory ID."""
        pass

    @abstractmethod
    def get_subcategory(self, subcategory_id: int) -> Optional[Subcategory]:
        """Get subcategory by ID."""
        pass

    @abstractmethod
    def list_subcategories(self, category_id: Optional[int] = None) -> list[Subcategory]:
        """List subcategories, optionally filtered by category."""
        pass

    # Debt operations
    @abstractmethod
    def create_debt(
        self,
        description: str,
        original_amount: Decimal,
        current_balance: Decimal,
        total_installments: Optional[int] = None,
        remaining_installments: Optional[int] = None,
        monthly_interest_rate: Optional[Decimal] = None,
    ) -> int:
        """Create a debt. Returns debt ID."""
        pass

    @abstractmethod
    def get_debt(self, debt_id: int) -> Optional[Debt]:
        """Get debt by ID."""
        pass

    @abstractmethod
    def list_debts(self) -> list[Debt]:
        """List all debts."""
        pass

    @abstractmethod
    def update_debt_balance(
        self, debt_id: int, current_balance: Decimal, remaining_installments: Optional[int]
    ) -> None:
        """Store the derived balance fields of a debt."""
        pass

    # Investment operations
    @abstractmethod
    def create_investment(
        self, name: str, initial_amount: Decimal, current_balance: Decimal
    ) -> int:
        """Create an investment. Returns investment ID."""
        pass

    @abstractmethod
    def get_investment(self, investment_id: int) -> Optional[Investment]:
        """Get investment by ID."""
        pass

    @abstractmethod
    def list_investments(self) -> list[Investment]:
        """List all investments."""
        pass

    @abstractmethod
    def update_investment_balance(
        self, investment_id: int, current_balance: Decimal, initial_amount: Decimal
    ) -> None:
        """Store the derived balance fields of an investment."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        description: str,
        amount: Decimal,
        kind: TransactionKind,
        date: date,
        reference_month: date,
        category_id: Optional[int],
        subcategory_id: Optional[int],
        link: TransactionLink,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        account_id: int,
        description: str,
        amount: Decimal,
        kind: TransactionKind,
        date: date,
        reference_month: date,
        category_id: Optional[int],
        subcategory_id: Optional[int],
        link: TransactionLink,
    ) -> None:
        """Replace every mutable field of a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        reference_month: Optional[date] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            account_id: Optional account ID filter
            category_id: Optional category ID filter
            reference_month: Optional reference month (first day of month) filter
        """
        pass
