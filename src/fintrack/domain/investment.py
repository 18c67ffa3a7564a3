"""Investment domain service."""

from decimal import Decimal
from typing import Optional
from fintrack.database.base import Database
from fintrack.domain.entities import Investment as InvestmentEntity
from fintrack.domain.errors import ValidationError


class InvestmentService:
    """Service for registering investment positions."""

    def __init__(self, db: Database):
        """Initialize investment service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_investment(
        self,
        name: str,
        initial_amount: Decimal = Decimal("0"),
        current_balance: Optional[Decimal] = None,
    ) -> int:
        """Register an investment position.

        Args:
            name: Investment name
            initial_amount: Amount first invested
            current_balance: Current value (defaults to initial_amount)

        Returns:
            Investment ID

        Raises:
            ValidationError: If the name is blank or an amount is negative
        """
        name = name.strip()
        if not name:
            raise ValidationError("Investment name cannot be empty")
        if current_balance is None:
            current_balance = initial_amount
        if initial_amount < 0 or current_balance < 0:
            raise ValidationError("Investment amounts cannot be negative")

        return self.db.create_investment(
            name=name, initial_amount=initial_amount, current_balance=current_balance
        )

    def get_investment(self, investment_id: int) -> Optional[InvestmentEntity]:
        """Get investment by ID."""
        return self.db.get_investment(investment_id)

    def list_investments(self) -> list[InvestmentEntity]:
        """List all investments."""
        return self.db.list_investments()
