"""Debt domain service."""

from decimal import Decimal
from typing import Optional
from fintrack.database.base import Database
from fintrack.domain.entities import Debt as DebtEntity
from fintrack.domain.errors import ValidationError


class DebtService:
    """Service for registering debts.

    Balances of existing debts are only changed through the ledger
    reconciler, never directly.
    """

    def __init__(self, db: Database):
        """Initialize debt service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_debt(
        self,
        description: str,
        original_amount: Decimal,
        current_balance: Optional[Decimal] = None,
        total_installments: Optional[int] = None,
        remaining_installments: Optional[int] = None,
        monthly_interest_rate: Optional[Decimal] = None,
    ) -> int:
        """Register a debt.

        Args:
            description: What the debt is
            original_amount: Amount originally owed
            current_balance: Amount still owed (defaults to original_amount)
            total_installments: Number of installments, if paid in installments
            remaining_installments: Installments left (defaults to total_installments)
            monthly_interest_rate: Optional monthly interest rate in percent

        Returns:
            Debt ID

        Raises:
            ValidationError: If amounts or installment counts are invalid
        """
        description = description.strip()
        if not description:
            raise ValidationError("Debt description cannot be empty")
        if original_amount < 0:
            raise ValidationError("Original amount cannot be negative")
        if current_balance is None:
            current_balance = original_amount
        if current_balance < 0:
            raise ValidationError("Current balance cannot be negative")

        if remaining_installments is None:
            remaining_installments = total_installments
        for label, value in (
            ("Total installments", total_installments),
            ("Remaining installments", remaining_installments),
        ):
            if value is not None and value < 0:
                raise ValidationError(f"{label} cannot be negative")

        return self.db.create_debt(
            description=description,
            original_amount=original_amount,
            current_balance=current_balance,
            total_installments=total_installments,
            remaining_installments=remaining_installments,
            monthly_interest_rate=monthly_interest_rate,
        )

    def get_debt(self, debt_id: int) -> Optional[DebtEntity]:
        """Get debt by ID."""
        return self.db.get_debt(debt_id)

    def list_debts(self) -> list[DebtEntity]:
        """List all debts."""
        return self.db.list_debts()
