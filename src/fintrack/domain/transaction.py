"""Transaction domain service.

Every create, edit and delete of a transaction is paired with the matching
ledger reconciliation call, inside one ``Database.atomic()`` unit:

- create: persist, then apply the new effect
- edit: revert the pre-edit snapshot, replace the record, apply the new effect
- delete: revert, then delete

All validation happens before the unit starts, so a rejected operation never
touches a balance.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.entities import (
    Category,
    DebtLink,
    InvestmentLink,
    Transaction as TransactionEntity,
    TransactionKind,
    TransactionLink,
)
from fintrack.domain.errors import (
    LedgerInconsistentError,
    NotFoundError,
    ReconcileError,
    ValidationError,
    account_not_found,
    category_not_found,
    debt_not_found,
    investment_not_found,
    subcategory_not_found,
    transaction_not_found,
)
from fintrack.domain.reconciliation import LedgerReconciler
from fintrack.domain.validation import resolve_link
from fintrack.utils.amount_parser import MAX_AMOUNT
from fintrack.utils.date_parser import first_of_month

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class _TransactionFields:
    """Validated field values ready to be written."""

    account_id: int
    description: str
    amount: Decimal
    kind: TransactionKind
    date: date
    reference_month: date
    category_id: Optional[int]
    subcategory_id: Optional[int]
    link: TransactionLink


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.reconciler = LedgerReconciler(db)

    def _resolve_category(self, category_id: Optional[int]) -> Optional[Category]:
        if category_id is None:
            return None
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def _require_link_target(self, link: TransactionLink) -> None:
        """Raise ReconcileError if the linked debt or investment is missing."""
        if isinstance(link, DebtLink) and self.db.get_debt(link.debt_id) is None:
            raise ReconcileError(debt_not_found(link.debt_id))
        if isinstance(link, InvestmentLink) and self.db.get_investment(link.investment_id) is None:
            raise ReconcileError(investment_not_found(link.investment_id))

    def _prepare(
        self,
        account_id: int,
        description: Optional[str],
        amount: Decimal,
        kind: TransactionKind | str,
        date: date,
        reference_month: Optional[date],
        category_id: Optional[int],
        subcategory_id: Optional[int],
        debt_id: Optional[int],
        investment_id: Optional[int],
    ) -> _TransactionFields:
        """Validate input and build the fields to persist.

        Raises:
            NotFoundError: Missing account, category or subcategory
            ValidationError: Bad amount/kind, subcategory outside the category,
                or references that do not match the category type
            ReconcileError: Linked debt or investment does not exist
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        amount = Decimal(amount)
        if not amount.is_finite():
            raise ValidationError(f"Amount {amount} is not a number")
        if amount < 0:
            raise ValidationError("Amount cannot be negative; use the transaction kind for direction")
        if amount > MAX_AMOUNT:
            raise ValidationError(f"Amount {amount} exceeds the maximum of {MAX_AMOUNT}")
        try:
            kind = TransactionKind(kind)
        except ValueError:
            raise ValidationError(f"Unknown transaction kind '{kind}'")

        category = self._resolve_category(category_id)

        if subcategory_id is not None:
            if category is None:
                raise ValidationError("A subcategory requires a category")
            subcategory = self.db.get_subcategory(subcategory_id)
            if subcategory is None:
                raise NotFoundError(subcategory_not_found(subcategory_id))
            if subcategory.category_id != category.id:
                raise ValidationError(
                    f"Subcategory '{subcategory.name}' does not belong to category '{category.name}'"
                )

        link = resolve_link(category, debt_id=debt_id, investment_id=investment_id)
        self._require_link_target(link)

        return _TransactionFields(
            account_id=account_id,
            description=(description or "").strip(),
            amount=amount.quantize(CENTS, rounding=ROUND_HALF_UP),
            kind=kind,
            date=date,
            reference_month=first_of_month(reference_month or date),
            category_id=category_id,
            subcategory_id=subcategory_id,
            link=link,
        )

    def create_transaction(
        self,
        account_id: int,
        description: Optional[str],
        amount: Decimal,
        kind: TransactionKind | str,
        date: date,
        reference_month: Optional[date] = None,
        category_id: Optional[int] = None,
        subcategory_id: Optional[int] = None,
        debt_id: Optional[int] = None,
        investment_id: Optional[int] = None,
    ) -> int:
        """Create a transaction and apply its effect on the linked debt/investment.

        Args:
            account_id: Owning account ID
            description: Free-text description
            amount: Non-negative amount
            kind: Income or Expense
            date: Occurrence date
            reference_month: Period the transaction belongs to (defaults to
                the month of ``date``; any day is normalized to the first)
            category_id: Optional category ID
            subcategory_id: Optional subcategory ID (must belong to the category)
            debt_id: Debt reference, required for Debt categories
            investment_id: Investment reference, required for Investment categories

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If account, category or subcategory doesn't exist
            ValidationError: If the input or the category links are invalid
            ReconcileError: If the linked debt or investment doesn't exist
        """
        fields = self._prepare(
            account_id,
            description,
            amount,
            kind,
            date,
            reference_month,
            category_id,
            subcategory_id,
            debt_id,
            investment_id,
        )

        with self.db.atomic():
            transaction_id = self.db.create_transaction(**vars(fields))
            created = self.db.get_transaction(transaction_id)
            self.reconciler.apply_effect(created)

        logger.info(
            "Created transaction %s: %s %s on account %s",
            transaction_id,
            fields.kind.value,
            fields.amount,
            fields.account_id,
        )
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        account_id: Optional[int] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        kind: Optional[TransactionKind | str] = None,
        date: Optional[date] = None,
        reference_month: Optional[date] = None,
        category_id: Optional[int] = None,
        subcategory_id: Optional[int] = None,
        debt_id: Optional[int] = None,
        investment_id: Optional[int] = None,
        clear_category: bool = False,
    ) -> None:
        """Edit a transaction, moving its ledger effect along with it.

        Fields left as None keep their current value. Changing or clearing
        the category drops the subcategory and ledger references unless new
        ones are given.

        Args:
            transaction_id: Transaction ID to update
            clear_category: If True, remove the category (category_id must be None)

        Raises:
            NotFoundError: If the transaction or a referenced entity doesn't exist
            ValidationError: If the edited transaction would be invalid
            ReconcileError: If the linked debt or investment, old or new,
                does not exist
            LedgerInconsistentError: If the old effect was reverted but the
                update or the new effect failed
        """
        old = self.require_transaction(transaction_id)

        if clear_category:
            if category_id is not None:
                raise ValidationError("Cannot set both category_id and clear_category")
            new_category_id = None
            category_changed = old.category_id is not None
        else:
            new_category_id = category_id if category_id is not None else old.category_id
            category_changed = new_category_id != old.category_id

        if category_changed:
            new_subcategory_id = subcategory_id
            new_debt_id = debt_id
            new_investment_id = investment_id
        else:
            new_subcategory_id = subcategory_id if subcategory_id is not None else old.subcategory_id
            new_debt_id = debt_id if debt_id is not None else old.debt_id
            new_investment_id = investment_id if investment_id is not None else old.investment_id

        fields = self._prepare(
            account_id if account_id is not None else old.account_id,
            description if description is not None else old.description,
            amount if amount is not None else old.amount,
            kind if kind is not None else old.kind,
            date if date is not None else old.date,
            reference_month if reference_month is not None else old.reference_month,
            new_category_id,
            new_subcategory_id,
            new_debt_id,
            new_investment_id,
        )

        with self.db.atomic():
            self.reconciler.revert_effect(old)
            try:
                self.db.update_transaction(transaction_id, **vars(fields))
                updated = self.db.get_transaction(transaction_id)
                self.reconciler.apply_effect(updated)
            except Exception as exc:
                logger.error(
                    "Edit of transaction %s failed after reverting its ledger effect: %s",
                    transaction_id,
                    exc,
                )
                raise LedgerInconsistentError(transaction_id, exc) from exc

        logger.info("Updated transaction %s", transaction_id)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and revert its ledger effect.

        Args:
            transaction_id: Transaction ID to delete

        Raises:
            NotFoundError: If transaction doesn't exist
            ReconcileError: If the linked debt or investment doesn't exist
            LedgerInconsistentError: If the effect was reverted but the delete failed
        """
        old = self.require_transaction(transaction_id)

        with self.db.atomic():
            self.reconciler.revert_effect(old)
            try:
                self.db.delete_transaction(transaction_id)
            except Exception as exc:
                logger.error(
                    "Delete of transaction %s failed after reverting its ledger effect: %s",
                    transaction_id,
                    exc,
                )
                raise LedgerInconsistentError(transaction_id, exc) from exc

        logger.info("Deleted transaction %s", transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        reference_month: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            account_id: Optional account ID filter
            category_id: Optional category ID filter
            reference_month: Optional reference month filter (any day of the month)

        Returns:
            List of transaction entities, newest first
        """
        if reference_month is not None:
            reference_month = first_of_month(reference_month)
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
            category_id=category_id,
            reference_month=reference_month,
        )
