"""Ledger reconciliation: keep debt and investment balances in step with transactions.

Balances are stored, not recomputed, so every create/edit/delete of a linked
transaction has to apply or revert its effect here. The pure ``*_after_*``
functions hold the arithmetic; ``LedgerReconciler`` loads and stores the
balances through the database boundary.

Known asymmetries:

- reverting restores one remaining installment even if that takes the count
  above the debt's total;
- a contribution that lands on a zero-balance investment overwrites
  ``initial_amount`` and reverting it does not restore the old value.
"""

import logging
from decimal import Decimal
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.entities import (
    BalanceDelta,
    Debt,
    DebtLink,
    Investment,
    InvestmentLink,
    Transaction,
    TransactionKind,
)
from fintrack.domain.errors import ReconcileError, debt_not_found, investment_not_found

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def debt_after_apply(
    balance: Decimal, remaining: Optional[int], amount: Decimal
) -> tuple[Decimal, Optional[int]]:
    """Return (balance, remaining installments) after paying ``amount``."""
    new_balance = max(ZERO, balance - amount)
    new_remaining = None if remaining is None else max(0, remaining - 1)
    return new_balance, new_remaining


def debt_after_revert(
    balance: Decimal, remaining: Optional[int], amount: Decimal
) -> tuple[Decimal, Optional[int]]:
    """Return (balance, remaining installments) after undoing a payment."""
    new_remaining = None if remaining is None else remaining + 1
    return balance + amount, new_remaining


def investment_after_apply(
    balance: Decimal, initial_amount: Decimal, amount: Decimal, kind: TransactionKind
) -> tuple[Decimal, Decimal]:
    """Return (balance, initial amount) after a contribution or withdrawal.

    Expenses are contributions and Income is a withdrawal. A contribution
    on an empty position becomes its opening deposit.
    """
    if kind == TransactionKind.EXPENSE:
        if balance == ZERO:
            initial_amount = amount
        return balance + amount, initial_amount
    return max(ZERO, balance - amount), initial_amount


def investment_after_revert(
    balance: Decimal, initial_amount: Decimal, amount: Decimal, kind: TransactionKind
) -> tuple[Decimal, Decimal]:
    """Return (balance, initial amount) after undoing a contribution or withdrawal."""
    if kind == TransactionKind.EXPENSE:
        return max(ZERO, balance - amount), initial_amount
    return balance + amount, initial_amount


class LedgerReconciler:
    """Applies and reverts transaction effects on linked debts and investments."""

    def __init__(self, db: Database):
        """Initialize reconciler.

        Args:
            db: Database instance
        """
        self.db = db

    def apply_effect(self, transaction: Transaction) -> BalanceDelta:
        """Apply a transaction's effect on its linked debt or investment.

        Args:
            transaction: Transaction as persisted (new or post-edit state)

        Returns:
            The balance change that was stored (a no-op delta for
            transactions without a ledger link)

        Raises:
            ReconcileError: If the linked debt or investment does not exist
        """
        link = transaction.link
        if isinstance(link, DebtLink):
            debt = self._require_debt(link.debt_id)
            balance, remaining = debt_after_apply(
                debt.current_balance, debt.remaining_installments, transaction.amount
            )
            return self._store_debt(debt, balance, remaining, "apply", transaction)

        if isinstance(link, InvestmentLink):
            investment = self._require_investment(link.investment_id)
            balance, initial = investment_after_apply(
                investment.current_balance,
                investment.initial_amount,
                transaction.amount,
                transaction.kind,
            )
            return self._store_investment(investment, balance, initial, "apply", transaction)

        return BalanceDelta()

    def revert_effect(self, old_transaction: Transaction) -> BalanceDelta:
        """Undo a previously applied transaction effect.

        Args:
            old_transaction: Snapshot of the transaction as it was when its
                effect was applied (pre-edit state)

        Returns:
            The balance change that was stored

        Raises:
            ReconcileError: If the linked debt or investment does not exist
        """
        link = old_transaction.link
        if isinstance(link, DebtLink):
            debt = self._require_debt(link.debt_id)
            balance, remaining = debt_after_revert(
                debt.current_balance, debt.remaining_installments, old_transaction.amount
            )
            return self._store_debt(debt, balance, remaining, "revert", old_transaction)

        if isinstance(link, InvestmentLink):
            investment = self._require_investment(link.investment_id)
            balance, initial = investment_after_revert(
                investment.current_balance,
                investment.initial_amount,
                old_transaction.amount,
                old_transaction.kind,
            )
            return self._store_investment(investment, balance, initial, "revert", old_transaction)

        return BalanceDelta()

    def _require_debt(self, debt_id: int) -> Debt:
        debt = self.db.get_debt(debt_id)
        if debt is None:
            raise ReconcileError(debt_not_found(debt_id))
        return debt

    def _require_investment(self, investment_id: int) -> Investment:
        investment = self.db.get_investment(investment_id)
        if investment is None:
            raise ReconcileError(investment_not_found(investment_id))
        return investment

    def _store_debt(
        self,
        debt: Debt,
        balance: Decimal,
        remaining: Optional[int],
        action: str,
        transaction: Transaction,
    ) -> BalanceDelta:
        self.db.update_debt_balance(debt.id, balance, remaining)
        logger.debug(
            "%s transaction %s on debt %s: balance %s -> %s, installments %s -> %s",
            action,
            transaction.id,
            debt.id,
            debt.current_balance,
            balance,
            debt.remaining_installments,
            remaining,
        )
        return BalanceDelta(
            target="debt",
            target_id=debt.id,
            balance_before=debt.current_balance,
            balance_after=balance,
            installments_before=debt.remaining_installments,
            installments_after=remaining,
        )

    def _store_investment(
        self,
        investment: Investment,
        balance: Decimal,
        initial: Decimal,
        action: str,
        transaction: Transaction,
    ) -> BalanceDelta:
        self.db.update_investment_balance(investment.id, balance, initial)
        logger.debug(
            "%s transaction %s on investment %s: balance %s -> %s",
            action,
            transaction.id,
            investment.id,
            investment.current_balance,
            balance,
        )
        return BalanceDelta(
            target="investment",
            target_id=investment.id,
            balance_before=investment.current_balance,
            balance_after=balance,
            initial_amount_before=investment.initial_amount,
            initial_amount_after=initial,
        )
