"""Tests for ledger reconciliation of debts and investments."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from fintrack.domain.entities import (
    DebtLink,
    InvestmentLink,
    StandardLink,
    Transaction,
    TransactionKind,
)
from fintrack.domain.errors import ReconcileError
from fintrack.domain.reconciliation import (
    LedgerReconciler,
    debt_after_apply,
    debt_after_revert,
    investment_after_apply,
    investment_after_revert,
)


def make_transaction(amount, kind=TransactionKind.EXPENSE, link=None, transaction_id=1):
    return Transaction(
        id=transaction_id,
        account_id=1,
        description="test",
        amount=Decimal(amount),
        kind=kind,
        date=date(2024, 3, 15),
        reference_month=date(2024, 3, 1),
        category_id=None,
        subcategory_id=None,
        link=link or StandardLink(),
        created_at=datetime(2024, 3, 15),
    )


class TestDebtArithmetic:
    def test_apply_and_revert(self):
        balance, remaining = debt_after_apply(Decimal("1000"), 10, Decimal("100"))
        assert (balance, remaining) == (Decimal("900"), 9)

        balance, remaining = debt_after_revert(balance, remaining, Decimal("100"))
        assert (balance, remaining) == (Decimal("1000"), 10)

    def test_apply_floors_at_zero(self):
        assert debt_after_apply(Decimal("50"), 0, Decimal("80")) == (Decimal("0"), 0)

    def test_without_installments(self):
        assert debt_after_apply(Decimal("50"), None, Decimal("20")) == (Decimal("30"), None)
        assert debt_after_revert(Decimal("30"), None, Decimal("20")) == (Decimal("50"), None)

    def test_revert_may_exceed_total_installments(self):
        assert debt_after_revert(Decimal("0"), 10, Decimal("5"))[1] == 11


class TestInvestmentArithmetic:
    def test_first_contribution_sets_initial_amount(self):
        balance, initial = investment_after_apply(
            Decimal("0"), Decimal("0"), Decimal("500"), TransactionKind.EXPENSE
        )
        assert (balance, initial) == (Decimal("500"), Decimal("500"))

        balance, initial = investment_after_apply(
            balance, initial, Decimal("200"), TransactionKind.EXPENSE
        )
        assert (balance, initial) == (Decimal("700"), Decimal("500"))

    def test_withdrawal_floors_at_zero(self):
        assert investment_after_apply(
            Decimal("100"), Decimal("100"), Decimal("150"), TransactionKind.INCOME
        ) == (Decimal("0"), Decimal("100"))

    def test_revert(self):
        assert investment_after_revert(
            Decimal("700"), Decimal("500"), Decimal("200"), TransactionKind.EXPENSE
        ) == (Decimal("500"), Decimal("500"))
        assert investment_after_revert(
            Decimal("300"), Decimal("500"), Decimal("200"), TransactionKind.INCOME
        ) == (Decimal("500"), Decimal("500"))

    def test_revert_of_first_deposit_keeps_initial_amount(self):
        balance, initial = investment_after_apply(
            Decimal("0"), Decimal("10"), Decimal("500"), TransactionKind.EXPENSE
        )
        balance, initial = investment_after_revert(
            balance, initial, Decimal("500"), TransactionKind.EXPENSE
        )
        assert balance == Decimal("0")
        assert initial == Decimal("500")


class TestLedgerReconciler:
    def test_debt_apply_then_revert(self, temp_db, sample_debt):
        reconciler = LedgerReconciler(temp_db)
        txn = make_transaction("100", link=DebtLink(sample_debt.id))

        delta = reconciler.apply_effect(txn)
        assert delta.target == "debt"
        assert delta.balance_before == Decimal("1000")
        assert delta.balance_after == Decimal("900")
        assert delta.installments_after == 9

        debt = temp_db.get_debt(sample_debt.id)
        assert debt.current_balance == Decimal("900")
        assert debt.remaining_installments == 9

        reconciler.revert_effect(txn)
        debt = temp_db.get_debt(sample_debt.id)
        assert debt.current_balance == Decimal("1000")
        assert debt.remaining_installments == 10

    def test_investment_contributions(self, temp_db, sample_investment):
        reconciler = LedgerReconciler(temp_db)
        link = InvestmentLink(sample_investment.id)

        reconciler.apply_effect(make_transaction("500", link=link))
        investment = temp_db.get_investment(sample_investment.id)
        assert investment.current_balance == Decimal("500")
        assert investment.initial_amount == Decimal("500")

        reconciler.apply_effect(make_transaction("200", link=link, transaction_id=2))
        investment = temp_db.get_investment(sample_investment.id)
        assert investment.current_balance == Decimal("700")
        assert investment.initial_amount == Decimal("500")

    def test_withdrawal_round_trip(self, temp_db, investment_service):
        investment_id = investment_service.create_investment("Savings", Decimal("300"))
        reconciler = LedgerReconciler(temp_db)
        txn = make_transaction("120", kind=TransactionKind.INCOME, link=InvestmentLink(investment_id))

        reconciler.apply_effect(txn)
        assert temp_db.get_investment(investment_id).current_balance == Decimal("180")

        reconciler.revert_effect(txn)
        investment = temp_db.get_investment(investment_id)
        assert investment.current_balance == Decimal("300")
        assert investment.initial_amount == Decimal("300")

    def test_standard_transaction_is_noop(self, temp_db):
        delta = LedgerReconciler(temp_db).apply_effect(make_transaction("10"))
        assert delta.is_noop

    def test_missing_debt(self, temp_db):
        with pytest.raises(ReconcileError, match="Debt 99 not found"):
            LedgerReconciler(temp_db).apply_effect(make_transaction("10", link=DebtLink(99)))

    def test_missing_investment(self, temp_db):
        with pytest.raises(ReconcileError, match="Investment 42 not found"):
            LedgerReconciler(temp_db).revert_effect(
                make_transaction("10", link=InvestmentLink(42))
            )
