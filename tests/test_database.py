"""Tests for the SQLAlchemy database implementation."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from fintrack.domain import entities
from fintrack.domain.entities import DebtLink, StandardLink, TransactionKind
from fintrack.domain.errors import NotFoundError


def create_transaction(db, account_id, link=None, amount="10.00"):
    return db.create_transaction(
        account_id=account_id,
        description="test",
        amount=Decimal(amount),
        kind=TransactionKind.EXPENSE,
        date=date(2024, 3, 15),
        reference_month=date(2024, 3, 1),
        category_id=None,
        subcategory_id=None,
        link=link or StandardLink(),
    )


class TestDatabaseInterface:
    """Tests to verify the Database interface returns domain models."""

    def test_get_account_returns_domain_model(self, temp_db):
        account_id = temp_db.create_account(name="Test Account", account_type="Cash")

        account = temp_db.get_account(account_id)

        assert isinstance(account, entities.Account)
        assert account.account_type == "Cash"
        assert isinstance(account.created_at, datetime)

    def test_missing_rows_return_none(self, temp_db):
        assert temp_db.get_account(1) is None
        assert temp_db.get_category(1) is None
        assert temp_db.get_debt(1) is None
        assert temp_db.get_investment(1) is None
        assert temp_db.get_transaction(1) is None

    def test_transaction_round_trip(self, temp_db):
        account_id = temp_db.create_account(name="Test Account", account_type="Cash")
        debt_id = temp_db.create_debt(
            description="Loan", original_amount=Decimal("500"), current_balance=Decimal("500")
        )

        transaction_id = create_transaction(temp_db, account_id, link=DebtLink(debt_id))
        txn = temp_db.get_transaction(transaction_id)

        assert isinstance(txn, entities.Transaction)
        assert txn.amount == Decimal("10.00")
        assert txn.link == DebtLink(debt_id)
        assert txn.reference_month == date(2024, 3, 1)

    def test_update_balances(self, temp_db):
        debt_id = temp_db.create_debt(
            description="Loan",
            original_amount=Decimal("500"),
            current_balance=Decimal("500"),
            total_installments=5,
            remaining_installments=5,
        )
        temp_db.update_debt_balance(debt_id, Decimal("400"), 4)
        debt = temp_db.get_debt(debt_id)
        assert (debt.current_balance, debt.remaining_installments) == (Decimal("400"), 4)

        investment_id = temp_db.create_investment(
            name="CDB", initial_amount=Decimal("0"), current_balance=Decimal("0")
        )
        temp_db.update_investment_balance(investment_id, Decimal("50"), Decimal("50"))
        investment = temp_db.get_investment(investment_id)
        assert (investment.current_balance, investment.initial_amount) == (Decimal("50"), Decimal("50"))

    def test_update_unknown_rows(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_debt_balance(1, Decimal("1"), None)
        with pytest.raises(NotFoundError):
            temp_db.update_investment_balance(1, Decimal("1"), Decimal("1"))
        with pytest.raises(NotFoundError):
            temp_db.delete_transaction(1)


class TestAtomic:
    def test_commits_on_success(self, temp_db, reopen_db):
        account_id = temp_db.create_account(name="A", account_type="Cash")

        with temp_db.atomic():
            create_transaction(temp_db, account_id)
            create_transaction(temp_db, account_id)

        assert len(reopen_db().list_transactions()) == 2

    def test_rolls_back_on_error(self, temp_db):
        account_id = temp_db.create_account(name="A", account_type="Cash")

        with pytest.raises(RuntimeError):
            with temp_db.atomic():
                create_transaction(temp_db, account_id)
                raise RuntimeError("boom")

        assert temp_db.list_transactions() == []
        assert temp_db.get_account(account_id) is not None

    def test_nested_units_join_the_outer_one(self, temp_db):
        account_id = temp_db.create_account(name="A", account_type="Cash")

        with pytest.raises(RuntimeError):
            with temp_db.atomic():
                with temp_db.atomic():
                    create_transaction(temp_db, account_id)
                raise RuntimeError("outer failure")

        assert temp_db.list_transactions() == []
