"""Tests for database mappers."""

import pytest
from datetime import datetime, date, UTC
from decimal import Decimal

from fintrack.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Debt as ORMDebt,
    Investment as ORMInvestment,
    Transaction as ORMTransaction,
)
from fintrack.database.mappers import (
    account_to_domain,
    category_to_domain,
    debt_to_domain,
    investment_to_domain,
    link_to_columns,
    transaction_to_domain,
)
from fintrack.domain.entities import (
    Account,
    CategoryType,
    DebtLink,
    InvestmentLink,
    StandardLink,
    Transaction,
    TransactionKind,
    link_from_ids,
)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        orm_account = ORMAccount(
            id=1,
            name="Nubank",
            account_type="Credit Card",
            created_at=datetime.now(UTC),
        )
        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.name == "Nubank"
        assert domain_account.account_type == "Credit Card"
        assert domain_account.created_at == orm_account.created_at


class TestCategoryMapper:
    def test_category_type_becomes_enum(self):
        orm_category = ORMCategory(
            id=2, name="Loan Payment", category_type="Debt", created_at=datetime.now(UTC)
        )
        assert category_to_domain(orm_category).category_type == CategoryType.DEBT


class TestLedgerMappers:
    def test_debt_to_domain(self):
        orm_debt = ORMDebt(
            id=3,
            description="Car Loan",
            original_amount=Decimal("24000.00"),
            current_balance=Decimal("12000.50"),
            total_installments=48,
            remaining_installments=24,
            monthly_interest_rate=None,
            created_at=datetime.now(UTC),
        )
        debt = debt_to_domain(orm_debt)

        assert debt.current_balance == Decimal("12000.50")
        assert debt.remaining_installments == 24
        assert debt.monthly_interest_rate is None

    def test_investment_amounts_are_decimal(self):
        orm_investment = ORMInvestment(
            id=4, name="CDB", initial_amount=1000, current_balance=1050.5, created_at=datetime.now(UTC)
        )
        investment = investment_to_domain(orm_investment)

        assert investment.initial_amount == Decimal("1000")
        assert investment.current_balance == Decimal("1050.5")


class TestTransactionMapper:
    def _orm_transaction(self, debt_id=None, investment_id=None):
        return ORMTransaction(
            id=10,
            account_id=1,
            description="Parcela",
            amount=Decimal("100.00"),
            kind="Expense",
            date=date(2024, 3, 15),
            reference_month=date(2024, 3, 1),
            category_id=2,
            subcategory_id=None,
            debt_id=debt_id,
            investment_id=investment_id,
            created_at=datetime.now(UTC),
        )

    def test_debt_link(self):
        txn = transaction_to_domain(self._orm_transaction(debt_id=3))

        assert isinstance(txn, Transaction)
        assert txn.kind == TransactionKind.EXPENSE
        assert txn.link == DebtLink(3)
        assert txn.debt_id == 3
        assert txn.investment_id is None

    def test_investment_link(self):
        txn = transaction_to_domain(self._orm_transaction(investment_id=4))
        assert txn.link == InvestmentLink(4)

    def test_standard_link(self):
        assert transaction_to_domain(self._orm_transaction()).link == StandardLink()

    def test_both_references_are_rejected(self):
        with pytest.raises(ValueError):
            transaction_to_domain(self._orm_transaction(debt_id=3, investment_id=4))


@pytest.mark.parametrize(
    "link",
    [StandardLink(), DebtLink(5), InvestmentLink(6)],
)
def test_link_columns_round_trip(link):
    columns = link_to_columns(link)
    assert link_from_ids(columns["debt_id"], columns["investment_id"]) == link
