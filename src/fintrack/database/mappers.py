"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the database schema changes.
"""

from decimal import Decimal
from typing import Optional

from fintrack.domain import entities as domain
from fintrack.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Subcategory as ORMSubcategory,
    Debt as ORMDebt,
    Investment as ORMInvestment,
    Transaction as ORMTransaction,
)


def _decimal(value) -> Optional[Decimal]:
    """Coerce a Numeric column value to Decimal."""
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=orm_account.account_type,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        category_type=domain.CategoryType(orm_category.category_type),
        created_at=orm_category.created_at,
    )


def subcategory_to_domain(orm_subcategory: ORMSubcategory) -> domain.Subcategory:
    """Convert SQLAlchemy Subcategory model to domain Subcategory entity."""
    return domain.Subcategory(
        id=orm_subcategory.id,
        category_id=orm_subcategory.category_id,
        name=orm_subcategory.name,
        created_at=orm_subcategory.created_at,
    )


def debt_to_domain(orm_debt: ORMDebt) -> domain.Debt:
    """Convert SQLAlchemy Debt model to domain Debt entity."""
    return domain.Debt(
        id=orm_debt.id,
        description=orm_debt.description,
        original_amount=_decimal(orm_debt.original_amount),
        current_balance=_decimal(orm_debt.current_balance),
        total_installments=orm_debt.total_installments,
        remaining_installments=orm_debt.remaining_installments,
        monthly_interest_rate=_decimal(orm_debt.monthly_interest_rate),
        created_at=orm_debt.created_at,
    )


def investment_to_domain(orm_investment: ORMInvestment) -> domain.Investment:
    """Convert SQLAlchemy Investment model to domain Investment entity."""
    return domain.Investment(
        id=orm_investment.id,
        name=orm_investment.name,
        initial_amount=_decimal(orm_investment.initial_amount),
        current_balance=_decimal(orm_investment.current_balance),
        created_at=orm_investment.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        description=orm_transaction.description,
        amount=_decimal(orm_transaction.amount),
        kind=domain.TransactionKind(orm_transaction.kind),
        date=orm_transaction.date,
        reference_month=orm_transaction.reference_month,
        category_id=orm_transaction.category_id,
        subcategory_id=orm_transaction.subcategory_id,
        link=domain.link_from_ids(orm_transaction.debt_id, orm_transaction.investment_id),
        created_at=orm_transaction.created_at,
    )


def link_to_columns(link: domain.TransactionLink) -> dict[str, Optional[int]]:
    """Flatten a transaction link into the nullable reference columns."""
    if isinstance(link, domain.DebtLink):
        return {"debt_id": link.debt_id, "investment_id": None}
    if isinstance(link, domain.InvestmentLink):
        return {"debt_id": None, "investment_id": link.investment_id}
    return {"debt_id": None, "investment_id": None}
