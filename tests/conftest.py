"""Shared pytest fixtures for fintrack tests."""

import logging
import os
import tempfile
from decimal import Decimal

import pytest

from fintrack.database.factories import create_sqlite_database
from fintrack.domain.account import AccountService
from fintrack.domain.category import CategoryService
from fintrack.domain.debt import DebtService
from fintrack.domain.entities import CategoryType
from fintrack.domain.investment import InvestmentService
from fintrack.domain.statement_import import StatementImportService
from fintrack.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def reopen_db(temp_db):
    """Open a second connection to the temporary database.

    Used to check what a CLI invocation actually committed.
    """
    opened = []

    def _reopen():
        db = create_sqlite_database(database_path=temp_db.database_path)
        db.connect()
        opened.append(db)
        return db

    yield _reopen

    for db in opened:
        db.disconnect()


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def debt_service(temp_db):
    """Create a DebtService with a temporary database."""
    return DebtService(temp_db)


@pytest.fixture
def investment_service(temp_db):
    """Create an InvestmentService with a temporary database."""
    return InvestmentService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a StatementImportService with a temporary database."""
    return StatementImportService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account for testing."""
    account_id = account_service.create_account(name="Test Account")
    return account_service.get_account(account_id)


@pytest.fixture
def sample_categories(category_service):
    """Create one category of each type and return their IDs by name."""
    category_ids = {
        "Groceries": category_service.create_category("Groceries"),
        "Salary": category_service.create_category("Salary"),
        "Loan Payment": category_service.create_category("Loan Payment", CategoryType.DEBT),
        "Investing": category_service.create_category("Investing", CategoryType.INVESTMENT),
    }
    category_ids["Groceries > Market"] = category_service.create_subcategory(
        category_ids["Groceries"], "Market"
    )
    return category_ids


@pytest.fixture
def sample_debt(debt_service):
    """Create a debt with balance 1000 and 10 installments left."""
    debt_id = debt_service.create_debt(
        description="Car Loan",
        original_amount=Decimal("1000"),
        total_installments=10,
    )
    return debt_service.get_debt(debt_id)


@pytest.fixture
def sample_investment(investment_service):
    """Create an empty investment position."""
    investment_id = investment_service.create_investment(name="Index Fund")
    return investment_service.get_investment(investment_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture(autouse=True)
def reset_fintrack_logger():
    """Drop handlers the CLI attaches to the package logger during a test."""
    yield
    logger = logging.getLogger("fintrack")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
