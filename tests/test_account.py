"""Tests for account service and commands."""

import pytest
from fintrack.cli.main import cli
from fintrack.domain.errors import ConflictError, ValidationError


def test_create_account_defaults(account_service):
    account_id = account_service.create_account("  Nubank ")
    account = account_service.get_account(account_id)

    assert account.name == "Nubank"
    assert account.account_type == "Checking Account"


def test_create_account_rejects_duplicates(account_service):
    account_service.create_account("Nubank")
    with pytest.raises(ConflictError):
        account_service.create_account("Nubank")


def test_create_account_rejects_unknown_type(account_service):
    with pytest.raises(ValidationError, match="Unknown account type"):
        account_service.create_account("Nubank", account_type="Piggy Bank")


def test_account_create(cli_runner, temp_db):
    """Test creating an account from the command line."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Wallet", "--type", "cash"]
    )

    assert result.exit_code == 0
    assert "Created account 'Wallet'" in result.output
    assert "ID:" in result.output


def test_account_create_duplicate(cli_runner, temp_db, sample_account):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Test Account"]
    )

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "already exists" in result.output


def test_account_list_empty(cli_runner, temp_db):
    """Test listing accounts when none exist."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])

    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_list_with_data(cli_runner, temp_db, sample_account):
    """Test listing accounts with data."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])

    assert result.exit_code == 0
    assert "Test Account" in result.output
    assert "Checking Account" in result.output
