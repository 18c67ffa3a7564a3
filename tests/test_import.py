"""Tests for the import command."""

import pytest
from fintrack.cli.main import cli


@pytest.fixture
def statement_file(tmp_path):
    path = tmp_path / "extrato.csv"
    path.write_text(
        "01/03/2024;Salário;5.000,00\n"
        "05/03/2024;Mercado;-320,75\n",
        encoding="utf-8",
    )
    return path


def test_import_statement(cli_runner, temp_db, sample_account, statement_file, reopen_db):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "import", str(statement_file), "--account", "Test Account"],
    )

    assert result.exit_code == 0
    assert "Imported 2 transactions" in result.output
    assert len(reopen_db().list_transactions()) == 2


def test_import_with_category_and_month(
    cli_runner, temp_db, sample_account, sample_categories, statement_file, reopen_db
):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path, "import", str(statement_file),
            "--account", "Test Account", "--category", "Groceries",
            "--subcategory", "Market", "--month", "2024-04",
        ],
    )

    assert result.exit_code == 0
    transactions = reopen_db().list_transactions()
    assert {t.category_id for t in transactions} == {sample_categories["Groceries"]}
    assert {t.reference_month.month for t in transactions} == {4}


def test_import_unknown_debt(
    cli_runner, temp_db, sample_account, sample_categories, sample_debt, tmp_path, reopen_db
):
    path = tmp_path / "parcelas.csv"
    path.write_text("05/01/2024;Parcela;-100,00\n05/02/2024;Parcela;-100,00\n", encoding="utf-8")

    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path, "import", str(path),
            "--account", "Test Account", "--category", "Loan Payment", "--debt", "999",
        ],
    )

    assert result.exit_code == 1
    assert "Debt ID 999 not found" in result.output
    assert reopen_db().list_transactions() == []


def test_import_reports_failing_row(cli_runner, temp_db, sample_account, sample_categories, tmp_path, reopen_db):
    path = tmp_path / "extrato.csv"
    path.write_text("05/01/2024;Parcela;-100,00\n", encoding="utf-8")

    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path, "import", str(path),
            "--account", "Test Account", "--category", "Loan Payment",
        ],
    )

    assert result.exit_code == 1
    assert "0 rows imported" in result.output
    assert "failed at row 1" in result.output
    assert "debt must be linked" in result.output
    assert reopen_db().list_transactions() == []


def test_import_parse_error(cli_runner, temp_db, sample_account, tmp_path, reopen_db):
    path = tmp_path / "broken.csv"
    path.write_text("01/03/2024;Salário;5.000,00\n31/02/2024;Mercado;-1,00\n", encoding="utf-8")

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "import", str(path), "--account", "Test Account"]
    )

    assert result.exit_code == 1
    assert "Line 2" in result.output
    assert reopen_db().list_transactions() == []


def test_import_huge_amount(cli_runner, temp_db, sample_account, tmp_path, reopen_db):
    path = tmp_path / "huge.csv"
    path.write_text("01/03/2024;Salário;1e30\n", encoding="utf-8")

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "import", str(path), "--account", "Test Account"]
    )

    assert result.exit_code == 1
    assert "Error: Line 1: invalid amount '1e30'" in result.output
    assert reopen_db().list_transactions() == []


def test_import_strict(cli_runner, temp_db, sample_account, tmp_path):
    path = tmp_path / "ambiguous.csv"
    path.write_text("01/03/2024;Compra;-1,234,56\n", encoding="utf-8")

    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "import", str(path), "--account", "Test Account", "--strict"],
    )

    assert result.exit_code == 1
    assert "ambiguous" in result.output


def test_import_size_limit_from_environment(cli_runner, temp_db, sample_account, statement_file, monkeypatch):
    monkeypatch.setenv("FINTRACK_MAX_STATEMENT_BYTES", "10")

    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "import", str(statement_file), "--account", "Test Account"],
    )

    assert result.exit_code == 1
    assert "too large" in result.output


def test_import_missing_file(cli_runner, temp_db, sample_account, tmp_path):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "import", str(tmp_path / "nope.csv"), "--account", "1"],
    )

    assert result.exit_code != 0
