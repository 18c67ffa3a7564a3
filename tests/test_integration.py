"""Integration tests for end-to-end workflows."""

from decimal import Decimal

from fintrack.cli.main import cli


def test_full_workflow(cli_runner, temp_db, tmp_path, reopen_db):
    """Test complete workflow: account, categories, debt, import, edit, delete."""

    def run(*args):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])
        assert result.exit_code == 0, result.output
        return result

    run("account", "create", "Nubank", "--type", "Checking Account")
    run("category", "create", "Cartão", "--type", "debt")
    run("debt", "create", "Fatura", "--amount", "1.000,00", "--installments", "10")

    statement = tmp_path / "extrato.csv"
    statement.write_text(
        "05/01/2024,Parcela janeiro,\"-100,00\"\n"
        "05/02/2024,Parcela fevereiro,\"-150,00\"\n",
        encoding="utf-8",
    )
    result = run(
        "import", str(statement), "--account", "Nubank", "--category", "Cartão", "--debt", "Fatura"
    )
    assert "Imported 2 transactions" in result.output

    db = reopen_db()
    debt = db.list_debts()[0]
    assert debt.current_balance == Decimal("750")
    assert debt.remaining_installments == 8

    january, february = sorted(db.list_transactions(), key=lambda t: t.date)
    db.disconnect()

    run("transaction", "update", str(january.id), "--amount", "-200")
    run("transaction", "delete", str(february.id), "--yes")

    db = reopen_db()
    debt = db.list_debts()[0]
    assert debt.current_balance == Decimal("800")
    assert debt.remaining_installments == 9
    assert [t.id for t in db.list_transactions()] == [january.id]

    result = run("transaction", "list", "--account", "Nubank")
    assert "Parcela janeiro" in result.output
    assert "Parcela fevereiro" not in result.output
