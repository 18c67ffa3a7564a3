"""Statement import command."""

import click
from fintrack.cli.error_handling import handle_batch_error, handle_domain_error
from fintrack.cli.resolution import resolve_categorization, resolve_or_exit
from fintrack.domain.account import AccountService
from fintrack.domain.errors import BatchImportError
from fintrack.domain.statement_import import StatementImportService
from fintrack.utils.date_parser import parse_reference_month
from fintrack.utils.resolvers import resolve_account


@click.command("import")
@click.argument("statement_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--account", required=True, help="Account name or ID")
@click.option("--category", help="Category applied to every row (name or ID)")
@click.option("--subcategory", help="Subcategory applied to every row (name or ID)")
@click.option("--debt", help="Debt linked to every row (description or ID)")
@click.option("--investment", help="Investment linked to every row (name or ID)")
@click.option("--month", help="Reference month as YYYY-MM (default: month of each row)")
@click.option(
    "--strict",
    is_flag=True,
    help="Reject amounts whose decimal separator is ambiguous (e.g. '1,234,56')",
)
@click.pass_context
def import_statement(
    ctx,
    statement_file: str,
    account: str,
    category: str | None,
    subcategory: str | None,
    debt: str | None,
    investment: str | None,
    month: str | None,
    strict: bool,
):
    """Import transactions from a bank statement.

    Each line holds DATE, DESCRIPTION and AMOUNT separated by ';', ',' or a
    tab. Dates are DD/MM/YYYY and negative amounts are expenses.

    Rows are imported in order. If a row fails, the rows before it stay
    imported and the command reports where it stopped.

    Examples:
        fintrack import statement.csv --account Nubank
        fintrack import card.csv --account 1 --category "Card payment" --debt "Credit card"
    """
    db = ctx.obj["db"]
    settings = ctx.obj["settings"]
    service = StatementImportService(db, max_bytes=settings.max_statement_bytes)

    account_id = resolve_or_exit(ctx, resolve_account, AccountService(db), account)

    reference_month = None
    if month:
        try:
            reference_month = parse_reference_month(month)
        except ValueError as e:
            click.echo(f"Error: Invalid reference month: {e}", err=True)
            ctx.exit(1)

    categorization = resolve_categorization(ctx, db, category, subcategory, debt, investment)

    try:
        summary = service.import_file(
            statement_file,
            account_id,
            categorization=categorization,
            reference_month=reference_month,
            reject_ambiguous=strict,
        )
    except BatchImportError as e:
        handle_batch_error(ctx, e)
    except (ValueError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    noun = "transaction" if summary.count == 1 else "transactions"
    click.echo(f"Imported {summary.count} {noun}")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_statement)
