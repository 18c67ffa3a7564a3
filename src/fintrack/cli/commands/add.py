"""Add transaction command."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.resolution import resolve_categorization, resolve_or_exit
from fintrack.domain.account import AccountService
from fintrack.domain.entities import TransactionKind
from fintrack.domain.errors import DomainError
from fintrack.domain.transaction import TransactionService
from fintrack.utils.amount_parser import parse_signed_amount
from fintrack.utils.date_parser import parse_date, parse_reference_month
from fintrack.utils.resolvers import resolve_account

KIND_CHOICES = {"income": TransactionKind.INCOME, "expense": TransactionKind.EXPENSE}


@click.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD, DD/MM/YYYY or relative like 'today', 'yesterday')",
)
@click.option(
    "--amount",
    required=True,
    help="Transaction amount (e.g., 123.45, -123,45 or 'R$ 1.200,00')",
)
@click.option("--description", default="", help="Transaction description")
@click.option(
    "--kind",
    type=click.Choice(list(KIND_CHOICES), case_sensitive=False),
    help="Income or expense (default: taken from the amount sign)",
)
@click.option("--category", help="Category name or ID")
@click.option("--subcategory", help="Subcategory name or ID (within --category)")
@click.option("--debt", help="Debt description or ID (debt categories)")
@click.option("--investment", help="Investment name or ID (investment categories)")
@click.option("--month", help="Reference month as YYYY-MM (default: month of --date)")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    date: str,
    amount: str,
    description: str,
    kind: str | None,
    category: str | None,
    subcategory: str | None,
    debt: str | None,
    investment: str | None,
    month: str | None,
):
    """Add a transaction manually.

    Examples:
        fintrack add --account Nubank --date 2024-01-15 --amount -50.00 --description "Grocery store"
        fintrack add --account 1 --date today --amount 450 --kind expense \\
            --category "Loan payment" --debt "Car loan"
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)

    account_id = resolve_or_exit(ctx, resolve_account, account_service, account)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount, signed_kind = parse_signed_amount(amount)
    except DomainError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
    txn_kind = KIND_CHOICES[kind.lower()] if kind else signed_kind

    reference_month = None
    if month:
        try:
            reference_month = parse_reference_month(month)
        except ValueError as e:
            click.echo(f"Error: Invalid reference month: {e}", err=True)
            ctx.exit(1)

    links = resolve_categorization(ctx, db, category, subcategory, debt, investment)

    try:
        transaction_id = transaction_service.create_transaction(
            account_id=account_id,
            description=description,
            amount=txn_amount,
            kind=txn_kind,
            date=txn_date,
            reference_month=reference_month,
            category_id=links.category_id,
            subcategory_id=links.subcategory_id,
            debt_id=links.debt_id,
            investment_id=links.investment_id,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    txn = transaction_service.get_transaction(transaction_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Account: {account_service.get_account(account_id).name}")
    click.echo(f"  Date: {txn.date} (reference month {txn.reference_month:%Y-%m})")
    click.echo(f"  Amount: {txn.amount:,.2f} ({txn.kind.value})")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    if category:
        click.echo(f"  Category: {category}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
