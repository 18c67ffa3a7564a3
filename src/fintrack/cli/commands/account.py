"""Account management commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.account import AccountService
from fintrack.domain.entities import ACCOUNT_TYPES
from fintrack.domain.errors import DomainError


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    default="Checking Account",
    show_default=True,
    help="Account type",
)
@click.pass_context
def create_account(ctx, name: str, account_type: str):
    """Create a new account.

    Examples:
        fintrack account create "Nubank"
        fintrack account create "Wallet" --type Cash
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    # click.Choice returns the typed value; map back to the canonical spelling
    canonical_type = next(t for t in ACCOUNT_TYPES if t.lower() == account_type.lower())

    try:
        account_id = service.create_account(name=name, account_type=canonical_type)
        click.echo(f"Created account '{name}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Type: {acc.account_type}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
