"""Debt and investment commands."""

from decimal import Decimal

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.debt import DebtService
from fintrack.domain.errors import DomainError
from fintrack.domain.investment import InvestmentService
from fintrack.utils.amount_parser import parse_amount


def _parse_amount_or_exit(ctx: click.Context, value: str | None, label: str) -> Decimal | None:
    if value is None:
        return None
    try:
        return parse_amount(value)
    except DomainError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.group()
def debt_group():
    """Manage debts."""
    pass


@debt_group.command("create")
@click.argument("description")
@click.option("--amount", required=True, help="Original amount owed")
@click.option("--balance", help="Amount still owed (defaults to --amount)")
@click.option("--installments", type=int, help="Total number of installments")
@click.option("--remaining", type=int, help="Installments left (defaults to --installments)")
@click.option("--interest", help="Monthly interest rate in percent")
@click.pass_context
def create_debt(
    ctx,
    description: str,
    amount: str,
    balance: str | None,
    installments: int | None,
    remaining: int | None,
    interest: str | None,
):
    """Register a debt.

    Examples:
        fintrack debt create "Car loan" --amount 24000 --installments 48
        fintrack debt create "Credit card" --amount "3.500,00" --balance "1.200,00"
    """
    db = ctx.obj["db"]
    service = DebtService(db)

    original = _parse_amount_or_exit(ctx, amount, "amount")
    current = _parse_amount_or_exit(ctx, balance, "balance")
    rate = _parse_amount_or_exit(ctx, interest, "interest rate")

    try:
        debt_id = service.create_debt(
            description=description,
            original_amount=original,
            current_balance=current,
            total_installments=installments,
            remaining_installments=remaining,
            monthly_interest_rate=rate,
        )
        click.echo(f"Created debt '{description}' (ID: {debt_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@debt_group.command("list")
@click.pass_context
def list_debts(ctx):
    """List debts with their current balances."""
    db = ctx.obj["db"]
    debts = DebtService(db).list_debts()
    if not debts:
        click.echo("No debts found.")
        return

    click.echo("\nDebts:")
    click.echo("-" * 80)
    for debt in debts:
        installments = ""
        if debt.remaining_installments is not None:
            total = debt.total_installments if debt.total_installments is not None else "?"
            installments = f" | Installments: {debt.remaining_installments}/{total}"
        click.echo(
            f"ID: {debt.id:3d} | {debt.description:20s} | "
            f"Balance: {debt.current_balance:,.2f} of {debt.original_amount:,.2f}{installments}"
        )


@click.group()
def investment_group():
    """Manage investments."""
    pass


@investment_group.command("create")
@click.argument("name")
@click.option("--initial", default="0", help="Initial amount invested")
@click.option("--balance", help="Current balance (defaults to --initial)")
@click.pass_context
def create_investment(ctx, name: str, initial: str, balance: str | None):
    """Register an investment position.

    Examples:
        fintrack investment create "Tesouro Selic"
        fintrack investment create "Index fund" --initial 1000 --balance 1130.50
    """
    db = ctx.obj["db"]
    service = InvestmentService(db)

    initial_amount = _parse_amount_or_exit(ctx, initial, "initial amount")
    current = _parse_amount_or_exit(ctx, balance, "balance")

    try:
        investment_id = service.create_investment(
            name=name, initial_amount=initial_amount, current_balance=current
        )
        click.echo(f"Created investment '{name}' (ID: {investment_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@investment_group.command("list")
@click.pass_context
def list_investments(ctx):
    """List investments with their current balances."""
    db = ctx.obj["db"]
    investments = InvestmentService(db).list_investments()
    if not investments:
        click.echo("No investments found.")
        return

    click.echo("\nInvestments:")
    click.echo("-" * 80)
    for inv in investments:
        click.echo(
            f"ID: {inv.id:3d} | {inv.name:20s} | "
            f"Balance: {inv.current_balance:,.2f} | Initial: {inv.initial_amount:,.2f}"
        )


def register_commands(cli):
    """Register debt and investment commands with main CLI."""
    cli.add_command(debt_group, name="debt")
    cli.add_command(investment_group, name="investment")
