"""Transaction management commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.resolution import resolve_or_exit
from fintrack.domain.account import AccountService
from fintrack.domain.category import CategoryService
from fintrack.domain.debt import DebtService
from fintrack.domain.entities import DebtLink, InvestmentLink, TransactionKind
from fintrack.domain.errors import DomainError
from fintrack.domain.investment import InvestmentService
from fintrack.domain.transaction import TransactionService
from fintrack.utils.amount_parser import normalize_amount
from fintrack.utils.date_parser import parse_date, parse_reference_month
from fintrack.utils.resolvers import (
    resolve_account,
    resolve_category,
    resolve_debt,
    resolve_investment,
    resolve_subcategory,
)

KIND_CHOICES = {"income": TransactionKind.INCOME, "expense": TransactionKind.EXPENSE}


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", help="Transaction amount; a negative amount also marks it as an expense")
@click.option(
    "--kind",
    type=click.Choice(list(KIND_CHOICES), case_sensitive=False),
    help="Income or expense",
)
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category name or ID, or empty string to clear")
@click.option("--subcategory", help="Subcategory name or ID")
@click.option("--debt", help="Debt description or ID")
@click.option("--investment", help="Investment name or ID")
@click.option("--month", help="Reference month as YYYY-MM")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    date: str | None,
    amount: str | None,
    kind: str | None,
    description: str | None,
    category: str | None,
    subcategory: str | None,
    debt: str | None,
    investment: str | None,
    month: str | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Use --category "" to clear the
    category. Balances of linked debts and investments follow the edit.

    Examples:
        fintrack transaction update 1 --amount -75.00
        fintrack transaction update 1 --category "Loan payment" --debt "Car loan"
        fintrack transaction update 1 --category ""  # Clear category
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    category_service = CategoryService(db)

    try:
        txn = transaction_service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    account_id = None
    if account is not None:
        account_id = resolve_or_exit(ctx, resolve_account, AccountService(db), account)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    txn_amount = None
    txn_kind = KIND_CHOICES[kind.lower()] if kind else None
    if amount is not None:
        try:
            reading = normalize_amount(amount)
        except DomainError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
        txn_amount = abs(reading.value)
        if reading.value < 0 and txn_kind is None:
            txn_kind = TransactionKind.EXPENSE

    reference_month = None
    if month is not None:
        try:
            reference_month = parse_reference_month(month)
        except ValueError as e:
            click.echo(f"Error: Invalid reference month: {e}", err=True)
            ctx.exit(1)

    category_id = None
    clear_category = False
    if category is not None:
        if category == "":
            clear_category = True
        else:
            category_id = resolve_or_exit(ctx, resolve_category, category_service, category)

    subcategory_id = None
    if subcategory is not None:
        owner_id = category_id if category_id is not None else txn.category_id
        if owner_id is None or clear_category:
            click.echo("Error: --subcategory requires a category", err=True)
            ctx.exit(1)
        subcategory_id = resolve_or_exit(
            ctx, resolve_subcategory, category_service, owner_id, subcategory
        )

    debt_id = None
    if debt is not None:
        debt_id = resolve_or_exit(ctx, resolve_debt, DebtService(db), debt)

    investment_id = None
    if investment is not None:
        investment_id = resolve_or_exit(ctx, resolve_investment, InvestmentService(db), investment)

    try:
        transaction_service.update_transaction(
            transaction_id=transaction_id,
            account_id=account_id,
            description=description,
            amount=txn_amount,
            kind=txn_kind,
            date=txn_date,
            reference_month=reference_month,
            category_id=category_id,
            subcategory_id=subcategory_id,
            debt_id=debt_id,
            investment_id=investment_id,
            clear_category=clear_category,
        )
        click.echo(f"Updated transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--category", help="Category name or ID")
@click.option("--account", help="Account name or ID")
@click.option("--month", help="Reference month as YYYY-MM")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    account: str | None,
    month: str | None,
):
    """View transactions with optional filters.

    Account and category can be specified by name or ID.
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    category_service = CategoryService(db)
    account_service = AccountService(db)

    start = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    end = None
    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    reference_month = None
    if month:
        try:
            reference_month = parse_reference_month(month)
        except ValueError as e:
            click.echo(f"Error: Invalid reference month: {e}", err=True)
            ctx.exit(1)

    account_id = None
    if account:
        account_id = resolve_or_exit(ctx, resolve_account, account_service, account)

    category_id = None
    if category:
        category_id = resolve_or_exit(ctx, resolve_category, category_service, category)

    transactions = service.list_transactions(
        start_date=start,
        end_date=end,
        account_id=account_id,
        category_id=category_id,
        reference_month=reference_month,
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in account_service.list_accounts()}
    categories = {cat.id: cat.name for cat in category_service.list_categories()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Month':<8} {'Amount':>12} {'Kind':<8} "
        f"{'Account':<16} {'Category':<24} {'Description':<22}"
    )
    click.echo("-" * 110)

    for txn in transactions:
        category_name = categories.get(txn.category_id, "") if txn.category_id else ""
        if isinstance(txn.link, DebtLink):
            category_name = f"{category_name} (debt {txn.link.debt_id})"
        elif isinstance(txn.link, InvestmentLink):
            category_name = f"{category_name} (inv. {txn.link.investment_id})"

        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {txn.reference_month:%Y-%m}  "
            f"{txn.amount:>12,.2f} {txn.kind.value:<8} "
            f"{accounts.get(txn.account_id, 'Unknown')[:16]:<16} "
            f"{category_name[:24]:<24} {(txn.description or '')[:22]:<22}"
        )

    total_expenses = sum(txn.amount for txn in transactions if txn.kind == TransactionKind.EXPENSE)
    total_income = sum(txn.amount for txn in transactions if txn.kind == TransactionKind.INCOME)
    click.echo("-" * 110)
    click.echo(
        f"{'TOTAL':<6} Expenses: {total_expenses:,.2f} | "
        f"Income: {total_income:,.2f} | Count: {len(transactions)}"
    )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction and undo its effect on linked balances.

    Examples:
        fintrack transaction delete 1
        fintrack transaction delete 1 --yes
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    txn = transaction_service.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        transaction_service.delete_transaction(transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
