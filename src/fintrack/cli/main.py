"""Main CLI entry point."""

import logging

import click
from fintrack.config import Settings
from fintrack.database.factories import create_sqlite_database
from fintrack.logging_config import setup_logging

# Import and register all commands at module level
from fintrack.cli.commands import (
    account,
    category,
    ledger,
    add,
    transaction,
    import_cmd,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINTRACK_DB_PATH environment variable)",
    envvar="FINTRACK_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug details to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """fintrack - Personal ledger with bank statement import.

    Record income and expenses per account, keep debt and investment
    balances in step with the transactions that pay or fund them, and
    import bank statements in bulk.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            settings = Settings.from_env(database_path=db_path)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        setup_logging(logging.DEBUG if verbose else settings.log_level)

        db = create_sqlite_database(database_path=settings.database_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["settings"] = settings
        ctx.obj["db"] = db


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
ledger.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
import_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
