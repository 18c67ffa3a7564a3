"""CLI error handling helpers."""

import click

from fintrack.domain.errors import BatchImportError


def handle_domain_error(ctx: click.Context, error: Exception) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def handle_batch_error(ctx: click.Context, error: BatchImportError) -> None:
    """Report a partially imported statement and exit with failure."""
    noun = "row" if error.imported == 1 else "rows"
    click.echo(f"{error.imported} {noun} imported", err=True)
    click.echo(f"Error: failed at row {error.row_index}: {error.reason}", err=True)
    ctx.exit(1)
