"""CLI helpers for resolving names or IDs with consistent error exits."""

from __future__ import annotations

from typing import Any, Callable

import click

from fintrack.cli.error_handling import handle_domain_error
from fintrack.database.base import Database
from fintrack.domain.category import CategoryService
from fintrack.domain.debt import DebtService
from fintrack.domain.entities import RowCategorization
from fintrack.domain.errors import DomainError
from fintrack.domain.investment import InvestmentService
from fintrack.utils.resolvers import (
    resolve_category,
    resolve_debt,
    resolve_investment,
    resolve_subcategory,
)


def resolve_or_exit(ctx: click.Context, resolver: Callable[..., int], *args: Any) -> int:
    """Run a name/ID resolver, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolver(*args)
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def resolve_categorization(
    ctx: click.Context,
    db: Database,
    category: str | None,
    subcategory: str | None,
    debt: str | None,
    investment: str | None,
) -> RowCategorization:
    """Resolve the category, subcategory, debt and investment options of a command."""
    category_service = CategoryService(db)

    category_id = None
    subcategory_id = None
    if category is not None:
        category_id = resolve_or_exit(ctx, resolve_category, category_service, category)
        if subcategory is not None:
            subcategory_id = resolve_or_exit(
                ctx, resolve_subcategory, category_service, category_id, subcategory
            )
    elif subcategory is not None:
        click.echo("Error: --subcategory requires --category", err=True)
        ctx.exit(1)

    debt_id = None
    if debt is not None:
        debt_id = resolve_or_exit(ctx, resolve_debt, DebtService(db), debt)

    investment_id = None
    if investment is not None:
        investment_id = resolve_or_exit(ctx, resolve_investment, InvestmentService(db), investment)

    return RowCategorization(
        category_id=category_id,
        subcategory_id=subcategory_id,
        debt_id=debt_id,
        investment_id=investment_id,
    )
