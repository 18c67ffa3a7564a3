"""Category management commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.resolution import resolve_or_exit
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import CategoryType
from fintrack.domain.errors import DomainError
from fintrack.utils.resolvers import resolve_category

TYPE_CHOICES = {
    "standard": CategoryType.STANDARD,
    "debt": CategoryType.DEBT,
    "investment": CategoryType.INVESTMENT,
}


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories with their subcategories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found.")
        return

    subcategories = service.list_subcategories()
    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"{cat.name} [{cat.category_type.value}] (ID: {cat.id})")
        for sub in subcategories:
            if sub.category_id == cat.id:
                click.echo(f"  {sub.name} (ID: {sub.id})")


@category_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(list(TYPE_CHOICES), case_sensitive=False),
    default="standard",
    help="Category type (default: standard). Debt and investment categories "
    "require transactions to link a debt or an investment.",
)
@click.pass_context
def create_category(ctx, name: str, category_type: str):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(
            name=name, category_type=TYPE_CHOICES[category_type.lower()]
        )
        click.echo(f"Created category '{name}' (ID: {category_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("add-sub")
@click.argument("category")
@click.argument("name")
@click.pass_context
def create_subcategory(ctx, category: str, name: str):
    """Create a subcategory NAME under CATEGORY (name or ID)."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    category_id = resolve_or_exit(ctx, resolve_category, service, category)
    try:
        subcategory_id = service.create_subcategory(category_id, name)
        click.echo(f"Created subcategory '{name}' (ID: {subcategory_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
