"""Category management commands."""

import click
from inkbook.cli.error_handling import handle_domain_error
from inkbook.domain.category import CategoryService
from inkbook.domain.entities import TransactionType
from inkbook.domain.errors import DomainError

TYPE_CHOICES = [t.value for t in TransactionType]


@click.group()
def category_group():
    """Manage ledger categories."""
    pass


@category_group.command("list")
@click.option("--type", "category_type", type=click.Choice(TYPE_CHOICES), help="Only income or expense categories")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List categories grouped by type."""
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories(category_type=category_type)
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    current_type = None
    for cat in categories:
        if cat.category_type != current_type:
            current_type = cat.category_type
            click.echo(f"\n{current_type.value.capitalize()}:")
        marker = " *" if cat.is_default else ""
        click.echo(f"  {cat.name} (ID: {cat.id}){marker}")


@category_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(TYPE_CHOICES, case_sensitive=False),
    default="expense",
    help="Category type (default: expense)",
)
@click.pass_context
def create_category(ctx, name: str, category_type: str):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(name=name, category_type=category_type.lower())
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created {category_type.lower()} category '{name.strip()}' (ID: {category_id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
