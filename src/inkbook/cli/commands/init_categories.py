"""Initialize default categories."""

import click
from inkbook.domain.category import CategoryService


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Create the studio's default income and expense categories.

    Session and deposit income are booked automatically into the
    "Sessao de Tatuagem" and "Sinal/Deposito" categories created here.
    Existing categories are left untouched.
    """
    service = CategoryService(ctx.obj["db"])

    created = service.seed_default_categories()
    if created == 0:
        click.echo("Default categories already exist.")
    else:
        click.echo(f"Successfully created {created} categories.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
