"""CLI error handling helpers."""

import click

from inkbook.domain.errors import DomainError, SchedulingConflict


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    if isinstance(error, SchedulingConflict):
        conflict = error.conflict
        click.echo("Error: Time slot unavailable.", err=True)
        click.echo(
            f"  Conflicts with appointment {conflict.id}: \"{conflict.title}\" "
            f"with {conflict.client_name} ({conflict.start_time} - {conflict.end_time})",
            err=True,
        )
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
