"""CLI helpers for client resolution."""

from __future__ import annotations

import click
from inkbook.domain.client import ClientService


def resolve_client(client_service: ClientService, client: str | int) -> int:
    """Resolve a client name or ID to a client ID.

    Args:
        client_service: ClientService instance
        client: Client ID (int or numeric string) or exact client name

    Returns:
        Client ID

    Raises:
        ValueError: If no client matches, or a name matches several clients
    """
    if isinstance(client, int):
        if client_service.get_client(client) is None:
            raise ValueError(f"Client ID {client} not found")
        return client

    try:
        client_id = int(client)
    except (ValueError, TypeError):
        client_id = None
    if client_id is not None:
        if client_service.get_client(client_id) is None:
            raise ValueError(f"Client ID {client_id} not found")
        return client_id

    matches = [c for c in client_service.list_clients() if c.name.lower() == client.strip().lower()]
    if not matches:
        raise ValueError(f"Client '{client}' not found")
    if len(matches) > 1:
        ids = ", ".join(str(c.id) for c in matches)
        raise ValueError(f"Several clients are named '{client}' (IDs: {ids}); use the ID instead")
    return matches[0].id


def resolve_client_or_exit(
    ctx: click.Context, client_service: ClientService, client: str | int
) -> int:
    """Resolve client name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_client(client_service, client)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
