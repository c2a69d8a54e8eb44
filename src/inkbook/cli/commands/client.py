"""Client management commands."""

import click
from inkbook.cli.display import echo_appointment_line
from inkbook.cli.error_handling import handle_domain_error
from inkbook.domain.appointment import AppointmentService
from inkbook.domain.client import ClientService
from inkbook.domain.errors import DomainError


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("add")
@click.argument("name")
@click.option("--phone", required=True, help="Phone number")
@click.option("--email", help="Email address")
@click.option("--instagram", help="Instagram handle")
@click.option("--notes", help="Notes")
@click.pass_context
def add_client(ctx, name: str, phone: str, email: str | None, instagram: str | None, notes: str | None):
    """Add a client."""
    service = ClientService(ctx.obj["db"])
    try:
        client_id = service.create_client(
            name=name, phone=phone, email=email, instagram=instagram, notes=notes
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created client '{name.strip()}' (ID: {client_id})")


@client_group.command("list")
@click.option("--search", help="Match name, phone or Instagram handle")
@click.pass_context
def list_clients(ctx, search: str | None):
    """List clients."""
    service = ClientService(ctx.obj["db"])
    clients = service.list_clients(search=search)

    if not clients:
        click.echo("No clients found.")
        return

    click.echo(f"\nFound {len(clients)} client(s):")
    click.echo("-" * 80)
    click.echo(f"{'ID':<6} {'Name':<30} {'Phone':<18} {'Instagram':<20}")
    click.echo("-" * 80)
    for c in clients:
        instagram = f"@{c.instagram}" if c.instagram else ""
        click.echo(f"{c.id:<6} {c.name[:30]:<30} {c.phone:<18} {instagram:<20}")


@client_group.command("show")
@click.argument("client_id", type=int)
@click.pass_context
def show_client(ctx, client_id: int):
    """Show a client and their appointments."""
    db = ctx.obj["db"]
    try:
        client = ClientService(db).require_client(client_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Client {client.id}: {client.name}")
    click.echo(f"  Phone: {client.phone}")
    if client.email:
        click.echo(f"  Email: {client.email}")
    if client.instagram:
        click.echo(f"  Instagram: @{client.instagram}")
    if client.notes:
        click.echo(f"  Notes: {client.notes}")

    appointments = AppointmentService(db).list_appointments(client_id=client_id)
    if appointments:
        click.echo(f"\nAppointments ({len(appointments)}):")
        for apt in appointments:
            echo_appointment_line(apt)
    else:
        click.echo("\nNo appointments.")


@client_group.command("update")
@click.argument("client_id", type=int)
@click.option("--name", help="New name")
@click.option("--phone", help="New phone number")
@click.option("--email", help="New email address")
@click.option("--instagram", help="New Instagram handle")
@click.option("--notes", help="New notes")
@click.pass_context
def update_client(
    ctx,
    client_id: int,
    name: str | None,
    phone: str | None,
    email: str | None,
    instagram: str | None,
    notes: str | None,
):
    """Update a client's details."""
    if all(value is None for value in (name, phone, email, instagram, notes)):
        click.echo(
            "Error: Nothing to update. Use --name, --phone, --email, --instagram or --notes.",
            err=True,
        )
        ctx.exit(1)

    try:
        ClientService(ctx.obj["db"]).update_client(
            client_id, name=name, phone=phone, email=email, instagram=instagram, notes=notes
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated client {client_id}")


@client_group.command("delete")
@click.argument("client_id", type=int)
@click.pass_context
def delete_client(ctx, client_id: int):
    """Delete a client without appointments."""
    try:
        ClientService(ctx.obj["db"]).delete_client(client_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted client {client_id}")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
