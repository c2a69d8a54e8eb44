"""Appointment scheduling commands."""

from decimal import Decimal

import click
from inkbook.cli.client_resolution import resolve_client_or_exit
from inkbook.cli.display import (
    echo_appointment_detail,
    echo_appointment_line,
    format_money,
)
from inkbook.cli.error_handling import handle_domain_error
from inkbook.domain.appointment import AppointmentService, CLEARABLE_FIELDS
from inkbook.domain.client import ClientService
from inkbook.domain.entities import AppointmentChanges, AppointmentDraft, AppointmentStatus
from inkbook.domain.errors import DomainError
from inkbook.domain.transaction import TransactionService
from inkbook.utils.amount_parser import parse_amount
from inkbook.utils.date_parser import parse_date

STATUS_CHOICES = [s.value for s in AppointmentStatus]
CLEAR_CHOICES = sorted(name.replace("_", "-") for name in CLEARABLE_FIELDS)


def _parse_date_or_exit(ctx, value: str, label: str = "date"):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str | None, label: str) -> Decimal | None:
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _echo_new_transactions(transaction_service: TransactionService, appointment_id: int, known: set[int]) -> None:
    for txn in transaction_service.list_transactions(appointment_id=appointment_id):
        if txn.id not in known:
            click.echo(f"  Recorded {txn.transaction_type.value} {format_money(txn.amount)}: {txn.description}")


@click.group()
def appointment_group():
    """Schedule and track appointments."""
    pass


@appointment_group.command("add")
@click.option("--client", required=True, help="Client name or ID")
@click.option("--title", required=True, help="Session title")
@click.option("--date", "date_str", required=True, help="Session date (YYYY-MM-DD or 'tomorrow', 'next friday')")
@click.option("--start", "start_time", required=True, help="Start time (HH:MM, 24-hour)")
@click.option("--hours", type=float, required=True, help="Estimated duration in hours (0.5 to 12)")
@click.option("--status", type=click.Choice(STATUS_CHOICES), default="scheduled", help="Initial status")
@click.option("--price", help="Session price (e.g., 800 or 'R$ 1.200,00')")
@click.option("--deposit", help="Deposit amount")
@click.option("--deposit-paid", is_flag=True, help="Deposit already paid")
@click.option("--description", help="Description")
@click.option("--notes", help="Notes")
@click.pass_context
def add_appointment(
    ctx,
    client: str,
    title: str,
    date_str: str,
    start_time: str,
    hours: float,
    status: str,
    price: str | None,
    deposit: str | None,
    deposit_paid: bool,
    description: str | None,
    notes: str | None,
):
    """Schedule an appointment.

    Examples:
        inkbook appointment add --client "Ana Souza" --title "Fechamento braco" --date 2024-06-10 --start 10:00 --hours 2
        inkbook appointment add --client 3 --title "Rosa" --date tomorrow --start 14:30 --hours 1.5 --price 500 --deposit 150
    """
    db = ctx.obj["db"]
    service = AppointmentService(db)
    transaction_service = TransactionService(db)

    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    day = _parse_date_or_exit(ctx, date_str)
    draft = AppointmentDraft(
        client_id=client_id,
        title=title,
        date=day,
        start_time=start_time,
        estimated_hours=hours,
        status=AppointmentStatus(status),
        description=description,
        notes=notes,
        price=_parse_amount_or_exit(ctx, price, "price"),
        deposit_amount=_parse_amount_or_exit(ctx, deposit, "deposit"),
        deposit_paid=deposit_paid,
    )

    try:
        appointment = service.create_appointment(draft)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created appointment {appointment.id}")
    echo_appointment_line(appointment)
    _echo_new_transactions(transaction_service, appointment.id, set())


@appointment_group.command("update")
@click.argument("appointment_id", type=int)
@click.option("--client", help="Client name or ID")
@click.option("--title", help="Session title")
@click.option("--date", "date_str", help="Session date")
@click.option("--start", "start_time", help="Start time (HH:MM)")
@click.option("--hours", type=float, help="Estimated duration in hours")
@click.option("--status", type=click.Choice(STATUS_CHOICES), help="Status")
@click.option("--price", help="Session price")
@click.option("--deposit", help="Deposit amount")
@click.option("--deposit-paid/--deposit-unpaid", default=None, help="Mark the deposit paid or unpaid")
@click.option("--description", help="Description")
@click.option("--notes", help="Notes")
@click.option(
    "--clear",
    multiple=True,
    type=click.Choice(CLEAR_CHOICES),
    help="Clear an optional field (repeatable)",
)
@click.pass_context
def update_appointment(
    ctx,
    appointment_id: int,
    client: str | None,
    title: str | None,
    date_str: str | None,
    start_time: str | None,
    hours: float | None,
    status: str | None,
    price: str | None,
    deposit: str | None,
    deposit_paid: bool | None,
    description: str | None,
    notes: str | None,
    clear: tuple[str, ...],
):
    """Edit an appointment.

    Only the given fields change. The new time window is checked against the
    other appointments of the day.

    Examples:
        inkbook appointment update 4 --start 15:00 --hours 3
        inkbook appointment update 4 --clear notes --clear price
    """
    db = ctx.obj["db"]
    service = AppointmentService(db)
    transaction_service = TransactionService(db)

    client_id = resolve_client_or_exit(ctx, ClientService(db), client) if client is not None else None
    changes = AppointmentChanges(
        client_id=client_id,
        title=title,
        date=_parse_date_or_exit(ctx, date_str) if date_str is not None else None,
        start_time=start_time,
        estimated_hours=hours,
        status=AppointmentStatus(status) if status is not None else None,
        description=description,
        notes=notes,
        price=_parse_amount_or_exit(ctx, price, "price"),
        deposit_amount=_parse_amount_or_exit(ctx, deposit, "deposit"),
        deposit_paid=deposit_paid,
        clear=frozenset(name.replace("-", "_") for name in clear),
    )

    known = {t.id for t in transaction_service.list_transactions(appointment_id=appointment_id)}
    try:
        appointment = service.update_appointment(appointment_id, changes)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated appointment {appointment_id}")
    echo_appointment_line(appointment)
    _echo_new_transactions(transaction_service, appointment_id, known)


@appointment_group.command("status")
@click.argument("appointment_id", type=int)
@click.argument("status", type=click.Choice(STATUS_CHOICES))
@click.pass_context
def set_status(ctx, appointment_id: int, status: str):
    """Change the status of an appointment.

    Completing an appointment with a price records the session income,
    minus the deposit already recorded.
    """
    db = ctx.obj["db"]
    service = AppointmentService(db)
    transaction_service = TransactionService(db)

    known = {t.id for t in transaction_service.list_transactions(appointment_id=appointment_id)}
    try:
        appointment = service.update_status(appointment_id, status)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Appointment {appointment_id} is now {appointment.status.value}")
    _echo_new_transactions(transaction_service, appointment_id, known)


@appointment_group.command("deposit")
@click.argument("appointment_id", type=int)
@click.option("--paid/--unpaid", default=None, help="Mark the deposit paid or unpaid")
@click.option("--amount", help="Deposit amount")
@click.pass_context
def set_deposit(ctx, appointment_id: int, paid: bool | None, amount: str | None):
    """Record an appointment's deposit.

    Marking a deposit paid records it as income once.
    """
    if paid is None and amount is None:
        click.echo("Error: Nothing to update. Use --paid, --unpaid or --amount.", err=True)
        ctx.exit(1)

    db = ctx.obj["db"]
    service = AppointmentService(db)
    transaction_service = TransactionService(db)

    deposit_amount = _parse_amount_or_exit(ctx, amount, "amount")
    known = {t.id for t in transaction_service.list_transactions(appointment_id=appointment_id)}
    try:
        appointment = service.update_deposit(
            appointment_id, deposit_paid=paid, deposit_amount=deposit_amount
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    state = "paid" if appointment.deposit_paid else "not paid"
    click.echo(
        f"Appointment {appointment_id} deposit {format_money(appointment.deposit_amount)} {state}"
    )
    _echo_new_transactions(transaction_service, appointment_id, known)


@appointment_group.command("delete")
@click.argument("appointment_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_appointment(ctx, appointment_id: int, yes: bool):
    """Delete an appointment."""
    service = AppointmentService(ctx.obj["db"])
    if not yes:
        click.confirm(f"Delete appointment {appointment_id}?", abort=True)
    try:
        service.delete_appointment(appointment_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted appointment {appointment_id}")


@appointment_group.command("show")
@click.argument("appointment_id", type=int)
@click.pass_context
def show_appointment(ctx, appointment_id: int):
    """Show an appointment."""
    db = ctx.obj["db"]
    try:
        appointment = AppointmentService(db).require_appointment(appointment_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    echo_appointment_detail(appointment)
    transactions = TransactionService(db).list_transactions(appointment_id=appointment_id)
    for txn in transactions:
        kind = "automatic" if txn.is_automatic else "manual"
        click.echo(f"  Ledger: {format_money(txn.amount)} {txn.description} ({kind})")


@appointment_group.command("list")
@click.option("--start-date", help="First day (YYYY-MM-DD or relative like 'today')")
@click.option("--end-date", help="Last day")
@click.option("--status", type=click.Choice(STATUS_CHOICES), help="Only this status")
@click.option("--client", help="Client name or ID")
@click.pass_context
def list_appointments(ctx, start_date: str | None, end_date: str | None, status: str | None, client: str | None):
    """List appointments ordered by date and time."""
    db = ctx.obj["db"]
    start = _parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = _parse_date_or_exit(ctx, end_date, "end date") if end_date else None
    client_id = resolve_client_or_exit(ctx, ClientService(db), client) if client else None

    appointments = AppointmentService(db).list_appointments(
        start_date=start, end_date=end, status=status, client_id=client_id
    )
    if not appointments:
        click.echo("No appointments found.")
        return

    click.echo(f"\nFound {len(appointments)} appointment(s):")
    click.echo("-" * 110)
    for apt in appointments:
        echo_appointment_line(apt)


@appointment_group.command("check")
@click.option("--date", "date_str", required=True, help="Day to check")
@click.option("--start", "start_time", required=True, help="Start time (HH:MM)")
@click.option("--hours", type=float, required=True, help="Duration in hours")
@click.option("--exclude", type=int, help="Appointment ID to ignore (when moving it)")
@click.pass_context
def check_slot(ctx, date_str: str, start_time: str, hours: float, exclude: int | None):
    """Check whether a time slot is free."""
    day = _parse_date_or_exit(ctx, date_str)
    try:
        conflict = AppointmentService(ctx.obj["db"]).check_conflict(
            day, start_time, hours, exclude_id=exclude
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if conflict is None:
        click.echo(f"{day} {start_time} is free for {hours:g}h")
    else:
        click.echo(
            f"Taken by appointment {conflict.id}: \"{conflict.title}\" with "
            f"{conflict.client_name} ({conflict.start_time} - {conflict.end_time})"
        )
        ctx.exit(1)


def register_commands(cli):
    """Register appointment commands with main CLI."""
    cli.add_command(appointment_group, name="appointment")
