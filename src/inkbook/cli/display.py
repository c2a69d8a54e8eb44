"""Shared text formatting for CLI output."""

from decimal import Decimal
from typing import Optional

import click

from inkbook.domain.entities import Appointment, AppointmentStatus
from inkbook.utils.time_utils import interval_end, minutes_to_time

STATUS_LABELS = {
    AppointmentStatus.SCHEDULED: "Scheduled",
    AppointmentStatus.CONFIRMED: "Confirmed",
    AppointmentStatus.IN_PROGRESS: "In progress",
    AppointmentStatus.COMPLETED: "Completed",
    AppointmentStatus.CANCELLED: "Cancelled",
}


def format_money(amount: Optional[Decimal]) -> str:
    """Format an amount as Brazilian reais (R$ 1.234,56)."""
    if amount is None:
        return "-"
    text = f"{amount:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {text}"


def time_window(appointment: Appointment) -> str:
    end = minutes_to_time(interval_end(appointment.start_time, appointment.estimated_hours))
    return f"{appointment.start_time}-{end}"


def deposit_label(appointment: Appointment) -> str:
    if appointment.deposit_amount is None:
        return ""
    if appointment.deposit_paid:
        return f"deposit {format_money(appointment.deposit_amount)} paid"
    return f"deposit {format_money(appointment.deposit_amount)} pending"


def echo_appointment_line(appointment: Appointment, show_date: bool = True) -> None:
    """Print one appointment as a compact table row."""
    when = f"{appointment.date} " if show_date else ""
    client = (appointment.client_name or "")[:20]
    click.echo(
        f"{appointment.id:<5} {when}{time_window(appointment):<12} "
        f"{STATUS_LABELS[appointment.status]:<12} {client:<20} {appointment.title[:30]:<30} "
        f"{deposit_label(appointment)}"
    )


def echo_appointment_detail(appointment: Appointment) -> None:
    """Print every field of an appointment."""
    click.echo(f"Appointment {appointment.id}: {appointment.title}")
    click.echo(f"  Client: {appointment.client_name} (ID: {appointment.client_id})")
    click.echo(f"  Date: {appointment.date}")
    click.echo(f"  Time: {time_window(appointment)} ({appointment.estimated_hours:g}h)")
    click.echo(f"  Status: {STATUS_LABELS[appointment.status]}")
    if appointment.price is not None:
        click.echo(f"  Price: {format_money(appointment.price)}")
    if appointment.deposit_amount is not None:
        click.echo(f"  Deposit: {format_money(appointment.deposit_amount)}")
    click.echo(f"  Deposit paid: {'yes' if appointment.deposit_paid else 'no'}")
    if appointment.deposit_paid_at is not None:
        click.echo(f"  Deposit paid at: {appointment.deposit_paid_at:%Y-%m-%d %H:%M}")
    if appointment.description:
        click.echo(f"  Description: {appointment.description}")
    if appointment.notes:
        click.echo(f"  Notes: {appointment.notes}")
    if appointment.google_event_id:
        click.echo(f"  Calendar event: {appointment.google_event_id}")
