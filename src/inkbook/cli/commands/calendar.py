"""Calendar views of the appointment book."""

from calendar import month_name
from datetime import date

import click
from inkbook.cli.display import echo_appointment_line
from inkbook.cli.error_handling import handle_domain_error
from inkbook.domain.calendar import CalendarService
from inkbook.domain.errors import DomainError
from inkbook.utils.date_parser import parse_date

WEEKDAY_HEADER = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
CELL_WIDTH = 8


def _format_cell(day) -> str:
    if not day.cell.is_current_month:
        return f"({day.cell.date.day:>2})".ljust(CELL_WIDTH)
    count = len(day.appointments)
    badge = f" [{count}]" if count else ""
    return f"{day.cell.date.day:>2}{badge}".ljust(CELL_WIDTH)


@click.group()
def calendar_group():
    """Browse appointments on a calendar."""
    pass


@calendar_group.command("month")
@click.option("--year", type=int, help="Year (default: current year)")
@click.option("--month", type=int, help="Month 1-12 (default: current month)")
@click.option("--list", "show_list", is_flag=True, help="List the month's appointments below the grid")
@click.pass_context
def month(ctx, year: int | None, month: int | None, show_list: bool):
    """Show a month as a 6-week grid with the number of appointments per day.

    Days of the neighbouring months are shown in parentheses.
    """
    today = date.today()
    if year is None:
        year = today.year
    if month is None:
        month = today.month
    service = CalendarService(ctx.obj["db"])

    try:
        view = service.month_view(year, month)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{month_name[month]} {year}")
    click.echo("".join(name.ljust(CELL_WIDTH) for name in WEEKDAY_HEADER))
    for week_start in range(0, len(view.days), 7):
        week = view.days[week_start:week_start + 7]
        click.echo("".join(_format_cell(day) for day in week).rstrip())

    click.echo(f"\n{view.appointment_count} appointment(s) this month")

    if show_list:
        for day in view.days:
            if not day.cell.is_current_month:
                continue
            for apt in day.appointments:
                echo_appointment_line(apt)


@calendar_group.command("day")
@click.argument("day", default="today")
@click.pass_context
def day(ctx, day: str):
    """Show one day's appointments ordered by start time.

    DAY accepts dates like 2024-06-10, 'today' or 'next friday'.
    """
    try:
        selected = parse_date(day)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    appointments = CalendarService(ctx.obj["db"]).day_agenda(selected)

    click.echo(f"\n{selected:%A, %d %B %Y}")
    if not appointments:
        click.echo("No appointments.")
        return
    for apt in appointments:
        echo_appointment_line(apt, show_date=False)


def register_commands(cli):
    """Register calendar commands with main CLI."""
    cli.add_command(calendar_group, name="calendar")
