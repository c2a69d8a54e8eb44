"""Calendar view models: the month grid and per-day appointment lists."""

from collections import defaultdict
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta
from typing import Iterable, Mapping, Sequence

from inkbook.database.base import Database
from inkbook.domain.entities import (
    Appointment,
    CalendarCell,
    CalendarDay,
    MonthView,
)
from inkbook.domain.errors import ValidationError
from inkbook.utils.date_parser import month_bounds

GRID_CELLS = 42  # 6 weeks of 7 days


def build_month_grid(year: int, month: int) -> list[CalendarCell]:
    """Build the 6x7 grid for a month, weeks starting on Sunday.

    The grid opens with the trailing days of the previous month, lists every
    day of the month, and is padded with the next month's first days until it
    has exactly 42 cells.

    Raises:
        ValidationError: If month is not between 1 and 12, or the grid would
            leave the supported date range
    """
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")
    # Neighbouring-month padding needs a spare year on each side
    if not MINYEAR < year < MAXYEAR:
        raise ValidationError(f"Year must be between {MINYEAR + 1} and {MAXYEAR - 1}, got {year}")

    first = date(year, month, 1)
    # date.weekday() is 0 for Monday; the grid's first column is Sunday
    leading_days = (first.weekday() + 1) % 7
    grid_start = first - timedelta(days=leading_days)

    cells = []
    for offset in range(GRID_CELLS):
        day = grid_start + timedelta(days=offset)
        cells.append(CalendarCell(date=day, is_current_month=day.month == month))
    return cells


def date_key(value: date | datetime | str) -> str:
    """Return the ISO calendar-day key of a date, datetime or ISO string.

    Strings keep their literal date part; no timezone conversion is done.
    """
    if isinstance(value, str):
        return value.split("T")[0][:10]
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def group_by_date(appointments: Iterable[Appointment]) -> dict[str, list[Appointment]]:
    """Group appointments by calendar day, keeping input order within a day."""
    grouped: dict[str, list[Appointment]] = defaultdict(list)
    for appointment in appointments:
        grouped[date_key(appointment.date)].append(appointment)
    return dict(grouped)


def sort_by_start_time(appointments: Sequence[Appointment]) -> list[Appointment]:
    # HH:MM is zero-padded, so string order is time order
    return sorted(appointments, key=lambda apt: apt.start_time)


def appointments_on(grouped: Mapping[str, list[Appointment]], day: date) -> list[Appointment]:
    """Return one day's appointments from a grouping, sorted by start time."""
    return sort_by_start_time(grouped.get(date_key(day), []))


class CalendarService:
    """Service projecting stored appointments onto calendar views."""

    def __init__(self, db: Database):
        """Initialize calendar service.

        Args:
            db: Database instance
        """
        self.db = db

    def month_view(self, year: int, month: int) -> MonthView:
        """Build the month grid with each day's appointments.

        Cancelled appointments are included; they remain part of the history.
        Days of the neighbouring months shown in the grid carry their
        appointments too.
        """
        grid = build_month_grid(year, month)
        appointments = self.db.list_appointments(start_date=grid[0].date, end_date=grid[-1].date)
        grouped = group_by_date(appointments)

        days = tuple(
            CalendarDay(cell=cell, appointments=tuple(appointments_on(grouped, cell.date)))
            for cell in grid
        )
        return MonthView(year=year, month=month, days=days)

    def month_appointments(self, year: int, month: int) -> list[Appointment]:
        """List every appointment of a month ordered by date and start time."""
        try:
            first, last = month_bounds(year, month)
        except ValueError as e:
            raise ValidationError(str(e))
        return self.db.list_appointments(start_date=first, end_date=last)

    def day_agenda(self, day: date) -> list[Appointment]:
        """List one day's appointments sorted by start time."""
        return sort_by_start_time(self.db.list_appointments(start_date=day, end_date=day))
