"""Appointment time-window conflict detection.

Pure functions over appointment entities: callers load the appointments of
the candidate's date from storage and decide what to do with the result.
"""

from datetime import date
from typing import Iterable, Optional

from inkbook.domain.entities import Appointment, AppointmentStatus, ConflictingAppointment
from inkbook.utils.time_utils import (
    interval_end,
    intervals_overlap,
    minutes_to_time,
    time_to_minutes,
)


def find_conflict(
    candidate_date: date,
    candidate_start: str,
    candidate_hours: float,
    existing: Iterable[Appointment],
    exclude_id: Optional[int] = None,
) -> Optional[ConflictingAppointment]:
    """Find the earliest appointment overlapping a candidate window.

    Args:
        candidate_date: Day of the candidate appointment
        candidate_start: Candidate start time (HH:MM)
        candidate_hours: Candidate duration in hours
        existing: Appointments already booked; entries on other days,
            cancelled entries and ``exclude_id`` are ignored
        exclude_id: Appointment being edited, never a conflict with itself

    Returns:
        The conflicting appointment, or None when the window is free.
        Candidates are scanned in start-time order, so the earliest
        overlapping appointment is reported.

    Raises:
        InvalidTimeFormat: If a start time is malformed
    """
    start = time_to_minutes(candidate_start)
    end = interval_end(candidate_start, candidate_hours)

    candidates = [
        apt
        for apt in existing
        if apt.id != exclude_id
        and apt.status != AppointmentStatus.CANCELLED
        and apt.date == candidate_date
    ]
    candidates.sort(key=lambda apt: (time_to_minutes(apt.start_time), apt.id))

    for apt in candidates:
        apt_start = time_to_minutes(apt.start_time)
        apt_end = interval_end(apt.start_time, apt.estimated_hours)
        if intervals_overlap(start, end, apt_start, apt_end):
            return ConflictingAppointment(
                id=apt.id,
                title=apt.title,
                client_name=apt.client_name or "",
                start_time=apt.start_time,
                end_time=minutes_to_time(apt_end),
            )

    return None
