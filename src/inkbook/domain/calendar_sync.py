"""External calendar synchronization boundary.

The studio calendar can be mirrored to an external provider (Google Calendar
in the original deployment). Providers handle their own credentials and token
refresh; the appointment service only stores the returned event ID and never
lets a sync failure block the appointment write.
"""

from abc import ABC, abstractmethod

from inkbook.domain.entities import Appointment


class CalendarSync(ABC):
    """Pushes appointment changes to an external calendar."""

    @abstractmethod
    def push_event(self, appointment: Appointment) -> str:
        """Create an event for a new appointment. Returns the external event ID."""
        pass

    @abstractmethod
    def update_event(self, event_id: str, appointment: Appointment) -> None:
        """Update the event mirroring an appointment."""
        pass

    @abstractmethod
    def delete_event(self, event_id: str) -> None:
        """Remove the event of a deleted appointment."""
        pass
