"""Appointment domain service."""

import logging
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Any, Callable, Optional

from inkbook.database.base import Database
from inkbook.domain.automation import TransactionRuleEngine
from inkbook.domain.calendar_sync import CalendarSync
from inkbook.domain.category import CategoryService
from inkbook.domain.entities import (
    Appointment as AppointmentEntity,
    AppointmentChanges,
    AppointmentDraft,
    AppointmentStatus,
    ConflictingAppointment,
    TransactionDraft,
)
from inkbook.domain.errors import (
    NotFoundError,
    SchedulingConflict,
    ValidationError,
    appointment_not_found,
    client_not_found,
)
from inkbook.domain.scheduling import find_conflict
from inkbook.utils.time_utils import MINUTES_PER_DAY, interval_end, normalize_time

logger = logging.getLogger(__name__)

MIN_ESTIMATED_HOURS = 0.5
MAX_ESTIMATED_HOURS = 12.0

CLEARABLE_FIELDS = frozenset({"description", "notes", "price", "deposit_amount"})


def _utcnow() -> datetime:
    return datetime.now(UTC)


def parse_status(status: str | AppointmentStatus) -> AppointmentStatus:
    """Convert a status value, raising ValidationError for unknown values."""
    try:
        return AppointmentStatus(status)
    except ValueError:
        valid = ", ".join(s.value for s in AppointmentStatus)
        raise ValidationError(f"Invalid status '{status}'. Valid statuses: {valid}")


class AppointmentService:
    """Service for scheduling appointments and tracking their payments.

    Every write goes through the conflict detector and every change of
    status or deposit goes through the transaction rule engine.
    """

    def __init__(
        self,
        db: Database,
        calendar_sync: Optional[CalendarSync] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize appointment service.

        Args:
            db: Database instance
            calendar_sync: Optional external calendar to mirror appointments to
            clock: Source of timestamps for deposits and automatic transactions
        """
        self.db = db
        self.calendar_sync = calendar_sync
        self.clock = clock
        self.rules = TransactionRuleEngine(
            resolve_category=CategoryService(db).resolve_category_id,
            create_transaction=self._store_transaction,
            list_automatic_transactions=self._automatic_transactions,
            clock=clock,
        )

    def get_appointment(self, appointment_id: int) -> Optional[AppointmentEntity]:
        """Get appointment by ID."""
        return self.db.get_appointment(appointment_id)

    def require_appointment(self, appointment_id: int) -> AppointmentEntity:
        """Get appointment by ID or raise NotFoundError."""
        appointment = self.db.get_appointment(appointment_id)
        if appointment is None:
            raise NotFoundError(appointment_not_found(appointment_id))
        return appointment

    def list_appointments(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[AppointmentStatus] = None,
        client_id: Optional[int] = None,
    ) -> list[AppointmentEntity]:
        """List appointments ordered by date and start time."""
        if status is not None:
            status = parse_status(status)
        return self.db.list_appointments(
            start_date=start_date, end_date=end_date, status=status, client_id=client_id
        )

    def check_conflict(
        self,
        day: date,
        start_time: str,
        estimated_hours: float,
        exclude_id: Optional[int] = None,
    ) -> Optional[ConflictingAppointment]:
        """Return the appointment blocking a time window on a day, if any.

        Raises:
            InvalidTimeFormat: If start_time is malformed
        """
        existing = self.db.list_appointments(start_date=day, end_date=day, exclude_cancelled=True)
        return find_conflict(day, start_time, estimated_hours, existing, exclude_id=exclude_id)

    def create_appointment(self, draft: AppointmentDraft) -> AppointmentEntity:
        """Schedule a new appointment.

        Args:
            draft: Requested appointment values

        Returns:
            The stored appointment

        Raises:
            ValidationError: If a field is invalid
            InvalidTimeFormat: If the start time is malformed
            NotFoundError: If the client doesn't exist
            SchedulingConflict: If the window overlaps another appointment
        """
        status = parse_status(draft.status)
        start_time = self._validate(
            client_id=draft.client_id,
            title=draft.title,
            start_time=draft.start_time,
            estimated_hours=draft.estimated_hours,
            price=draft.price,
            deposit_amount=draft.deposit_amount,
        )
        if status != AppointmentStatus.CANCELLED:
            self._ensure_available(draft.date, start_time, draft.estimated_hours)

        appointment_id = self.db.create_appointment(
            client_id=draft.client_id,
            title=draft.title.strip(),
            date=draft.date,
            start_time=start_time,
            estimated_hours=float(draft.estimated_hours),
            status=status,
            description=draft.description,
            notes=draft.notes,
            price=draft.price,
            deposit_amount=draft.deposit_amount,
            deposit_paid=draft.deposit_paid,
            deposit_paid_at=self.clock() if draft.deposit_paid else None,
        )
        appointment = self.require_appointment(appointment_id)
        logger.info(
            "Scheduled appointment %s on %s at %s", appointment.id, appointment.date, start_time
        )

        self.rules.process(None, appointment)
        return self._push_to_calendar(appointment)

    def update_appointment(
        self, appointment_id: int, changes: AppointmentChanges
    ) -> AppointmentEntity:
        """Edit an appointment.

        The resulting window is checked against the other appointments of
        its day; the appointment never conflicts with its own stored window.

        Raises:
            NotFoundError: If the appointment or new client doesn't exist
            ValidationError: If a merged field is invalid
            SchedulingConflict: If the new window overlaps another appointment
        """
        prior = self.require_appointment(appointment_id)

        unknown = set(changes.clear) - CLEARABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot clear fields: {', '.join(sorted(unknown))}")

        merged = {
            name: getattr(changes, name) if getattr(changes, name) is not None else getattr(prior, name)
            for name in (
                "client_id",
                "title",
                "date",
                "start_time",
                "estimated_hours",
                "status",
                "description",
                "notes",
                "price",
                "deposit_amount",
            )
        }
        for name in changes.clear:
            merged[name] = None

        merged["status"] = parse_status(merged["status"])
        merged["start_time"] = self._validate(
            client_id=merged["client_id"],
            title=merged["title"],
            start_time=merged["start_time"],
            estimated_hours=merged["estimated_hours"],
            price=merged["price"],
            deposit_amount=merged["deposit_amount"],
        )
        merged["title"] = merged["title"].strip()
        merged["estimated_hours"] = float(merged["estimated_hours"])

        if merged["status"] != AppointmentStatus.CANCELLED:
            self._ensure_available(
                merged["date"],
                merged["start_time"],
                merged["estimated_hours"],
                exclude_id=appointment_id,
            )

        merged.update(self._deposit_transition(prior, changes.deposit_paid))
        return self._apply(prior, merged)

    def update_status(
        self, appointment_id: int, status: str | AppointmentStatus
    ) -> AppointmentEntity:
        """Move an appointment to another status.

        Any status may follow any other. Reactivating a cancelled appointment
        re-checks its window, since cancelled appointments free their slot.

        Raises:
            ValidationError: If the status is unknown
            NotFoundError: If the appointment doesn't exist
            SchedulingConflict: If a reactivated window is taken
        """
        status = parse_status(status)
        prior = self.require_appointment(appointment_id)

        if prior.status == AppointmentStatus.CANCELLED and status != AppointmentStatus.CANCELLED:
            self._ensure_available(
                prior.date, prior.start_time, prior.estimated_hours, exclude_id=appointment_id
            )

        return self._apply(prior, {"status": status})

    def update_deposit(
        self,
        appointment_id: int,
        deposit_paid: Optional[bool] = None,
        deposit_amount: Optional[Decimal] = None,
    ) -> AppointmentEntity:
        """Record the deposit amount and whether it has been paid.

        ``deposit_paid_at`` is set only when the deposit goes from unpaid to
        paid and cleared when it goes back to unpaid.

        Raises:
            ValidationError: If the amount is negative
            NotFoundError: If the appointment doesn't exist
        """
        prior = self.require_appointment(appointment_id)

        fields: dict[str, Any] = {}
        if deposit_amount is not None:
            if deposit_amount < 0:
                raise ValidationError("Deposit amount must not be negative")
            fields["deposit_amount"] = deposit_amount
        fields.update(self._deposit_transition(prior, deposit_paid))

        return self._apply(prior, fields)

    def delete_appointment(self, appointment_id: int) -> None:
        """Delete an appointment.

        Automatic transactions booked for it stay in the ledger.

        Raises:
            NotFoundError: If the appointment doesn't exist
        """
        appointment = self.require_appointment(appointment_id)
        self.db.delete_appointment(appointment_id)
        logger.info("Deleted appointment %s", appointment_id)

        if self.calendar_sync is not None and appointment.google_event_id:
            try:
                self.calendar_sync.delete_event(appointment.google_event_id)
            except Exception:
                logger.warning(
                    "Could not delete calendar event %s of appointment %s",
                    appointment.google_event_id,
                    appointment_id,
                    exc_info=True,
                )

    def _apply(self, prior: AppointmentEntity, fields: dict[str, Any]) -> AppointmentEntity:
        """Write changed fields, then run the rules and the calendar sync."""
        if fields:
            self.db.update_appointment(prior.id, **fields)
        current = self.require_appointment(prior.id)

        self.rules.process(prior, current)
        if fields:
            current = self._sync_calendar(current)
        return current

    def _deposit_transition(
        self, prior: AppointmentEntity, deposit_paid: Optional[bool]
    ) -> dict[str, Any]:
        if deposit_paid is None or deposit_paid == prior.deposit_paid:
            return {}
        return {
            "deposit_paid": deposit_paid,
            "deposit_paid_at": self.clock() if deposit_paid else None,
        }

    def _validate(
        self,
        client_id: int,
        title: str,
        start_time: str,
        estimated_hours: float,
        price: Optional[Decimal],
        deposit_amount: Optional[Decimal],
    ) -> str:
        """Validate appointment values. Returns the normalized start time."""
        if title is None or len(title.strip()) < 2:
            raise ValidationError("Title must have at least 2 characters")

        start_time = normalize_time(start_time)

        if not MIN_ESTIMATED_HOURS <= estimated_hours <= MAX_ESTIMATED_HOURS:
            raise ValidationError(
                f"Estimated hours must be between {MIN_ESTIMATED_HOURS:g} and "
                f"{MAX_ESTIMATED_HOURS:g}, got {estimated_hours:g}"
            )
        if interval_end(start_time, estimated_hours) > MINUTES_PER_DAY:
            raise ValidationError(
                f"An appointment starting at {start_time} for {estimated_hours:g}h "
                "would end after midnight"
            )

        if price is not None and price < 0:
            raise ValidationError("Price must not be negative")
        if deposit_amount is not None and deposit_amount < 0:
            raise ValidationError("Deposit amount must not be negative")

        if self.db.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))

        return start_time

    def _ensure_available(
        self,
        day: date,
        start_time: str,
        estimated_hours: float,
        exclude_id: Optional[int] = None,
    ) -> None:
        conflict = self.check_conflict(day, start_time, estimated_hours, exclude_id=exclude_id)
        if conflict is not None:
            raise SchedulingConflict(conflict)

    def _store_transaction(self, draft: TransactionDraft) -> int:
        return self.db.create_transaction(
            transaction_type=draft.transaction_type,
            amount=draft.amount,
            description=draft.description,
            date=draft.date,
            category_id=draft.category_id,
            appointment_id=draft.appointment_id,
            is_automatic=draft.is_automatic,
        )

    def _automatic_transactions(self, appointment_id: int):
        return self.db.list_transactions(appointment_id=appointment_id, is_automatic=True)

    def _push_to_calendar(self, appointment: AppointmentEntity) -> AppointmentEntity:
        if self.calendar_sync is None:
            return appointment
        try:
            event_id = self.calendar_sync.push_event(appointment)
        except Exception:
            logger.warning(
                "Could not push appointment %s to the calendar", appointment.id, exc_info=True
            )
            return appointment

        self.db.update_appointment(appointment.id, google_event_id=event_id)
        return self.require_appointment(appointment.id)

    def _sync_calendar(self, appointment: AppointmentEntity) -> AppointmentEntity:
        if self.calendar_sync is None:
            return appointment
        if not appointment.google_event_id:
            return self._push_to_calendar(appointment)
        try:
            self.calendar_sync.update_event(appointment.google_event_id, appointment)
        except Exception:
            logger.warning(
                "Could not update calendar event %s of appointment %s",
                appointment.google_event_id,
                appointment.id,
                exc_info=True,
            )
        return appointment
