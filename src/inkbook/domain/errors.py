"""Shared domain error messages and error types."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from inkbook.domain.entities import ConflictingAppointment


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class InvalidTimeFormat(ValidationError):
    """A clock time is not a valid 24-hour HH:MM string."""


class SchedulingConflict(ConflictError):
    """The requested time window overlaps an existing appointment."""

    def __init__(self, conflict: ConflictingAppointment):
        self.conflict = conflict
        super().__init__(time_slot_unavailable(conflict))


class CategoryNotConfigured(NotFoundError):
    """The canonical category needed by an automatic rule does not exist."""

    def __init__(self, name: str, category_type: str):
        self.name = name
        self.category_type = category_type
        super().__init__(f"No {category_type} category named '{name}' is configured")


def invalid_time(value: str) -> str:
    """Return message for a malformed clock time."""
    return f"Invalid time '{value}': expected HH:MM between 00:00 and 23:59"


def time_slot_unavailable(conflict: ConflictingAppointment) -> str:
    """Return message for a scheduling conflict."""
    return (
        f"Time slot unavailable: \"{conflict.title}\" with {conflict.client_name} "
        f"({conflict.start_time} - {conflict.end_time}) already booked"
    )


def appointment_not_found(appointment_id: int) -> str:
    """Return message for missing appointment."""
    return f"Appointment {appointment_id} not found"


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def automatic_transaction_locked(transaction_id: int) -> str:
    """Return message when a user tries to change an automatic transaction."""
    return (
        f"Transaction {transaction_id} was generated automatically from an "
        "appointment and cannot be changed"
    )


def client_delete_blocked(client_id: int, appointment_count: int) -> str:
    """Return message when a client still has appointments."""
    return (
        f"Cannot delete client {client_id}: it has {appointment_count} "
        f"appointment{'s' if appointment_count != 1 else ''}. "
        "Please delete them first."
    )
