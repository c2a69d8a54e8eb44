"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so column types (strings for
enums, naive datetimes from SQLite) never leak into the domain.
"""

from datetime import datetime, UTC
from typing import Optional

from inkbook.domain import entities as domain
from inkbook.database.models import (
    Client as ORMClient,
    Category as ORMCategory,
    Appointment as ORMAppointment,
    Transaction as ORMTransaction,
)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored timestamps are UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        phone=orm_client.phone,
        email=orm_client.email,
        instagram=orm_client.instagram,
        notes=orm_client.notes,
        created_at=_aware(orm_client.created_at),
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        category_type=domain.TransactionType(orm_category.category_type),
        is_default=orm_category.is_default,
        created_at=_aware(orm_category.created_at),
    )


def appointment_to_domain(orm_appointment: ORMAppointment) -> domain.Appointment:
    """Convert SQLAlchemy Appointment model to domain Appointment entity."""
    client = orm_appointment.client
    return domain.Appointment(
        id=orm_appointment.id,
        client_id=orm_appointment.client_id,
        title=orm_appointment.title,
        date=orm_appointment.date,
        start_time=orm_appointment.start_time,
        estimated_hours=orm_appointment.estimated_hours,
        status=domain.AppointmentStatus(orm_appointment.status),
        description=orm_appointment.description,
        notes=orm_appointment.notes,
        price=orm_appointment.price,
        deposit_amount=orm_appointment.deposit_amount,
        deposit_paid=orm_appointment.deposit_paid,
        deposit_paid_at=_aware(orm_appointment.deposit_paid_at),
        google_event_id=orm_appointment.google_event_id,
        client_name=client.name if client is not None else None,
        created_at=_aware(orm_appointment.created_at),
        updated_at=_aware(orm_appointment.updated_at),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        transaction_type=domain.TransactionType(orm_transaction.transaction_type),
        amount=orm_transaction.amount,
        description=orm_transaction.description,
        date=_aware(orm_transaction.date),
        category_id=orm_transaction.category_id,
        appointment_id=orm_transaction.appointment_id,
        is_automatic=orm_transaction.is_automatic,
        created_at=_aware(orm_transaction.created_at),
    )
