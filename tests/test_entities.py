"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date, datetime, UTC
from decimal import Decimal

from inkbook.domain.entities import (
    AppointmentChanges,
    AppointmentStatus,
    CalendarCell,
    CalendarDay,
    Client,
    MonthView,
    Transaction,
    TransactionType,
)


class TestClient:
    """Tests for Client entity."""

    def test_immutability(self):
        client = Client(
            id=1, name="Ana", phone="1", email=None, instagram=None, notes=None, created_at=datetime.now(UTC)
        )
        with pytest.raises(FrozenInstanceError):
            client.name = "Bia"

    def test_equality(self):
        created_at = datetime.now(UTC)
        a = Client(id=1, name="Ana", phone="1", email=None, instagram=None, notes=None, created_at=created_at)
        b = Client(id=1, name="Ana", phone="1", email=None, instagram=None, notes=None, created_at=created_at)
        assert a == b


class TestEnums:
    """Tests for the string-valued enums."""

    def test_status_values(self):
        assert [s.value for s in AppointmentStatus] == [
            "scheduled",
            "confirmed",
            "in_progress",
            "completed",
            "cancelled",
        ]
        assert AppointmentStatus("completed") == "completed"

    def test_transaction_type(self):
        assert TransactionType("income") is TransactionType.INCOME
        with pytest.raises(ValueError):
            TransactionType("transfer")


def test_appointment_defaults(make_appointment):
    apt = make_appointment()

    assert apt.deposit_paid is False
    assert apt.deposit_paid_at is None
    assert apt.price is None
    assert apt.google_event_id is None


def test_appointment_changes_default_to_no_change():
    changes = AppointmentChanges()

    assert changes.title is None
    assert changes.deposit_paid is None
    assert changes.clear == frozenset()


def test_transaction_entity():
    txn = Transaction(
        id=1,
        transaction_type=TransactionType.INCOME,
        amount=Decimal("150.00"),
        description="Sinal - Rosa (Ana)",
        date=datetime(2024, 6, 10, tzinfo=UTC),
        category_id=2,
        appointment_id=5,
        is_automatic=True,
        created_at=datetime.now(UTC),
    )
    assert txn.is_automatic
    assert txn.amount == Decimal("150.00")


def test_month_view_counts_current_month_only(make_appointment):
    days = (
        CalendarDay(CalendarCell(date(2024, 5, 31), False), (make_appointment(id=1),)),
        CalendarDay(CalendarCell(date(2024, 6, 1), True), (make_appointment(id=2), make_appointment(id=3))),
        CalendarDay(CalendarCell(date(2024, 6, 2), True), ()),
    )

    assert MonthView(year=2024, month=6, days=days).appointment_count == 2
