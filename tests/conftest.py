"""Shared pytest fixtures for inkbook tests."""

import tempfile
import os
from datetime import date, datetime, UTC
import pytest

from inkbook.database.factories import create_sqlite_database
from inkbook.domain.appointment import AppointmentService
from inkbook.domain.calendar import CalendarService
from inkbook.domain.category import CategoryService
from inkbook.domain.client import ClientService
from inkbook.domain.entities import Appointment, AppointmentStatus
from inkbook.domain.transaction import TransactionService

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def appointment_service(temp_db):
    """Create an AppointmentService with a fixed clock."""
    return AppointmentService(temp_db, clock=lambda: FIXED_NOW)


@pytest.fixture
def calendar_service(temp_db):
    """Create a CalendarService with a temporary database."""
    return CalendarService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """Create a sample client for testing."""
    client_id = client_service.create_client(name="Ana Souza", phone="+55 11 99999-0000")
    return client_service.get_client(client_id)


@pytest.fixture
def sample_categories(category_service):
    """Seed the default categories and return their IDs keyed by (name, type)."""
    category_service.seed_default_categories()
    return {
        (cat.name, cat.category_type.value): cat.id
        for cat in category_service.list_categories()
    }


@pytest.fixture
def make_appointment():
    """Build Appointment entities without touching the database."""

    def _make(
        id=1,
        start_time="10:00",
        estimated_hours=2.0,
        day=date(2024, 6, 10),
        status=AppointmentStatus.SCHEDULED,
        **kwargs,
    ):
        values = {
            "client_id": 1,
            "title": f"Session {id}",
            "client_name": "Ana Souza",
        }
        values.update(kwargs)
        return Appointment(
            id=id,
            date=day,
            start_time=start_time,
            estimated_hours=estimated_hours,
            status=status,
            **values,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
