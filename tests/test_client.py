"""Tests for clients: service and commands."""

from datetime import date

import pytest

from inkbook.cli.client_resolution import resolve_client
from inkbook.cli.main import cli
from inkbook.database.factories import create_sqlite_database
from inkbook.domain.client import ClientService
from inkbook.domain.entities import AppointmentDraft
from inkbook.domain.errors import (
    DependencyError,
    NotFoundError,
    SchedulingConflict,
    ValidationError,
)


class TestClientService:
    """Tests for ClientService."""

    def test_create(self, client_service):
        client_id = client_service.create_client(
            name="  Bruno Lima ", phone="11 98888-7777", email="bruno@example.com", instagram="@bruno.ink"
        )

        client = client_service.get_client(client_id)
        assert client.name == "Bruno Lima"
        assert client.instagram == "bruno.ink"
        assert client.email == "bruno@example.com"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"name": "B", "phone": "123"},
            {"name": "Bruno", "phone": "  "},
            {"name": "Bruno", "phone": "123", "email": "not-an-email"},
        ],
    )
    def test_invalid(self, client_service, kwargs):
        with pytest.raises(ValidationError):
            client_service.create_client(**kwargs)

    def test_search(self, client_service):
        client_service.create_client(name="Bruno Lima", phone="111", instagram="bruno.ink")
        client_service.create_client(name="Carla Dias", phone="222")

        assert [c.name for c in client_service.list_clients(search="bru")] == ["Bruno Lima"]
        assert [c.name for c in client_service.list_clients(search="@bruno")] == ["Bruno Lima"]
        assert [c.name for c in client_service.list_clients(search="222")] == ["Carla Dias"]
        assert len(client_service.list_clients()) == 2

    def test_update(self, client_service, sample_client):
        client_service.update_client(sample_client.id, phone=" 11 97777-1234 ", instagram="@ana.ink")

        client = client_service.get_client(sample_client.id)
        assert client.phone == "11 97777-1234"
        assert client.instagram == "ana.ink"
        assert client.name == "Ana Souza"

    @pytest.mark.parametrize(
        "kwargs",
        [{"name": " A "}, {"phone": "   "}, {"email": "not-an-email"}],
    )
    def test_update_invalid(self, client_service, sample_client, kwargs):
        with pytest.raises(ValidationError):
            client_service.update_client(sample_client.id, **kwargs)

        assert client_service.get_client(sample_client.id) == sample_client

    def test_update_missing(self, client_service):
        with pytest.raises(NotFoundError):
            client_service.update_client(404, name="Bruno Lima")

    def test_renamed_client_appears_in_conflicts(self, client_service, appointment_service, sample_client):
        draft = AppointmentDraft(
            client_id=sample_client.id,
            title="Rosa",
            date=date(2024, 6, 10),
            start_time="10:00",
            estimated_hours=2,
        )
        appointment_service.create_appointment(draft)
        client_service.update_client(sample_client.id, name="Ana Souza Lima")

        with pytest.raises(SchedulingConflict) as exc_info:
            appointment_service.create_appointment(draft)

        assert exc_info.value.conflict.client_name == "Ana Souza Lima"

    def test_delete(self, client_service):
        client_id = client_service.create_client(name="Bruno Lima", phone="111")

        client_service.delete_client(client_id)

        assert client_service.get_client(client_id) is None
        with pytest.raises(NotFoundError):
            client_service.delete_client(client_id)

    def test_delete_blocked_by_appointments(self, client_service, appointment_service, sample_client):
        appointment_service.create_appointment(
            AppointmentDraft(
                client_id=sample_client.id,
                title="Rosa",
                date=date(2024, 6, 10),
                start_time="10:00",
                estimated_hours=1,
            )
        )

        with pytest.raises(DependencyError, match="1 appointment"):
            client_service.delete_client(sample_client.id)


class TestResolveClient:
    """Tests for resolving clients by ID or name."""

    def test_by_id_and_name(self, client_service, sample_client):
        assert resolve_client(client_service, sample_client.id) == sample_client.id
        assert resolve_client(client_service, str(sample_client.id)) == sample_client.id
        assert resolve_client(client_service, "ana souza") == sample_client.id

    def test_not_found(self, client_service, sample_client):
        with pytest.raises(ValueError):
            resolve_client(client_service, "Nobody")
        with pytest.raises(ValueError):
            resolve_client(client_service, 999)

    def test_ambiguous_name(self, client_service, sample_client):
        client_service.create_client(name="Ana Souza", phone="333")
        with pytest.raises(ValueError, match="use the ID"):
            resolve_client(client_service, "Ana Souza")


class TestClientCommands:
    """Tests for the client command group."""

    def test_add_and_list(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "client", "add", "Bruno Lima", "--phone", "111", "--instagram", "@bruno"],
        )
        assert result.exit_code == 0
        assert "Created client" in result.output

        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "client", "list"])
        assert result.exit_code == 0
        assert "Bruno Lima" in result.output

    def test_add_invalid(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "client", "add", "B", "--phone", "111"]
        )
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_show_missing(self, cli_runner, temp_db):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "client", "show", "42"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_update(self, cli_runner, temp_db, sample_client):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "client", "update", str(sample_client.id), "--phone", "11 97777-1234"],
        )
        assert result.exit_code == 0
        assert f"Updated client {sample_client.id}" in result.output

        db = create_sqlite_database(temp_db.database_path)
        try:
            assert ClientService(db).get_client(sample_client.id).phone == "11 97777-1234"
        finally:
            db.disconnect()

    def test_update_without_options(self, cli_runner, temp_db, sample_client):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "client", "update", str(sample_client.id)]
        )
        assert result.exit_code == 1
        assert "Nothing to update" in result.output

    def test_update_missing(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "client", "update", "42", "--name", "Bruno Lima"]
        )
        assert result.exit_code == 1
        assert "not found" in result.output
