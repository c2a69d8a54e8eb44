"""Tests for transaction and summary commands."""

from datetime import date
from decimal import Decimal

import pytest

from inkbook.cli.main import cli
from inkbook.database.factories import create_sqlite_database
from inkbook.domain.entities import AppointmentDraft, AppointmentStatus
from inkbook.domain.transaction import TransactionService


def _invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


@pytest.fixture
def fresh_db(temp_db):
    """Open a second handle so reads never hit the fixture's session cache."""
    db = create_sqlite_database(temp_db.database_path)
    yield db
    db.disconnect()


def _add_expense(cli_runner, temp_db, amount="180", category="Tintas", date="2024-06-04"):
    return _invoke(
        cli_runner,
        temp_db,
        "transaction",
        "add",
        "--type",
        "expense",
        "--amount",
        amount,
        "--description",
        "Tintas pretas",
        "--category",
        category,
        "--date",
        date,
    )


def test_add_transaction(cli_runner, temp_db, sample_categories, fresh_db):
    result = _add_expense(cli_runner, temp_db, amount="R$ 1.250,00")

    assert result.exit_code == 0
    assert "Created transaction" in result.output
    txns = TransactionService(fresh_db).list_transactions()
    assert txns[0].amount == Decimal("1250.00")
    assert txns[0].category_id == sample_categories[("Tintas", "expense")]


def test_add_by_category_id(cli_runner, temp_db, sample_categories):
    category_id = sample_categories[("Agulhas", "expense")]

    result = _add_expense(cli_runner, temp_db, category=str(category_id))

    assert result.exit_code == 0


def test_add_unknown_category(cli_runner, temp_db, sample_categories):
    result = _add_expense(cli_runner, temp_db, category="Viagens")

    assert result.exit_code == 1
    assert "Expense category 'Viagens' not found" in result.output


def test_add_wrong_category_type(cli_runner, temp_db, sample_categories):
    category_id = sample_categories[("Retoque", "income")]

    result = _add_expense(cli_runner, temp_db, category=str(category_id))

    assert result.exit_code == 1
    assert "income category" in result.output


def test_add_invalid_amount(cli_runner, temp_db, sample_categories):
    result = _add_expense(cli_runner, temp_db, amount="lots")

    assert result.exit_code == 1
    assert "Invalid amount" in result.output


def test_update_and_delete(cli_runner, temp_db, sample_categories, fresh_db):
    _add_expense(cli_runner, temp_db)

    result = _invoke(cli_runner, temp_db, "transaction", "update", "1", "--amount", "200", "--category", "Agulhas")
    assert result.exit_code == 0
    assert "Updated transaction 1" in result.output

    result = _invoke(cli_runner, temp_db, "transaction", "delete", "1")
    assert result.exit_code == 0
    assert TransactionService(fresh_db).list_transactions() == []


def test_automatic_entry_is_locked(cli_runner, temp_db, appointment_service, sample_client, sample_categories):
    appointment_service.create_appointment(
        AppointmentDraft(
            client_id=sample_client.id,
            title="Rosa",
            date=date(2024, 6, 10),
            start_time="10:00",
            estimated_hours=1,
            status=AppointmentStatus.COMPLETED,
            price=Decimal("300"),
        )
    )

    result = _invoke(cli_runner, temp_db, "transaction", "delete", "1")

    assert result.exit_code == 1
    assert "generated automatically" in result.output


def test_list_transactions(cli_runner, temp_db, sample_categories):
    _add_expense(cli_runner, temp_db, date="2024-06-04")
    _add_expense(cli_runner, temp_db, amount="50", category="Agulhas", date="2024-07-02")

    result = _invoke(
        cli_runner, temp_db, "transaction", "list", "--start-date", "2024-06-01", "--end-date", "2024-06-30"
    )

    assert result.exit_code == 0
    assert "Found 1 transaction(s)" in result.output
    assert "2024-06-04" in result.output
    assert "R$ 180,00" in result.output


def test_list_by_category_name_needs_type(cli_runner, temp_db, sample_categories):
    result = _invoke(cli_runner, temp_db, "transaction", "list", "--category", "Tintas")

    assert result.exit_code == 1
    assert "--type is required" in result.output


def test_list_rejects_two_periods(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "transaction", "list", "--this-month", "--last-month")

    assert result.exit_code == 1
    assert "Only one period option" in result.output


def test_list_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "transaction", "list")

    assert result.exit_code == 0
    assert "No transactions found." in result.output


def test_summary(cli_runner, temp_db, sample_categories):
    _add_expense(cli_runner, temp_db, amount="200", date="2024-06-04")
    _invoke(
        cli_runner, temp_db, "transaction", "add", "--type", "income", "--amount", "1000",
        "--description", "Fechamento", "--category", "Sessao de Tatuagem", "--date", "2024-06-05",
    )

    result = _invoke(cli_runner, temp_db, "summary", "--start-date", "2024-06-01", "--end-date", "2024-06-30")

    assert result.exit_code == 0
    assert "Sessao de Tatuagem" in result.output
    assert "Tintas" in result.output
    assert "100.0%" in result.output
    assert "R$ 1.000,00" in result.output
    assert "BALANCE" in result.output
    assert "R$ 800,00" in result.output


def test_summary_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "summary", "--last-year")

    assert result.exit_code == 0
    assert "No transactions found." in result.output
