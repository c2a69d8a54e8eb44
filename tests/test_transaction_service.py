"""Tests for TransactionService."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from inkbook.domain.entities import AppointmentDraft, AppointmentStatus, TransactionType
from inkbook.domain.errors import NotFoundError, ValidationError


def _add(service, categories, transaction_type, amount, name, day, description="Entry"):
    return service.create_transaction(
        transaction_type=transaction_type,
        amount=Decimal(amount),
        description=description,
        date=datetime(day.year, day.month, day.day),
        category_id=categories[(name, transaction_type)],
    )


class TestManualTransactions:
    """Tests for creating, editing and deleting manual entries."""

    def test_create(self, transaction_service, sample_categories):
        txn_id = _add(transaction_service, sample_categories, "expense", "180.00", "Tintas", date(2024, 6, 3))

        txn = transaction_service.get_transaction(txn_id)
        assert txn.transaction_type == TransactionType.EXPENSE
        assert txn.amount == Decimal("180.00")
        assert txn.is_automatic is False
        assert txn.appointment_id is None

    @pytest.mark.parametrize("amount", ["0", "-10"])
    def test_amount_must_be_positive(self, transaction_service, sample_categories, amount):
        with pytest.raises(ValidationError):
            _add(transaction_service, sample_categories, "expense", amount, "Tintas", date(2024, 6, 3))

    def test_description_required(self, transaction_service, sample_categories):
        with pytest.raises(ValidationError):
            _add(transaction_service, sample_categories, "expense", "10", "Tintas", date(2024, 6, 3), description="  ")

    def test_category_type_must_match(self, transaction_service, sample_categories):
        with pytest.raises(ValidationError, match="expense category"):
            transaction_service.create_transaction(
                transaction_type="income",
                amount=Decimal("10"),
                description="Wrong",
                date=datetime(2024, 6, 3),
                category_id=sample_categories[("Tintas", "expense")],
            )

    def test_unknown_category(self, transaction_service, sample_categories):
        with pytest.raises(NotFoundError):
            transaction_service.create_transaction(
                transaction_type="income",
                amount=Decimal("10"),
                description="Nowhere",
                date=datetime(2024, 6, 3),
                category_id=9999,
            )

    def test_update(self, transaction_service, sample_categories):
        txn_id = _add(transaction_service, sample_categories, "expense", "180", "Tintas", date(2024, 6, 3))

        transaction_service.update_transaction(
            txn_id, amount=Decimal("200"), category_id=sample_categories[("Agulhas", "expense")]
        )

        txn = transaction_service.get_transaction(txn_id)
        assert txn.amount == Decimal("200")
        assert txn.category_id == sample_categories[("Agulhas", "expense")]
        assert txn.description == "Entry"

    def test_delete(self, transaction_service, sample_categories):
        txn_id = _add(transaction_service, sample_categories, "expense", "180", "Tintas", date(2024, 6, 3))

        transaction_service.delete_transaction(txn_id)

        assert transaction_service.get_transaction(txn_id) is None
        with pytest.raises(NotFoundError):
            transaction_service.delete_transaction(txn_id)


class TestAutomaticTransactionsLocked:
    """Entries booked from appointments cannot be edited by hand."""

    @pytest.fixture
    def automatic_id(self, appointment_service, transaction_service, sample_client, sample_categories):
        apt = appointment_service.create_appointment(
            AppointmentDraft(
                client_id=sample_client.id,
                title="Rosa",
                date=date(2024, 6, 10),
                start_time="10:00",
                estimated_hours=2,
                status=AppointmentStatus.COMPLETED,
                price=Decimal("500"),
            )
        )
        return transaction_service.list_transactions(appointment_id=apt.id)[0].id

    def test_update_refused(self, transaction_service, automatic_id):
        with pytest.raises(ValidationError, match="automatically"):
            transaction_service.update_transaction(automatic_id, amount=Decimal("1"))

    def test_delete_refused(self, transaction_service, automatic_id):
        with pytest.raises(ValidationError):
            transaction_service.delete_transaction(automatic_id)
        assert transaction_service.get_transaction(automatic_id) is not None


class TestReports:
    """Tests for listing, summary and category breakdown."""

    @pytest.fixture
    def june_ledger(self, transaction_service, sample_categories):
        _add(transaction_service, sample_categories, "income", "600", "Sessao de Tatuagem", date(2024, 6, 3))
        _add(transaction_service, sample_categories, "income", "200", "Sinal/Deposito", date(2024, 6, 5))
        _add(transaction_service, sample_categories, "income", "200", "Sessao de Tatuagem", date(2024, 6, 28))
        _add(transaction_service, sample_categories, "expense", "150", "Tintas", date(2024, 6, 4))
        _add(transaction_service, sample_categories, "expense", "50", "Agulhas", date(2024, 6, 30))
        _add(transaction_service, sample_categories, "expense", "999", "Aluguel", date(2024, 7, 1))

    def test_list_filters_and_order(self, transaction_service, sample_categories, june_ledger):
        june = transaction_service.list_transactions(start_date=date(2024, 6, 1), end_date=date(2024, 6, 30))

        assert len(june) == 5
        assert [t.date.day for t in june] == [30, 28, 5, 4, 3]

        expenses = transaction_service.list_transactions(
            start_date=date(2024, 6, 1), end_date=date(2024, 6, 30), transaction_type="expense"
        )
        assert sorted(t.amount for t in expenses) == [Decimal("50"), Decimal("150")]

    def test_end_date_includes_whole_day(self, transaction_service, sample_categories):
        transaction_service.create_transaction(
            transaction_type="expense",
            amount=Decimal("30"),
            description="Late purchase",
            date=datetime(2024, 6, 30, 22, 15),
            category_id=sample_categories[("Materiais", "expense")],
        )

        assert len(transaction_service.list_transactions(end_date=date(2024, 6, 30))) == 1
        assert transaction_service.list_transactions(start_date=date(2024, 7, 1)) == []

    def test_summary(self, transaction_service, june_ledger):
        summary = transaction_service.get_summary(date(2024, 6, 1), date(2024, 6, 30))

        assert summary.total_income == Decimal("1000")
        assert summary.total_expense == Decimal("200")
        assert summary.balance == Decimal("800")
        assert summary.transaction_count == 5

    def test_summary_empty_period(self, transaction_service):
        summary = transaction_service.get_summary(date(2020, 1, 1), date(2020, 1, 31))

        assert summary.total_income == 0
        assert summary.balance == 0
        assert summary.transaction_count == 0

    def test_income_breakdown(self, transaction_service, june_ledger):
        breakdown = transaction_service.get_category_breakdown(date(2024, 6, 1), date(2024, 6, 30))

        assert [b.category_name for b in breakdown] == ["Sessao de Tatuagem", "Sinal/Deposito"]
        assert breakdown[0].total == Decimal("800")
        assert breakdown[0].count == 2
        assert breakdown[0].percentage == pytest.approx(80.0)
        assert breakdown[1].percentage == pytest.approx(20.0)

    def test_expense_breakdown(self, transaction_service, june_ledger):
        breakdown = transaction_service.get_category_breakdown(
            date(2024, 6, 1), date(2024, 6, 30), TransactionType.EXPENSE
        )

        assert [(b.category_name, b.total) for b in breakdown] == [
            ("Tintas", Decimal("150")),
            ("Agulhas", Decimal("50")),
        ]
        assert sum(b.percentage for b in breakdown) == pytest.approx(100.0)

    def test_breakdown_empty(self, transaction_service, sample_categories):
        assert transaction_service.get_category_breakdown() == []
