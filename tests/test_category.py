"""Tests for categories: service and commands."""

import pytest

from inkbook.cli.main import cli
from inkbook.database.factories import create_sqlite_database
from inkbook.domain.category import DEFAULT_CATEGORIES, CategoryService
from inkbook.domain.entities import TransactionType
from inkbook.domain.errors import ConflictError, NotFoundError, ValidationError


class TestCategoryService:
    """Tests for CategoryService."""

    def test_seed_defaults(self, category_service):
        created = category_service.seed_default_categories()

        assert created == len(DEFAULT_CATEGORIES)
        income = category_service.list_categories(TransactionType.INCOME)
        assert {c.name for c in income} == {"Sessao de Tatuagem", "Sinal/Deposito", "Retoque", "Outros"}
        assert all(c.is_default for c in income)

    def test_seed_is_idempotent(self, category_service):
        category_service.seed_default_categories()
        assert category_service.seed_default_categories() == 0
        assert len(category_service.list_categories()) == len(DEFAULT_CATEGORIES)

    def test_same_name_in_both_types(self, category_service):
        category_service.seed_default_categories()

        income = category_service.get_category_by_name("Outros", "income")
        expense = category_service.get_category_by_name("Outros", "expense")

        assert income.id != expense.id
        assert income.category_type == TransactionType.INCOME
        assert expense.category_type == TransactionType.EXPENSE

    def test_create_custom(self, category_service):
        category_id = category_service.create_category(" Piercing ", "income")

        category = category_service.require_category(category_id)
        assert category.name == "Piercing"
        assert category.is_default is False

    def test_duplicate_rejected(self, category_service):
        category_service.create_category("Piercing", "income")
        with pytest.raises(ConflictError):
            category_service.create_category("Piercing", "income")

    def test_empty_name(self, category_service):
        with pytest.raises(ValidationError):
            category_service.create_category("   ", "expense")

    def test_unknown_type(self, category_service):
        with pytest.raises(ValueError):
            category_service.create_category("Transfer", "transfer")

    def test_resolve_category_id(self, category_service, sample_categories):
        assert category_service.resolve_category_id("Sinal/Deposito", "income") == sample_categories[
            ("Sinal/Deposito", "income")
        ]
        assert category_service.resolve_category_id("Sinal/Deposito", "expense") is None

    def test_require_missing(self, category_service):
        with pytest.raises(NotFoundError):
            category_service.require_category(404)

    def test_list_order(self, category_service, sample_categories):
        categories = category_service.list_categories()
        types = [c.category_type for c in categories]

        assert types == sorted(types, key=lambda t: t != TransactionType.INCOME)
        income_names = [c.name for c in categories if c.category_type == TransactionType.INCOME]
        assert income_names == sorted(income_names)


class TestCategoryCommands:
    """Tests for init-categories and the category command group."""

    def test_init_categories(self, cli_runner, temp_db):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "init-categories"])

        assert result.exit_code == 0
        assert "Successfully created" in result.output

    def test_init_categories_twice(self, cli_runner, temp_db):
        cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "init-categories"])
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "init-categories"])

        assert result.exit_code == 0
        assert "already exist" in result.output.lower()

    def test_category_list(self, cli_runner, temp_db, sample_categories):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "category", "list"])

        assert result.exit_code == 0
        assert "Income:" in result.output
        assert "Expense:" in result.output
        assert "Sessao de Tatuagem" in result.output

    def test_category_list_empty(self, cli_runner, temp_db):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "category", "list"])

        assert "init-categories" in result.output

    def test_category_create(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "category", "create", "Piercing", "--type", "income"]
        )

        assert result.exit_code == 0
        assert "Created income category 'Piercing'" in result.output
        db = create_sqlite_database(temp_db.database_path)
        try:
            assert CategoryService(db).get_category_by_name("Piercing", "income") is not None
        finally:
            db.disconnect()

    def test_category_create_duplicate(self, cli_runner, temp_db, sample_categories):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "category", "create", "Tintas"]
        )

        assert result.exit_code == 1
        assert "already exists" in result.output
