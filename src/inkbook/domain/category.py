"""Category domain service."""

from typing import Optional
from inkbook.database.base import Database
from inkbook.domain.entities import Category as CategoryEntity, TransactionType
from inkbook.domain.errors import ConflictError, NotFoundError, ValidationError, category_not_found

# Canonical income categories used by automatic transactions
SESSION_CATEGORY_NAME = "Sessao de Tatuagem"
DEPOSIT_CATEGORY_NAME = "Sinal/Deposito"

DEFAULT_CATEGORIES = [
    (SESSION_CATEGORY_NAME, TransactionType.INCOME),
    (DEPOSIT_CATEGORY_NAME, TransactionType.INCOME),
    ("Retoque", TransactionType.INCOME),
    ("Outros", TransactionType.INCOME),
    ("Materiais", TransactionType.EXPENSE),
    ("Tintas", TransactionType.EXPENSE),
    ("Agulhas", TransactionType.EXPENSE),
    ("Aluguel", TransactionType.EXPENSE),
    ("Equipamentos", TransactionType.EXPENSE),
    ("Marketing", TransactionType.EXPENSE),
    ("Outros", TransactionType.EXPENSE),
]


class CategoryService:
    """Service for managing ledger categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self, name: str, category_type: TransactionType, is_default: bool = False
    ) -> int:
        """Create a category.

        Args:
            name: Category name
            category_type: income or expense
            is_default: Whether the category is one of the studio defaults

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a category with the same name and type exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name must not be empty")

        category_type = TransactionType(category_type)
        if self.db.get_category_by_name(name, category_type) is not None:
            raise ConflictError(f"{category_type.value.capitalize()} category '{name}' already exists")

        return self.db.create_category(name=name, category_type=category_type, is_default=is_default)

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def require_category(self, category_id: int) -> CategoryEntity:
        """Get category by ID or raise NotFoundError."""
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def get_category_by_name(
        self, name: str, category_type: TransactionType
    ) -> Optional[CategoryEntity]:
        """Get category by name within a type."""
        return self.db.get_category_by_name(name, TransactionType(category_type))

    def resolve_category_id(self, name: str, category_type: TransactionType) -> Optional[int]:
        """Return the ID of a named category, or None when it is not configured."""
        category = self.get_category_by_name(name, category_type)
        return category.id if category is not None else None

    def list_categories(
        self, category_type: Optional[TransactionType] = None
    ) -> list[CategoryEntity]:
        """List categories, optionally of one type, ordered by type then name."""
        if category_type is not None:
            category_type = TransactionType(category_type)
        return self.db.list_categories(category_type=category_type)

    def seed_default_categories(self) -> int:
        """Create any missing default categories.

        Returns:
            Number of categories created
        """
        created = 0
        for name, category_type in DEFAULT_CATEGORIES:
            if self.db.get_category_by_name(name, category_type) is None:
                self.db.create_category(name=name, category_type=category_type, is_default=True)
                created += 1
        return created
