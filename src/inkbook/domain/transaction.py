"""Transaction domain service."""

from collections import defaultdict
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from inkbook.database.base import Database
from inkbook.domain.entities import (
    CategoryBreakdown,
    FinancialSummary,
    Transaction as TransactionEntity,
    TransactionType,
)
from inkbook.domain.errors import (
    NotFoundError,
    ValidationError,
    automatic_transaction_locked,
    category_not_found,
    transaction_not_found,
)


class TransactionService:
    """Service for the studio's financial ledger."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        transaction_type: TransactionType,
        amount: Decimal,
        description: str,
        date: datetime,
        category_id: int,
    ) -> int:
        """Record a manual transaction.

        Args:
            transaction_type: income or expense
            amount: Positive amount
            description: Description of the entry
            date: Booking date
            category_id: Category of the same type as the transaction

        Returns:
            Transaction ID

        Raises:
            ValidationError: If amount, description or category type are invalid
            NotFoundError: If the category doesn't exist
        """
        transaction_type = TransactionType(transaction_type)
        self._validate(transaction_type, amount, description, category_id)

        return self.db.create_transaction(
            transaction_type=transaction_type,
            amount=amount,
            description=description.strip(),
            date=date,
            category_id=category_id,
            appointment_id=None,
            is_automatic=False,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        transaction_type: Optional[TransactionType] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        date: Optional[datetime] = None,
        category_id: Optional[int] = None,
    ) -> None:
        """Update a manual transaction.

        Raises:
            NotFoundError: If the transaction or category doesn't exist
            ValidationError: If the transaction is automatic or a value is invalid
        """
        txn = self.require_transaction(transaction_id)
        if txn.is_automatic:
            raise ValidationError(automatic_transaction_locked(transaction_id))

        new_type = TransactionType(transaction_type) if transaction_type is not None else txn.transaction_type
        self._validate(
            new_type,
            amount if amount is not None else txn.amount,
            description if description is not None else txn.description,
            category_id if category_id is not None else txn.category_id,
        )

        self.db.update_transaction(
            transaction_id=transaction_id,
            transaction_type=transaction_type,
            amount=amount,
            description=description.strip() if description is not None else None,
            date=date,
            category_id=category_id,
        )

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a manual transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If the transaction is automatic
        """
        txn = self.require_transaction(transaction_id)
        if txn.is_automatic:
            raise ValidationError(automatic_transaction_locked(transaction_id))

        self.db.delete_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        transaction_type: Optional[TransactionType] = None,
        category_id: Optional[int] = None,
        appointment_id: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List transactions, newest first.

        Args:
            start_date: Optional first booking day
            end_date: Optional last booking day
            transaction_type: Optional income/expense filter
            category_id: Optional category filter
            appointment_id: Optional originating appointment filter

        Returns:
            List of transaction entities
        """
        if transaction_type is not None:
            transaction_type = TransactionType(transaction_type)
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            transaction_type=transaction_type,
            category_id=category_id,
            appointment_id=appointment_id,
        )

    def get_summary(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> FinancialSummary:
        """Total income, expense and balance for a period."""
        transactions = self.db.list_transactions(start_date=start_date, end_date=end_date)

        income = sum(
            (t.amount for t in transactions if t.transaction_type == TransactionType.INCOME),
            Decimal("0"),
        )
        expense = sum(
            (t.amount for t in transactions if t.transaction_type == TransactionType.EXPENSE),
            Decimal("0"),
        )
        return FinancialSummary(
            total_income=income,
            total_expense=expense,
            balance=income - expense,
            transaction_count=len(transactions),
        )

    def get_category_breakdown(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        transaction_type: TransactionType = TransactionType.INCOME,
    ) -> list[CategoryBreakdown]:
        """Share of each category in a period's income or expense.

        Returns:
            One entry per category with transactions, largest total first
        """
        transaction_type = TransactionType(transaction_type)
        transactions = self.db.list_transactions(
            start_date=start_date, end_date=end_date, transaction_type=transaction_type
        )

        totals: dict[int, Decimal] = defaultdict(lambda: Decimal("0"))
        counts: dict[int, int] = defaultdict(int)
        for txn in transactions:
            totals[txn.category_id] += txn.amount
            counts[txn.category_id] += 1

        grand_total = sum(totals.values(), Decimal("0"))
        breakdown = []
        for category_id, total in totals.items():
            category = self.db.get_category(category_id)
            percentage = float(total / grand_total * 100) if grand_total > 0 else 0.0
            breakdown.append(
                CategoryBreakdown(
                    category_id=category_id,
                    category_name=category.name if category else "Unknown",
                    category_type=transaction_type,
                    total=total,
                    count=counts[category_id],
                    percentage=percentage,
                )
            )

        breakdown.sort(key=lambda item: (-item.total, item.category_name))
        return breakdown

    def _validate(
        self,
        transaction_type: TransactionType,
        amount: Decimal,
        description: str,
        category_id: int,
    ) -> None:
        if amount is None or amount <= 0:
            raise ValidationError("Amount must be positive")
        if not description or not description.strip():
            raise ValidationError("Description must not be empty")

        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        if category.category_type != transaction_type:
            raise ValidationError(
                f"Category '{category.name}' is a {category.category_type.value} category "
                f"and cannot be used for {transaction_type.value}"
            )
