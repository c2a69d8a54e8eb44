"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid importing services through domain/__init__.py
from inkbook.domain.entities import (
    Client,
    Category,
    Appointment,
    AppointmentStatus,
    Transaction,
    TransactionType,
)


class Database(ABC):
    """Abstract database interface for inkbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the session and every pooled connection."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Client operations
    @abstractmethod
    def create_client(
        self,
        name: str,
        phone: str,
        email: Optional[str] = None,
        instagram: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def list_clients(self, search: Optional[str] = None) -> list[Client]:
        """List clients ordered by name, optionally matching a search term."""
        pass

    @abstractmethod
    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        instagram: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update client fields that are not None."""
        pass

    @abstractmethod
    def delete_client(self, client_id: int) -> None:
        """Delete a client."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, name: str, category_type: TransactionType, is_default: bool = False
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str, category_type: TransactionType) -> Optional[Category]:
        """Get category by name and type."""
        pass

    @abstractmethod
    def list_categories(self, category_type: Optional[TransactionType] = None) -> list[Category]:
        """List categories, optionally filtered by type."""
        pass

    # Appointment operations
    @abstractmethod
    def create_appointment(
        self,
        client_id: int,
        title: str,
        date: date,
        start_time: str,
        estimated_hours: float,
        status: AppointmentStatus = AppointmentStatus.SCHEDULED,
        description: Optional[str] = None,
        notes: Optional[str] = None,
        price: Optional[Decimal] = None,
        deposit_amount: Optional[Decimal] = None,
        deposit_paid: bool = False,
        deposit_paid_at: Optional[datetime] = None,
    ) -> int:
        """Create an appointment. Returns appointment ID."""
        pass

    @abstractmethod
    def get_appointment(self, appointment_id: int) -> Optional[Appointment]:
        """Get appointment by ID, including the client's name."""
        pass

    @abstractmethod
    def update_appointment(self, appointment_id: int, **fields: Any) -> None:
        """Update appointment columns.

        Only the given keyword fields are written; passing None clears a
        nullable column.
        """
        pass

    @abstractmethod
    def delete_appointment(self, appointment_id: int) -> None:
        """Delete an appointment, unlinking its transactions."""
        pass

    @abstractmethod
    def list_appointments(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[AppointmentStatus] = None,
        client_id: Optional[int] = None,
        exclude_cancelled: bool = False,
    ) -> list[Appointment]:
        """List appointments ordered by date and start time.

        Args:
            start_date: Optional first day (inclusive)
            end_date: Optional last day (inclusive)
            status: Optional status filter
            client_id: Optional client filter
            exclude_cancelled: If True, leave out cancelled appointments
        """
        pass

    @abstractmethod
    def count_client_appointments(self, client_id: int) -> int:
        """Count appointments belonging to a client."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        transaction_type: TransactionType,
        amount: Decimal,
        description: str,
        date: datetime,
        category_id: int,
        appointment_id: Optional[int] = None,
        is_automatic: bool = False,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        transaction_type: Optional[TransactionType] = None,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        date: Optional[datetime] = None,
        category_id: Optional[int] = None,
    ) -> None:
        """Update transaction fields that are not None."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        transaction_type: Optional[TransactionType] = None,
        category_id: Optional[int] = None,
        appointment_id: Optional[int] = None,
        is_automatic: Optional[bool] = None,
    ) -> list[Transaction]:
        """List transactions, newest first, with optional filters.

        Args:
            start_date: Optional first booking day (inclusive)
            end_date: Optional last booking day (inclusive)
            transaction_type: Optional income/expense filter
            category_id: Optional category ID filter
            appointment_id: Optional originating appointment filter
            is_automatic: If set, only automatic (True) or manual (False) entries
        """
        pass
