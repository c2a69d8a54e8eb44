"""Domain model entities for inkbook.

These are pure data classes representing studio concepts, independent of
database schema. Services and the rule engine only ever see these shapes.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AppointmentStatus(str, Enum):
    """Lifecycle status of an appointment.

    The set is flat: any status may move to any other.
    """

    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TransactionType(str, Enum):
    """Direction of a ledger entry."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Client:
    """Studio client domain entity."""

    id: int
    name: str
    phone: str
    email: Optional[str]
    instagram: Optional[str]
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Ledger category, typed as income or expense."""

    id: int
    name: str
    category_type: TransactionType
    is_default: bool
    created_at: datetime


@dataclass(frozen=True)
class Appointment:
    """Scheduled tattoo session domain entity."""

    id: int
    client_id: int
    title: str
    date: date
    start_time: str
    estimated_hours: float
    status: AppointmentStatus
    description: Optional[str] = None
    notes: Optional[str] = None
    price: Optional[Decimal] = None
    deposit_amount: Optional[Decimal] = None
    deposit_paid: bool = False
    deposit_paid_at: Optional[datetime] = None
    google_event_id: Optional[str] = None
    client_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Transaction:
    """Financial ledger entry domain entity."""

    id: int
    transaction_type: TransactionType
    amount: Decimal
    description: str
    date: datetime
    category_id: int
    appointment_id: Optional[int]
    is_automatic: bool
    created_at: datetime


@dataclass(frozen=True)
class AppointmentDraft:
    """Requested values for a new appointment."""

    client_id: int
    title: str
    date: date
    start_time: str
    estimated_hours: float
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    description: Optional[str] = None
    notes: Optional[str] = None
    price: Optional[Decimal] = None
    deposit_amount: Optional[Decimal] = None
    deposit_paid: bool = False


@dataclass(frozen=True)
class AppointmentChanges:
    """Partial update of an appointment.

    Fields left as None are not changed. Fields named in ``clear`` are reset
    to None (only the optional text and money fields can be cleared).
    """

    client_id: Optional[int] = None
    title: Optional[str] = None
    date: Optional[date] = None
    start_time: Optional[str] = None
    estimated_hours: Optional[float] = None
    status: Optional[AppointmentStatus] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    price: Optional[Decimal] = None
    deposit_amount: Optional[Decimal] = None
    deposit_paid: Optional[bool] = None
    clear: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class TransactionDraft:
    """Values for a ledger entry that has not been stored yet."""

    transaction_type: TransactionType
    amount: Decimal
    description: str
    date: datetime
    category_id: int
    appointment_id: Optional[int] = None
    is_automatic: bool = False


@dataclass(frozen=True)
class ConflictingAppointment:
    """Identity of the appointment that blocks a requested time window."""

    id: int
    title: str
    client_name: str
    start_time: str
    end_time: str


@dataclass(frozen=True)
class CalendarCell:
    """One day cell of the month grid."""

    date: date
    is_current_month: bool


@dataclass(frozen=True)
class CalendarDay:
    """A grid cell together with the appointments booked on that day."""

    cell: CalendarCell
    appointments: tuple[Appointment, ...]


@dataclass(frozen=True)
class MonthView:
    """Month grid view model with appointments grouped per day."""

    year: int
    month: int
    days: tuple[CalendarDay, ...]

    @property
    def appointment_count(self) -> int:
        return sum(len(day.appointments) for day in self.days if day.cell.is_current_month)


@dataclass(frozen=True)
class FinancialSummary:
    """Totals for a period."""

    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    transaction_count: int


@dataclass(frozen=True)
class CategoryBreakdown:
    """One category's share of a period's income or expense."""

    category_id: int
    category_name: str
    category_type: TransactionType
    total: Decimal
    count: int
    percentage: float
