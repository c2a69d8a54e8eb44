"""SQLAlchemy models for inkbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Float,
    Numeric,
    Boolean,
    UniqueConstraint,
    Index,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Client(Base):
    """Studio client model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    email = Column(String, nullable=True)
    instagram = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    appointments = relationship("Appointment", back_populates="client")


class Category(Base):
    """Ledger category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category_type = Column(String(16), nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("name", "category_type", name="uq_category_name_type"),)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")


class Appointment(Base):
    """Appointment model."""

    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    estimated_hours = Column(Float, nullable=False)
    status = Column(String(16), default="scheduled", nullable=False)
    price = Column(Numeric(10, 2), nullable=True)
    deposit_amount = Column(Numeric(10, 2), nullable=True)
    deposit_paid = Column(Boolean, default=False, nullable=False)
    deposit_paid_at = Column(DateTime, nullable=True)
    google_event_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (Index("ix_appointments_date_status", "date", "status"),)

    # Relationships
    client = relationship("Client", back_populates="appointments")
    transactions = relationship("Transaction", back_populates="appointment")


class Transaction(Base):
    """Financial ledger entry model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    transaction_type = Column(String(16), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(String, nullable=False)
    date = Column(DateTime, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=True)
    is_automatic = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    category = relationship("Category", back_populates="transactions")
    appointment = relationship("Appointment", back_populates="transactions")


def create_session_factory(database_url: str) -> tuple[Engine, sessionmaker[Session]]:
    """Create a SQLAlchemy engine and session factory, creating tables if needed."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return engine, sessionmaker(bind=engine)
