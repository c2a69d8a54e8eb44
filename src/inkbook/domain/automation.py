"""Automatic ledger entries triggered by appointment transitions.

Two rules compare an appointment's stored state before a change with its
state after the change:

- Deposit: ``deposit_paid`` goes from false (or a new appointment) to true
  with a positive deposit amount. Books the deposit as income.
- Completion: ``status`` goes from anything else to ``completed`` with a
  positive price. Books the price minus the automatic deposits already
  recorded for the appointment.

Each appointment gets at most one automatic entry per rule. A missing
canonical category skips the rule instead of failing the update.
"""

import logging
from datetime import datetime, UTC
from decimal import Decimal
from typing import Callable, Optional

from inkbook.domain.category import DEPOSIT_CATEGORY_NAME, SESSION_CATEGORY_NAME
from inkbook.domain.entities import (
    Appointment,
    AppointmentStatus,
    Transaction,
    TransactionDraft,
    TransactionType,
)
from inkbook.domain.errors import CategoryNotConfigured

logger = logging.getLogger(__name__)

CategoryResolver = Callable[[str, TransactionType], Optional[int]]
TransactionWriter = Callable[[TransactionDraft], int]
AutomaticTransactionLookup = Callable[[int], list[Transaction]]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def deposit_description(appointment: Appointment) -> str:
    return f"Sinal - {appointment.title} ({appointment.client_name or ''})"


def session_description(appointment: Appointment) -> str:
    return f"Sessao - {appointment.title} ({appointment.client_name or ''})"


class TransactionRuleEngine:
    """Creates automatic income transactions for appointment transitions."""

    def __init__(
        self,
        resolve_category: CategoryResolver,
        create_transaction: TransactionWriter,
        list_automatic_transactions: AutomaticTransactionLookup,
        clock: Callable[[], datetime] = _utcnow,
        deposit_category: str = DEPOSIT_CATEGORY_NAME,
        session_category: str = SESSION_CATEGORY_NAME,
    ):
        """Initialize the rule engine.

        Args:
            resolve_category: Returns the ID of the category with a given name
                and type, or None if there is none
            create_transaction: Stores a transaction and returns its ID
            list_automatic_transactions: Returns the automatic transactions
                already linked to an appointment ID
            clock: Source of the booking timestamp
            deposit_category: Name of the income category for deposits
            session_category: Name of the income category for completed sessions
        """
        self.resolve_category = resolve_category
        self.create_transaction = create_transaction
        self.list_automatic_transactions = list_automatic_transactions
        self.clock = clock
        self.deposit_category = deposit_category
        self.session_category = session_category

    def process(self, prior: Optional[Appointment], current: Appointment) -> list[int]:
        """Apply both rules to one appointment change.

        Args:
            prior: Stored state before the change, or None for a new appointment
            current: State after the change

        Returns:
            IDs of the transactions created (possibly empty)
        """
        created = []
        deposit_id = self.apply_deposit_rule(prior, current)
        if deposit_id is not None:
            created.append(deposit_id)
        completion_id = self.apply_completion_rule(prior, current)
        if completion_id is not None:
            created.append(completion_id)
        return created

    def apply_deposit_rule(self, prior: Optional[Appointment], current: Appointment) -> Optional[int]:
        """Book the deposit when it is marked paid.

        Returns:
            ID of the created transaction, or None if the rule did not fire
        """
        was_paid = prior is not None and prior.deposit_paid
        if was_paid or not current.deposit_paid:
            return None
        if current.deposit_amount is None or current.deposit_amount <= 0:
            return None

        try:
            category_id = self._require_category(self.deposit_category)
        except CategoryNotConfigured as e:
            logger.info("Skipping deposit transaction for appointment %s: %s", current.id, e)
            return None

        if any(t.category_id == category_id for t in self.list_automatic_transactions(current.id)):
            logger.debug("Appointment %s already has an automatic deposit", current.id)
            return None

        transaction_id = self.create_transaction(
            TransactionDraft(
                transaction_type=TransactionType.INCOME,
                amount=current.deposit_amount,
                description=deposit_description(current),
                date=self.clock(),
                category_id=category_id,
                appointment_id=current.id,
                is_automatic=True,
            )
        )
        logger.info(
            "Created deposit transaction %s (%s) for appointment %s",
            transaction_id,
            current.deposit_amount,
            current.id,
        )
        return transaction_id

    def apply_completion_rule(self, prior: Optional[Appointment], current: Appointment) -> Optional[int]:
        """Book the remaining session price when the appointment is completed.

        Returns:
            ID of the created transaction, or None if the rule did not fire
        """
        was_completed = prior is not None and prior.status == AppointmentStatus.COMPLETED
        if was_completed or current.status != AppointmentStatus.COMPLETED:
            return None
        if current.price is None or current.price <= 0:
            return None

        try:
            category_id = self._require_category(self.session_category)
        except CategoryNotConfigured as e:
            logger.info("Skipping session transaction for appointment %s: %s", current.id, e)
            return None

        automatic = self.list_automatic_transactions(current.id)
        if any(t.category_id == category_id for t in automatic):
            logger.debug("Appointment %s already has an automatic session entry", current.id)
            return None

        deposit_category_id = self.resolve_category(self.deposit_category, TransactionType.INCOME)
        deposits = sum(
            (t.amount for t in automatic if deposit_category_id is not None and t.category_id == deposit_category_id),
            Decimal("0"),
        )
        remaining = current.price - deposits
        if remaining <= 0:
            logger.debug(
                "Deposits already cover the price of appointment %s (%s >= %s)",
                current.id,
                deposits,
                current.price,
            )
            return None

        transaction_id = self.create_transaction(
            TransactionDraft(
                transaction_type=TransactionType.INCOME,
                amount=remaining,
                description=session_description(current),
                date=self.clock(),
                category_id=category_id,
                appointment_id=current.id,
                is_automatic=True,
            )
        )
        logger.info(
            "Created session transaction %s (%s) for appointment %s",
            transaction_id,
            remaining,
            current.id,
        )
        return transaction_id

    def _require_category(self, name: str) -> int:
        category_id = self.resolve_category(name, TransactionType.INCOME)
        if category_id is None:
            raise CategoryNotConfigured(name, TransactionType.INCOME.value)
        return category_id
