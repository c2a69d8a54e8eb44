"""Client domain service."""

from typing import Optional
from inkbook.database.base import Database
from inkbook.domain.entities import Client as ClientEntity
from inkbook.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    client_delete_blocked,
    client_not_found,
)


def _clean_name(name: str) -> str:
    name = name.strip()
    if len(name) < 2:
        raise ValidationError("Client name must have at least 2 characters")
    return name


def _clean_phone(phone: str) -> str:
    phone = phone.strip()
    if not phone:
        raise ValidationError("Client phone must not be empty")
    return phone


def _check_email(email: Optional[str]) -> None:
    if email is not None and "@" not in email:
        raise ValidationError(f"Invalid email '{email}'")


def _clean_instagram(instagram: str) -> str:
    return instagram.strip().lstrip("@")


class ClientService:
    """Service for managing studio clients."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(
        self,
        name: str,
        phone: str,
        email: Optional[str] = None,
        instagram: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a client.

        Args:
            name: Client name (at least 2 characters)
            phone: Phone number
            email: Optional email
            instagram: Optional Instagram handle, stored without the leading '@'
            notes: Optional notes

        Returns:
            Client ID

        Raises:
            ValidationError: If name or phone are invalid
        """
        name = _clean_name(name)
        phone = _clean_phone(phone)
        _check_email(email)
        if instagram:
            instagram = _clean_instagram(instagram)

        return self.db.create_client(
            name=name, phone=phone, email=email, instagram=instagram or None, notes=notes
        )

    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        instagram: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Update a client. Fields left as None keep their stored value.

        Raises:
            NotFoundError: If the client doesn't exist
            ValidationError: If name, phone or email are invalid
        """
        self.require_client(client_id)
        if name is not None:
            name = _clean_name(name)
        if phone is not None:
            phone = _clean_phone(phone)
        _check_email(email)
        if instagram is not None:
            instagram = _clean_instagram(instagram)

        self.db.update_client(
            client_id, name=name, phone=phone, email=email, instagram=instagram, notes=notes
        )

    def get_client(self, client_id: int) -> Optional[ClientEntity]:
        """Get client by ID."""
        return self.db.get_client(client_id)

    def require_client(self, client_id: int) -> ClientEntity:
        """Get client by ID or raise NotFoundError."""
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def list_clients(self, search: Optional[str] = None) -> list[ClientEntity]:
        """List clients, optionally matching name, phone or Instagram handle."""
        if search is not None:
            search = search.strip().lstrip("@") or None
        return self.db.list_clients(search=search)

    def delete_client(self, client_id: int) -> None:
        """Delete a client without appointments.

        Raises:
            NotFoundError: If the client doesn't exist
            DependencyError: If the client still has appointments
        """
        self.require_client(client_id)
        appointment_count = self.db.count_client_appointments(client_id)
        if appointment_count > 0:
            raise DependencyError(client_delete_blocked(client_id, appointment_count))
        self.db.delete_client(client_id)
