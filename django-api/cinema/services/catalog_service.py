"""Catalog service - films, auditoriums and accounts.

Reference data only: the catalog has no invariants beyond field rules and
referential integrity on delete.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.utils import timezone

from cinema.domain import (
    Account,
    AccountId,
    AccountRole,
    Auditorium,
    AuditoriumId,
    Film,
    FilmId,
)
from cinema.domain.errors import ConflictError, InvalidValueError, NotFoundError
from cinema.services.validation import (
    optional_text,
    parse_capacity,
    parse_duration,
    parse_id,
    required_text,
)
from cinema.stores.interfaces import CatalogStore, ProtectedRecord

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for catalog operations."""

    def __init__(
        self, store: CatalogStore, clock: Callable[[], datetime] = timezone.now
    ) -> None:
        self._store = store
        self._clock = clock

    def _film(self, film_id: FilmId, title, genre, duration, description) -> Film:
        return Film(
            id=film_id,
            title=required_text(title, "Film title", 200),
            genre=optional_text(genre, "Genre", 50),
            duration=parse_duration(duration),
            description=optional_text(description, "Description", 1000),
        )

    def list_films(self) -> list[Film]:
        return self._store.list_films()

    def get_film(self, film_id: str) -> Film:
        """Return a film by ID.

        Raises:
            InvalidIdentifierError: If the film_id is not a valid UUID.
            NotFoundError: If the film does not exist.
        """
        parsed = parse_id(FilmId, film_id, "Film")
        film = self._store.get_film(parsed)
        if film is None:
            raise NotFoundError("Film", parsed)
        return film

    def create_film(
        self,
        title: str,
        duration: int,
        genre: str | None = None,
        description: str | None = None,
    ) -> Film:
        film = self._film(FilmId(uuid.uuid4()), title, genre, duration, description)
        created = self._store.insert_film(film)
        logger.info("Film %s created", created.id)
        return created

    def update_film(
        self,
        film_id: str,
        title: str,
        duration: int,
        genre: str | None = None,
        description: str | None = None,
    ) -> Film:
        parsed = parse_id(FilmId, film_id, "Film")
        updated = self._store.update_film(self._film(parsed, title, genre, duration, description))
        if updated is None:
            raise NotFoundError("Film", parsed)
        return updated

    def delete_film(self, film_id: str) -> None:
        """Delete a film.

        Raises:
            NotFoundError: If the film does not exist.
            ConflictError: If a schedule still references the film.
        """
        parsed = parse_id(FilmId, film_id, "Film")
        try:
            deleted = self._store.delete_film(parsed)
        except ProtectedRecord as exc:
            raise ConflictError(exc.reason) from exc
        if not deleted:
            raise NotFoundError("Film", parsed)
        logger.info("Film %s deleted", parsed)

    def _auditorium(self, auditorium_id: AuditoriumId, name, capacity, facilities) -> Auditorium:
        return Auditorium(
            id=auditorium_id,
            name=required_text(name, "Auditorium name", 100),
            capacity=parse_capacity(capacity),
            facilities=optional_text(facilities, "Facilities", 500),
        )

    def list_auditoriums(self) -> list[Auditorium]:
        return self._store.list_auditoriums()

    def get_auditorium(self, auditorium_id: str) -> Auditorium:
        parsed = parse_id(AuditoriumId, auditorium_id, "Auditorium")
        auditorium = self._store.get_auditorium(parsed)
        if auditorium is None:
            raise NotFoundError("Auditorium", parsed)
        return auditorium

    def create_auditorium(
        self, name: str, capacity: int, facilities: str | None = None
    ) -> Auditorium:
        auditorium = self._auditorium(AuditoriumId(uuid.uuid4()), name, capacity, facilities)
        created = self._store.insert_auditorium(auditorium)
        logger.info("Auditorium %s created", created.id)
        return created

    def update_auditorium(
        self, auditorium_id: str, name: str, capacity: int, facilities: str | None = None
    ) -> Auditorium:
        parsed = parse_id(AuditoriumId, auditorium_id, "Auditorium")
        updated = self._store.update_auditorium(
            self._auditorium(parsed, name, capacity, facilities)
        )
        if updated is None:
            raise NotFoundError("Auditorium", parsed)
        return updated

    def delete_auditorium(self, auditorium_id: str) -> None:
        parsed = parse_id(AuditoriumId, auditorium_id, "Auditorium")
        try:
            deleted = self._store.delete_auditorium(parsed)
        except ProtectedRecord as exc:
            raise ConflictError(exc.reason) from exc
        if not deleted:
            raise NotFoundError("Auditorium", parsed)
        logger.info("Auditorium %s deleted", parsed)

    def list_accounts(self) -> list[Account]:
        return self._store.list_accounts()

    def get_account(self, account_id: str) -> Account:
        parsed = parse_id(AccountId, account_id, "Account")
        account = self._store.get_account(parsed)
        if account is None:
            raise NotFoundError("Account", parsed)
        return account

    def create_account(
        self,
        display_name: str,
        email: str,
        login_name: str,
        credential: str,
        phone: str | None = None,
        role: AccountRole = AccountRole.CUSTOMER,
    ) -> Account:
        """Create an account. The credential is hashed by the store and never returned.

        Raises:
            InvalidValueError: If a field is missing or malformed.
            ConflictError: If the login name is already in use.
        """
        email = required_text(email, "Email", 254)
        try:
            validate_email(email)
        except ValidationError as exc:
            raise InvalidValueError("Email address is not valid") from exc
        if not credential:
            raise InvalidValueError("Credential is required")
        login_name = required_text(login_name, "Login name", 50)
        if self._store.login_name_taken(login_name):
            raise ConflictError("Login name is already in use")

        account = Account(
            id=AccountId(uuid.uuid4()),
            display_name=required_text(display_name, "Display name", 100),
            email=email,
            login_name=login_name,
            phone=optional_text(phone, "Phone", 20),
            role=AccountRole(role),
            created_at=self._clock(),
            is_active=True,
        )
        created = self._store.insert_account(account, credential)
        logger.info("Account %s created", created.id)
        return created
