"""Schedule manager - creates and replaces screenings.

A schedule is accepted only if its film and auditorium exist, its show time is
strictly after the moment of the call, and its price is positive. Updates
replace all four fields at once.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from django.utils import timezone

from cinema.domain import AuditoriumId, FilmId, Schedule, ScheduleDetail, ScheduleId
from cinema.domain.errors import (
    ConflictError,
    InvalidTemporalValueError,
    NotFoundError,
    ReferenceNotFoundError,
)
from cinema.services.consistency import ConsistencyCoordinator
from cinema.services.validation import aware, parse_id, parse_money
from cinema.stores.interfaces import EntityKind, MissingReference, ProtectedRecord, ScheduleStore

logger = logging.getLogger(__name__)


class ScheduleManager:
    """Service for schedule operations."""

    def __init__(
        self,
        store: ScheduleStore,
        coordinator: ConsistencyCoordinator,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._coordinator = coordinator
        self._clock = clock

    def _validated(
        self,
        schedule_id: ScheduleId,
        auditorium_id: str,
        film_id: str,
        show_time: datetime,
        price: Decimal | int | str,
    ) -> Schedule:
        auditorium = parse_id(AuditoriumId, auditorium_id, "Auditorium")
        film = parse_id(FilmId, film_id, "Film")
        self._coordinator.require_reference(EntityKind.AUDITORIUM, auditorium)
        self._coordinator.require_reference(EntityKind.FILM, film)

        show_time = aware(show_time)
        if show_time <= self._clock():
            raise InvalidTemporalValueError()

        return Schedule(
            id=schedule_id,
            auditorium_id=auditorium,
            film_id=film,
            show_time=show_time,
            price=parse_money(price, "Ticket price"),
        )

    def list_schedules(self) -> list[ScheduleDetail]:
        """Return all schedules, earliest show time first."""
        return self._store.list_schedules()

    def get_schedule(self, schedule_id: str) -> ScheduleDetail:
        """Return a schedule with its auditorium and film.

        Raises:
            InvalidIdentifierError: If the schedule_id is not a valid UUID.
            NotFoundError: If the schedule does not exist.
        """
        parsed = parse_id(ScheduleId, schedule_id, "Schedule")
        detail = self._store.get_schedule(parsed)
        if detail is None:
            raise NotFoundError("Schedule", parsed)
        return detail

    def create_schedule(
        self,
        auditorium_id: str,
        film_id: str,
        show_time: datetime,
        price: Decimal | int | str,
    ) -> ScheduleDetail:
        """Create a schedule.

        Raises:
            ReferenceNotFoundError: If the auditorium or film does not exist.
            InvalidTemporalValueError: If show_time is not in the future.
            InvalidQuantityError: If price is not positive.
        """
        schedule = self._validated(
            ScheduleId(uuid.uuid4()), auditorium_id, film_id, show_time, price
        )
        try:
            detail = self._store.insert_schedule(schedule)
        except MissingReference as exc:
            raise ReferenceNotFoundError(exc.kind.value, exc.entity_id) from exc
        logger.info("Schedule %s created for %s", detail.schedule.id, detail.schedule.show_time)
        return detail

    def update_schedule(
        self,
        schedule_id: str,
        auditorium_id: str,
        film_id: str,
        show_time: datetime,
        price: Decimal | int | str,
    ) -> ScheduleDetail:
        """Replace a schedule's auditorium, film, show time and price.

        Raises:
            NotFoundError: If the schedule does not exist.
            plus every error of create_schedule.
        """
        parsed = parse_id(ScheduleId, schedule_id, "Schedule")
        self._coordinator.require_exists(EntityKind.SCHEDULE, parsed)
        schedule = self._validated(parsed, auditorium_id, film_id, show_time, price)
        try:
            detail = self._store.update_schedule(schedule)
        except MissingReference as exc:
            raise ReferenceNotFoundError(exc.kind.value, exc.entity_id) from exc
        if detail is None:
            raise NotFoundError("Schedule", parsed)
        logger.info("Schedule %s updated", parsed)
        return detail

    def delete_schedule(self, schedule_id: str) -> None:
        """Delete a schedule.

        Raises:
            NotFoundError: If the schedule does not exist.
            ConflictError: If bookings that are not cancelled, or payment
                records, still reference the schedule.
        """
        parsed = parse_id(ScheduleId, schedule_id, "Schedule")
        try:
            deleted = self._store.delete_schedule(parsed)
        except ProtectedRecord as exc:
            logger.warning("Schedule %s delete rejected: %s", parsed, exc.reason)
            raise ConflictError(exc.reason) from exc
        if not deleted:
            raise NotFoundError("Schedule", parsed)
        logger.info("Schedule %s deleted", parsed)
