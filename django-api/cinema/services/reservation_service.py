"""Reservation ledger - the seat-booking state machine.

Per (schedule, seat) slot: Free -> Active -> Cancelled | Expired. Cancelled and
Expired free the slot; a freed slot is claimed again by a new booking, never
by re-activating the old one.

All services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime

from django.utils import timezone

from cinema.domain import (
    AccountId,
    Booking,
    BookingDetail,
    BookingId,
    BookingStatus,
    ScheduleId,
    transition_booking,
)
from cinema.domain.errors import (
    ConflictError,
    NotFoundError,
    ReferenceNotFoundError,
    SeatTakenError,
)
from cinema.domain.statuses import InvalidTransition
from cinema.services.consistency import ConsistencyCoordinator
from cinema.services.validation import parse_id, parse_seat_code
from cinema.stores.interfaces import (
    EntityKind,
    MissingReference,
    ReservationStore,
    SlotConflict,
)

logger = logging.getLogger(__name__)


class ReservationLedger:
    """Service for booking operations."""

    def __init__(
        self,
        store: ReservationStore,
        coordinator: ConsistencyCoordinator,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._coordinator = coordinator
        self._clock = clock

    def list_bookings(
        self, schedule_id: str | None = None, account_id: str | None = None
    ) -> list[BookingDetail]:
        """Return bookings, most recent first, optionally filtered."""
        schedule = parse_id(ScheduleId, schedule_id, "Schedule") if schedule_id else None
        account = parse_id(AccountId, account_id, "Account") if account_id else None
        return self._store.list_bookings(schedule_id=schedule, account_id=account)

    def get_booking(self, booking_id: str) -> BookingDetail:
        parsed = parse_id(BookingId, booking_id, "Booking")
        detail = self._store.get_booking(parsed)
        if detail is None:
            raise NotFoundError("Booking", parsed)
        return detail

    def reserve(self, schedule_id: str, account_id: str, seat_code: str) -> BookingDetail:
        """Claim a seat for a schedule.

        Raises:
            ReferenceNotFoundError: If the schedule or account does not exist.
            InvalidValueError: If the seat code is empty or too long.
            SeatTakenError: If the seat already has an active booking.
        """
        schedule = parse_id(ScheduleId, schedule_id, "Schedule")
        account = parse_id(AccountId, account_id, "Account")
        seat = parse_seat_code(seat_code)
        self._coordinator.require_reference(EntityKind.SCHEDULE, schedule)
        self._coordinator.require_reference(EntityKind.ACCOUNT, account)
        if not self._coordinator.seat_free(schedule, seat):
            logger.warning("Seat %s for schedule %s rejected: already booked", seat, schedule)
            raise SeatTakenError(schedule, str(seat))

        booking = Booking(
            id=BookingId(uuid.uuid4()),
            schedule_id=schedule,
            account_id=account,
            seat_code=seat,
            status=BookingStatus.ACTIVE,
            booked_at=self._clock(),
        )
        try:
            detail = self._store.insert_booking(booking)
        except SlotConflict as exc:
            logger.warning("Seat %s for schedule %s rejected: already booked", seat, schedule)
            raise SeatTakenError(schedule, str(seat)) from exc
        except MissingReference as exc:
            raise ReferenceNotFoundError(exc.kind.value, exc.entity_id) from exc
        logger.info("Booking %s reserved seat %s for schedule %s", booking.id, seat, schedule)
        return detail

    def change_seat(
        self, booking_id: str, new_schedule_id: str, new_seat_code: str
    ) -> BookingDetail:
        """Move an active booking to another slot, keeping its identity.

        Raises:
            NotFoundError: If the booking does not exist.
            ReferenceNotFoundError: If the new schedule does not exist.
            ConflictError: If the booking is no longer active.
            SeatTakenError: If another active booking holds the new slot.
        """
        booking = parse_id(BookingId, booking_id, "Booking")
        schedule = parse_id(ScheduleId, new_schedule_id, "Schedule")
        seat = parse_seat_code(new_seat_code)
        self._coordinator.require_exists(EntityKind.BOOKING, booking)
        self._coordinator.require_reference(EntityKind.SCHEDULE, schedule)
        if not self._coordinator.seat_free(schedule, seat, exclude_booking_id=booking):
            raise SeatTakenError(schedule, str(seat))

        def must_be_active(current: Booking) -> None:
            if not current.status.holds_seat:
                raise ConflictError(f"Booking is {current.status.value} and holds no seat")

        try:
            detail = self._store.move_booking(booking, schedule, seat, must_be_active)
        except SlotConflict as exc:
            logger.warning(
                "Seat change of booking %s to %s rejected: already booked", booking, seat
            )
            raise SeatTakenError(schedule, str(seat)) from exc
        except MissingReference as exc:
            raise ReferenceNotFoundError(exc.kind.value, exc.entity_id) from exc
        if detail is None:
            raise NotFoundError("Booking", booking)
        logger.info("Booking %s moved to seat %s for schedule %s", booking, seat, schedule)
        return detail

    def _finish(self, booking_id: str, target: BookingStatus) -> BookingDetail:
        parsed = parse_id(BookingId, booking_id, "Booking")

        def decide(current: Booking) -> BookingStatus:
            try:
                return transition_booking(current.status, target)
            except InvalidTransition as exc:
                raise ConflictError(str(exc)) from exc

        detail = self._store.update_booking_status(parsed, decide)
        if detail is None:
            raise NotFoundError("Booking", parsed)
        logger.info("Booking %s is %s", parsed, detail.booking.status.value)
        return detail

    def cancel(self, booking_id: str) -> BookingDetail:
        """Cancel a booking and free its seat. Cancelling twice is a no-op.

        Raises:
            NotFoundError: If the booking does not exist.
            ConflictError: If the booking has already expired.
        """
        return self._finish(booking_id, BookingStatus.CANCELLED)

    def expire(self, booking_id: str) -> BookingDetail:
        """Mark a booking expired and free its seat. Expiring twice is a no-op."""
        return self._finish(booking_id, BookingStatus.EXPIRED)
