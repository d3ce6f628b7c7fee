"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.

Every mutation of bookings and payments goes through one atomic
check-and-write method. Those methods take a ``guard`` callable that the
service uses to apply its business rules to the locked row; anything the
guard raises aborts the write and rolls the transaction back.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum

from cinema.domain import (
    Account,
    AccountId,
    Auditorium,
    AuditoriumId,
    Booking,
    BookingDetail,
    BookingId,
    BookingStatus,
    Film,
    FilmId,
    Payment,
    PaymentDetail,
    PaymentId,
    Schedule,
    ScheduleDetail,
    ScheduleId,
    SeatCode,
)

BookingGuard = Callable[[Booking], None]
BookingDecision = Callable[[Booking], BookingStatus]


class EntityKind(Enum):
    FILM = "Film"
    AUDITORIUM = "Auditorium"
    ACCOUNT = "Account"
    SCHEDULE = "Schedule"
    BOOKING = "Booking"
    PAYMENT = "Payment"


class StoreError(Exception):
    """Base class for conditions a store reports to its service."""


class SlotConflict(StoreError):
    """The (schedule, seat) slot already holds an active booking."""

    def __init__(self, schedule_id: ScheduleId, seat_code: SeatCode) -> None:
        super().__init__(f"Slot {schedule_id}/{seat_code} is taken")
        self.schedule_id = schedule_id
        self.seat_code = seat_code


class PaymentConflict(StoreError):
    """The booking already has a successful payment."""

    def __init__(self, booking_id: BookingId) -> None:
        super().__init__(f"Booking {booking_id} is already paid")
        self.booking_id = booking_id


class MissingReference(StoreError):
    """A referenced row vanished between validation and write."""

    def __init__(self, kind: EntityKind, entity_id: object) -> None:
        super().__init__(f"{kind.value} {entity_id} does not exist")
        self.kind = kind
        self.entity_id = entity_id


class ProtectedRecord(StoreError):
    """A delete was blocked by dependent rows."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ConsistencyStore(ABC):
    """Existence and uniqueness predicates shared by both ledgers."""

    @abstractmethod
    def exists(self, kind: EntityKind, entity_id: object) -> bool:
        """Check whether a row of the given kind exists."""
        ...

    @abstractmethod
    def seat_free(
        self,
        schedule_id: ScheduleId,
        seat_code: SeatCode,
        exclude_booking_id: BookingId | None = None,
    ) -> bool:
        """Return True if no other active booking holds the slot."""
        ...

    @abstractmethod
    def has_successful_payment(
        self,
        booking_id: BookingId,
        exclude_payment_id: PaymentId | None = None,
    ) -> bool:
        """Return True if another payment for the booking succeeded."""
        ...


class CatalogStore(ABC):
    """Interface for films, auditoriums and accounts."""

    @abstractmethod
    def list_films(self) -> list[Film]:
        """Return all films ordered by title."""
        ...

    @abstractmethod
    def get_film(self, film_id: FilmId) -> Film | None:
        ...

    @abstractmethod
    def insert_film(self, film: Film) -> Film:
        ...

    @abstractmethod
    def update_film(self, film: Film) -> Film | None:
        """Replace a film, or return None if it does not exist."""
        ...

    @abstractmethod
    def delete_film(self, film_id: FilmId) -> bool:
        """Delete a film. Raises ProtectedRecord while schedules reference it."""
        ...

    @abstractmethod
    def list_auditoriums(self) -> list[Auditorium]:
        """Return all auditoriums ordered by name."""
        ...

    @abstractmethod
    def get_auditorium(self, auditorium_id: AuditoriumId) -> Auditorium | None:
        ...

    @abstractmethod
    def insert_auditorium(self, auditorium: Auditorium) -> Auditorium:
        ...

    @abstractmethod
    def update_auditorium(self, auditorium: Auditorium) -> Auditorium | None:
        ...

    @abstractmethod
    def delete_auditorium(self, auditorium_id: AuditoriumId) -> bool:
        ...

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        ...

    @abstractmethod
    def get_account(self, account_id: AccountId) -> Account | None:
        ...

    @abstractmethod
    def insert_account(self, account: Account, credential: str) -> Account:
        """Persist an account; the raw credential is hashed by the store."""
        ...

    @abstractmethod
    def login_name_taken(self, login_name: str) -> bool:
        ...


class ScheduleStore(ABC):
    """Interface for schedule persistence operations."""

    @abstractmethod
    def list_schedules(self) -> list[ScheduleDetail]:
        """Return all schedules ordered by show_time ascending."""
        ...

    @abstractmethod
    def get_schedule(self, schedule_id: ScheduleId) -> ScheduleDetail | None:
        ...

    @abstractmethod
    def insert_schedule(self, schedule: Schedule) -> ScheduleDetail:
        """Persist a schedule. Raises MissingReference if film or auditorium is gone."""
        ...

    @abstractmethod
    def update_schedule(self, schedule: Schedule) -> ScheduleDetail | None:
        ...

    @abstractmethod
    def delete_schedule(self, schedule_id: ScheduleId) -> bool:
        """Delete a schedule and its cancelled bookings.

        Raises ProtectedRecord if any booking is not cancelled, or if a
        cancelled booking carries payment records.
        """
        ...


class ReservationStore(ABC):
    """Interface for the booking ledger."""

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> BookingDetail | None:
        ...

    @abstractmethod
    def list_bookings(
        self,
        schedule_id: ScheduleId | None = None,
        account_id: AccountId | None = None,
    ) -> list[BookingDetail]:
        """Return bookings ordered by booked_at descending."""
        ...

    @abstractmethod
    def insert_booking(self, booking: Booking) -> BookingDetail:
        """Atomically check the slot is free and insert the booking.

        Raises SlotConflict if the slot is taken, MissingReference if the
        schedule or account is gone.
        """
        ...

    @abstractmethod
    def move_booking(
        self,
        booking_id: BookingId,
        schedule_id: ScheduleId,
        seat_code: SeatCode,
        guard: BookingGuard,
    ) -> BookingDetail | None:
        """Atomically move a booking to another slot, updating it in place.

        The availability check ignores the booking itself. Returns None if
        the booking does not exist.
        """
        ...

    @abstractmethod
    def update_booking_status(
        self, booking_id: BookingId, decide: BookingDecision
    ) -> BookingDetail | None:
        """Lock the booking, ask ``decide`` for its next status and persist it."""
        ...


class PaymentStore(ABC):
    """Interface for the payment ledger."""

    @abstractmethod
    def get_payment(self, payment_id: PaymentId) -> PaymentDetail | None:
        ...

    @abstractmethod
    def list_payments(
        self,
        booking_id: BookingId | None = None,
        account_id: AccountId | None = None,
    ) -> list[PaymentDetail]:
        """Return payments ordered by recorded_at descending."""
        ...

    @abstractmethod
    def insert_payment(self, payment: Payment, guard: BookingGuard) -> PaymentDetail:
        """Atomically check the booking and insert the payment.

        Raises PaymentConflict when a successful payment would be duplicated,
        MissingReference if the booking or account is gone.
        """
        ...

    @abstractmethod
    def update_payment(self, payment: Payment, guard: BookingGuard) -> PaymentDetail | None:
        """Atomically replace a payment, keeping its recorded_at.

        Returns None if the payment does not exist.
        """
        ...
