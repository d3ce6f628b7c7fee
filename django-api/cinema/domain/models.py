"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in cinema/models.py (persistence layer).

Relations are held as identifiers only. The *Detail classes are read-side
projections assembled by the stores at query time; they are snapshots, not
live references.
"""

from dataclasses import dataclass
from datetime import datetime

from cinema.domain.statuses import AccountRole, BookingStatus, PaymentMethod, PaymentStatus
from cinema.domain.value_objects import (
    AccountId,
    AuditoriumId,
    BookingId,
    Capacity,
    Duration,
    FilmId,
    Money,
    PaymentId,
    ScheduleId,
    SeatCode,
)


@dataclass(frozen=True)
class Film:
    """Domain representation of a Film."""

    id: FilmId
    title: str
    genre: str | None
    duration: Duration
    description: str | None


@dataclass(frozen=True)
class Auditorium:
    """Domain representation of an Auditorium."""

    id: AuditoriumId
    name: str
    capacity: Capacity
    facilities: str | None


@dataclass(frozen=True)
class Account:
    """Account as seen by the core. The credential never leaves the store."""

    id: AccountId
    display_name: str
    email: str
    login_name: str
    phone: str | None
    role: AccountRole
    created_at: datetime
    is_active: bool


@dataclass(frozen=True)
class Schedule:
    """Domain representation of a Schedule."""

    id: ScheduleId
    auditorium_id: AuditoriumId
    film_id: FilmId
    show_time: datetime
    price: Money


@dataclass(frozen=True)
class Booking:
    """A claim on one seat for one schedule by one account."""

    id: BookingId
    schedule_id: ScheduleId
    account_id: AccountId
    seat_code: SeatCode
    status: BookingStatus
    booked_at: datetime


@dataclass(frozen=True)
class Payment:
    """A recorded payment attempt against a booking."""

    id: PaymentId
    booking_id: BookingId
    account_id: AccountId
    amount: Money
    method: PaymentMethod
    status: PaymentStatus
    recorded_at: datetime
    reference: str | None


@dataclass(frozen=True)
class ScheduleDetail:
    schedule: Schedule
    auditorium: Auditorium
    film: Film


@dataclass(frozen=True)
class BookingDetail:
    booking: Booking
    schedule: ScheduleDetail
    account: Account


@dataclass(frozen=True)
class PaymentDetail:
    payment: Payment
    booking: BookingDetail
    account: Account


@dataclass(frozen=True)
class PaymentDraft:
    """Validated input for recording or replacing a payment."""

    booking_id: BookingId
    account_id: AccountId
    amount: Money
    method: PaymentMethod
    status: PaymentStatus
    reference: str | None
