"""In-memory stores and a controllable clock for service tests.

The fake takes one lock around every check-and-write, which is what the
database transaction plus partial unique constraints give the Django stores.
"""

import threading
from dataclasses import replace
from datetime import datetime, timedelta

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
    PaymentStatus,
    Schedule,
    ScheduleDetail,
    ScheduleId,
    SeatCode,
)
from cinema.stores.interfaces import (
    BookingDecision,
    BookingGuard,
    CatalogStore,
    ConsistencyStore,
    EntityKind,
    MissingReference,
    PaymentConflict,
    PaymentStore,
    ProtectedRecord,
    ReservationStore,
    ScheduleStore,
    SlotConflict,
)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def _newest_first(items, stamp):
    return sorted(sorted(items, key=lambda item: str(item.id)), key=stamp, reverse=True)


class InMemoryStore(ConsistencyStore, CatalogStore, ScheduleStore, ReservationStore, PaymentStore):
    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.films: dict[FilmId, Film] = {}
        self.auditoriums: dict[AuditoriumId, Auditorium] = {}
        self.accounts: dict[AccountId, Account] = {}
        self.credentials: dict[AccountId, str] = {}
        self.schedules: dict[ScheduleId, Schedule] = {}
        self.bookings: dict[BookingId, Booking] = {}
        self.payments: dict[PaymentId, Payment] = {}

    def _table(self, kind: EntityKind) -> dict:
        return {
            EntityKind.FILM: self.films,
            EntityKind.AUDITORIUM: self.auditoriums,
            EntityKind.ACCOUNT: self.accounts,
            EntityKind.SCHEDULE: self.schedules,
            EntityKind.BOOKING: self.bookings,
            EntityKind.PAYMENT: self.payments,
        }[kind]

    # Consistency

    def exists(self, kind, entity_id) -> bool:
        with self.lock:
            return entity_id in self._table(kind)

    def seat_free(self, schedule_id, seat_code, exclude_booking_id=None) -> bool:
        with self.lock:
            return not any(
                b.schedule_id == schedule_id
                and b.seat_code == seat_code
                and b.status.holds_seat
                and b.id != exclude_booking_id
                for b in self.bookings.values()
            )

    def has_successful_payment(self, booking_id, exclude_payment_id=None) -> bool:
        with self.lock:
            return any(
                p.booking_id == booking_id
                and p.status is PaymentStatus.SUCCESS
                and p.id != exclude_payment_id
                for p in self.payments.values()
            )

    # Catalog

    def list_films(self):
        return sorted(self.films.values(), key=lambda f: f.title)

    def get_film(self, film_id):
        return self.films.get(film_id)

    def insert_film(self, film):
        self.films[film.id] = film
        return film

    def update_film(self, film):
        if film.id not in self.films:
            return None
        self.films[film.id] = film
        return film

    def delete_film(self, film_id):
        with self.lock:
            if any(s.film_id == film_id for s in self.schedules.values()):
                raise ProtectedRecord("Film is referenced by schedules")
            return self.films.pop(film_id, None) is not None

    def list_auditoriums(self):
        return sorted(self.auditoriums.values(), key=lambda a: a.name)

    def get_auditorium(self, auditorium_id):
        return self.auditoriums.get(auditorium_id)

    def insert_auditorium(self, auditorium):
        self.auditoriums[auditorium.id] = auditorium
        return auditorium

    def update_auditorium(self, auditorium):
        if auditorium.id not in self.auditoriums:
            return None
        self.auditoriums[auditorium.id] = auditorium
        return auditorium

    def delete_auditorium(self, auditorium_id):
        with self.lock:
            if any(s.auditorium_id == auditorium_id for s in self.schedules.values()):
                raise ProtectedRecord("Auditorium is referenced by schedules")
            return self.auditoriums.pop(auditorium_id, None) is not None

    def list_accounts(self):
        return sorted(self.accounts.values(), key=lambda a: a.login_name)

    def get_account(self, account_id):
        return self.accounts.get(account_id)

    def insert_account(self, account, credential):
        self.accounts[account.id] = account
        self.credentials[account.id] = f"hashed:{credential}"
        return account

    def login_name_taken(self, login_name):
        return any(a.login_name.lower() == login_name.lower() for a in self.accounts.values())

    # Schedules

    def _schedule_detail(self, schedule: Schedule) -> ScheduleDetail:
        return ScheduleDetail(
            schedule=schedule,
            auditorium=self.auditoriums[schedule.auditorium_id],
            film=self.films[schedule.film_id],
        )

    def _check_schedule_refs(self, schedule: Schedule) -> None:
        if schedule.auditorium_id not in self.auditoriums:
            raise MissingReference(EntityKind.AUDITORIUM, schedule.auditorium_id)
        if schedule.film_id not in self.films:
            raise MissingReference(EntityKind.FILM, schedule.film_id)

    def list_schedules(self):
        ordered = sorted(self.schedules.values(), key=lambda s: s.show_time)
        return [self._schedule_detail(s) for s in ordered]

    def get_schedule(self, schedule_id):
        schedule = self.schedules.get(schedule_id)
        return self._schedule_detail(schedule) if schedule else None

    def insert_schedule(self, schedule):
        with self.lock:
            self._check_schedule_refs(schedule)
            self.schedules[schedule.id] = schedule
            return self._schedule_detail(schedule)

    def update_schedule(self, schedule):
        with self.lock:
            if schedule.id not in self.schedules:
                return None
            self._check_schedule_refs(schedule)
            self.schedules[schedule.id] = schedule
            return self._schedule_detail(schedule)

    def delete_schedule(self, schedule_id):
        with self.lock:
            if schedule_id not in self.schedules:
                return False
            bookings = [b for b in self.bookings.values() if b.schedule_id == schedule_id]
            if any(b.status is not BookingStatus.CANCELLED for b in bookings):
                raise ProtectedRecord("Schedule has bookings that are not cancelled")
            booking_ids = {b.id for b in bookings}
            if any(p.booking_id in booking_ids for p in self.payments.values()):
                raise ProtectedRecord("Schedule has bookings with payment records")
            for booking_id in booking_ids:
                del self.bookings[booking_id]
            del self.schedules[schedule_id]
            return True

    # Bookings

    def _booking_detail(self, booking: Booking) -> BookingDetail:
        return BookingDetail(
            booking=booking,
            schedule=self._schedule_detail(self.schedules[booking.schedule_id]),
            account=self.accounts[booking.account_id],
        )

    def get_booking(self, booking_id):
        booking = self.bookings.get(booking_id)
        return self._booking_detail(booking) if booking else None

    def list_bookings(self, schedule_id=None, account_id=None):
        found = [
            b
            for b in self.bookings.values()
            if (schedule_id is None or b.schedule_id == schedule_id)
            and (account_id is None or b.account_id == account_id)
        ]
        return [self._booking_detail(b) for b in _newest_first(found, lambda b: b.booked_at)]

    def insert_booking(self, booking):
        with self.lock:
            if booking.schedule_id not in self.schedules:
                raise MissingReference(EntityKind.SCHEDULE, booking.schedule_id)
            if booking.account_id not in self.accounts:
                raise MissingReference(EntityKind.ACCOUNT, booking.account_id)
            if not self.seat_free(booking.schedule_id, booking.seat_code):
                raise SlotConflict(booking.schedule_id, booking.seat_code)
            self.bookings[booking.id] = booking
            return self._booking_detail(booking)

    def move_booking(
        self,
        booking_id: BookingId,
        schedule_id: ScheduleId,
        seat_code: SeatCode,
        guard: BookingGuard,
    ):
        with self.lock:
            current = self.bookings.get(booking_id)
            if current is None:
                return None
            guard(current)
            if schedule_id not in self.schedules:
                raise MissingReference(EntityKind.SCHEDULE, schedule_id)
            if not self.seat_free(schedule_id, seat_code, exclude_booking_id=booking_id):
                raise SlotConflict(schedule_id, seat_code)
            moved = replace(current, schedule_id=schedule_id, seat_code=seat_code)
            self.bookings[booking_id] = moved
            return self._booking_detail(moved)

    def update_booking_status(self, booking_id: BookingId, decide: BookingDecision):
        with self.lock:
            current = self.bookings.get(booking_id)
            if current is None:
                return None
            updated = replace(current, status=decide(current))
            self.bookings[booking_id] = updated
            return self._booking_detail(updated)

    # Payments

    def _payment_detail(self, payment: Payment) -> PaymentDetail:
        return PaymentDetail(
            payment=payment,
            booking=self._booking_detail(self.bookings[payment.booking_id]),
            account=self.accounts[payment.account_id],
        )

    def get_payment(self, payment_id):
        payment = self.payments.get(payment_id)
        return self._payment_detail(payment) if payment else None

    def list_payments(self, booking_id=None, account_id=None):
        found = [
            p
            for p in self.payments.values()
            if (booking_id is None or p.booking_id == booking_id)
            and (account_id is None or p.account_id == account_id)
        ]
        return [self._payment_detail(p) for p in _newest_first(found, lambda p: p.recorded_at)]

    def _check_payment(self, payment: Payment, guard: BookingGuard, exclude) -> None:
        booking = self.bookings.get(payment.booking_id)
        if booking is None:
            raise MissingReference(EntityKind.BOOKING, payment.booking_id)
        if payment.account_id not in self.accounts:
            raise MissingReference(EntityKind.ACCOUNT, payment.account_id)
        guard(booking)
        if payment.status is PaymentStatus.SUCCESS and self.has_successful_payment(
            payment.booking_id, exclude_payment_id=exclude
        ):
            raise PaymentConflict(payment.booking_id)

    def insert_payment(self, payment, guard):
        with self.lock:
            self._check_payment(payment, guard, exclude=None)
            self.payments[payment.id] = payment
            return self._payment_detail(payment)

    def update_payment(self, payment, guard):
        with self.lock:
            existing = self.payments.get(payment.id)
            if existing is None:
                return None
            self._check_payment(payment, guard, exclude=payment.id)
            stored = replace(payment, recorded_at=existing.recorded_at)
            self.payments[payment.id] = stored
            return self._payment_detail(stored)
