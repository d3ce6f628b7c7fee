"""Django ORM implementation of the reservation and payment ledgers.

Each write runs in ``transaction.atomic()``. The availability check inside the
transaction fails fast; the partial unique constraints on ``Booking`` and
``Payment`` are what make the check-and-write indivisible across processes.
An ``IntegrityError`` is re-examined with the same predicates and reported as
the matching conflict, never as a generic failure.
"""

from django.db import IntegrityError, transaction

from cinema import models as orm
from cinema.domain import (
    AccountId,
    Booking,
    BookingDetail,
    BookingId,
    Payment,
    PaymentDetail,
    PaymentId,
    PaymentStatus,
    ScheduleId,
    SeatCode,
)
from cinema.stores.django_store import (
    row_exists,
    seat_is_free,
    successful_payment_exists,
    to_booking,
    to_booking_detail,
    to_payment_detail,
)
from cinema.stores.interfaces import (
    BookingDecision,
    BookingGuard,
    EntityKind,
    MissingReference,
    PaymentConflict,
    PaymentStore,
    ReservationStore,
    SlotConflict,
)


def booking_rows():
    return orm.Booking.objects.select_related(
        "schedule__auditorium", "schedule__film", "account"
    )


def payment_rows():
    return orm.Payment.objects.select_related(
        "booking__schedule__auditorium",
        "booking__schedule__film",
        "booking__account",
        "account",
    )


def _lock_booking(booking_id: BookingId) -> orm.Booking | None:
    return orm.Booking.objects.select_for_update().filter(pk=booking_id.value).first()


class DjangoReservationStore(ReservationStore):
    """Booking ledger backed by the booking_one_active_per_seat constraint."""

    def get_booking(self, booking_id: BookingId) -> BookingDetail | None:
        row = booking_rows().filter(pk=booking_id.value).first()
        return to_booking_detail(row) if row else None

    def list_bookings(
        self,
        schedule_id: ScheduleId | None = None,
        account_id: AccountId | None = None,
    ) -> list[BookingDetail]:
        rows = booking_rows()
        if schedule_id is not None:
            rows = rows.filter(schedule_id=schedule_id.value)
        if account_id is not None:
            rows = rows.filter(account_id=account_id.value)
        return [to_booking_detail(row) for row in rows.order_by("-booked_at", "id")]

    def _explain_slot_failure(
        self,
        schedule_id: ScheduleId,
        seat_code: SeatCode,
        booking_id: BookingId,
        account_id: AccountId | None = None,
    ) -> None:
        if not row_exists(EntityKind.SCHEDULE, schedule_id):
            raise MissingReference(EntityKind.SCHEDULE, schedule_id)
        if account_id is not None and not row_exists(EntityKind.ACCOUNT, account_id):
            raise MissingReference(EntityKind.ACCOUNT, account_id)
        if not seat_is_free(schedule_id, seat_code, exclude_booking_id=booking_id):
            raise SlotConflict(schedule_id, seat_code)

    def insert_booking(self, booking: Booking) -> BookingDetail:
        try:
            with transaction.atomic():
                if not seat_is_free(booking.schedule_id, booking.seat_code):
                    raise SlotConflict(booking.schedule_id, booking.seat_code)
                orm.Booking.objects.create(
                    id=booking.id.value,
                    schedule_id=booking.schedule_id.value,
                    account_id=booking.account_id.value,
                    seat_code=str(booking.seat_code),
                    status=booking.status.value,
                    booked_at=booking.booked_at,
                )
        except IntegrityError:
            self._explain_slot_failure(
                booking.schedule_id, booking.seat_code, booking.id, booking.account_id
            )
            raise
        return self.get_booking(booking.id)

    def move_booking(
        self,
        booking_id: BookingId,
        schedule_id: ScheduleId,
        seat_code: SeatCode,
        guard: BookingGuard,
    ) -> BookingDetail | None:
        try:
            with transaction.atomic():
                row = _lock_booking(booking_id)
                if row is None:
                    return None
                guard(to_booking(row))
                if not seat_is_free(schedule_id, seat_code, exclude_booking_id=booking_id):
                    raise SlotConflict(schedule_id, seat_code)
                row.schedule_id = schedule_id.value
                row.seat_code = str(seat_code)
                row.save(update_fields=["schedule", "seat_code"])
        except IntegrityError:
            self._explain_slot_failure(schedule_id, seat_code, booking_id)
            raise
        return self.get_booking(booking_id)

    def update_booking_status(
        self, booking_id: BookingId, decide: BookingDecision
    ) -> BookingDetail | None:
        with transaction.atomic():
            row = _lock_booking(booking_id)
            if row is None:
                return None
            status = decide(to_booking(row))
            if status.value != row.status:
                row.status = status.value
                row.save(update_fields=["status"])
        return self.get_booking(booking_id)


class DjangoPaymentStore(PaymentStore):
    """Payment ledger backed by the payment_one_success_per_booking constraint.

    The booking row is locked for the duration of every write, which also
    serializes payments against a concurrent cancel of the same booking.
    """

    def get_payment(self, payment_id: PaymentId) -> PaymentDetail | None:
        row = payment_rows().filter(pk=payment_id.value).first()
        return to_payment_detail(row) if row else None

    def list_payments(
        self,
        booking_id: BookingId | None = None,
        account_id: AccountId | None = None,
    ) -> list[PaymentDetail]:
        rows = payment_rows()
        if booking_id is not None:
            rows = rows.filter(booking_id=booking_id.value)
        if account_id is not None:
            rows = rows.filter(account_id=account_id.value)
        return [to_payment_detail(row) for row in rows.order_by("-recorded_at", "id")]

    def _check(self, payment: Payment, guard: BookingGuard, exclude: PaymentId | None) -> None:
        booking_row = _lock_booking(payment.booking_id)
        if booking_row is None:
            raise MissingReference(EntityKind.BOOKING, payment.booking_id)
        guard(to_booking(booking_row))
        if payment.status is PaymentStatus.SUCCESS and successful_payment_exists(
            payment.booking_id, exclude_payment_id=exclude
        ):
            raise PaymentConflict(payment.booking_id)

    def _explain_failure(self, payment: Payment) -> None:
        if not row_exists(EntityKind.BOOKING, payment.booking_id):
            raise MissingReference(EntityKind.BOOKING, payment.booking_id)
        if not row_exists(EntityKind.ACCOUNT, payment.account_id):
            raise MissingReference(EntityKind.ACCOUNT, payment.account_id)
        if payment.status is PaymentStatus.SUCCESS and successful_payment_exists(
            payment.booking_id, exclude_payment_id=payment.id
        ):
            raise PaymentConflict(payment.booking_id)

    def insert_payment(self, payment: Payment, guard: BookingGuard) -> PaymentDetail:
        try:
            with transaction.atomic():
                self._check(payment, guard, exclude=None)
                orm.Payment.objects.create(
                    id=payment.id.value,
                    booking_id=payment.booking_id.value,
                    account_id=payment.account_id.value,
                    amount=payment.amount.amount,
                    method=payment.method.value,
                    status=payment.status.value,
                    recorded_at=payment.recorded_at,
                    reference=payment.reference,
                )
        except IntegrityError:
            self._explain_failure(payment)
            raise
        return self.get_payment(payment.id)

    def update_payment(self, payment: Payment, guard: BookingGuard) -> PaymentDetail | None:
        try:
            with transaction.atomic():
                row = orm.Payment.objects.select_for_update().filter(pk=payment.id.value).first()
                if row is None:
                    return None
                self._check(payment, guard, exclude=payment.id)
                row.booking_id = payment.booking_id.value
                row.account_id = payment.account_id.value
                row.amount = payment.amount.amount
                row.method = payment.method.value
                row.status = payment.status.value
                row.reference = payment.reference
                row.save(
                    update_fields=["booking", "account", "amount", "method", "status", "reference"]
                )
        except IntegrityError:
            self._explain_failure(payment)
            raise
        return self.get_payment(payment.id)
