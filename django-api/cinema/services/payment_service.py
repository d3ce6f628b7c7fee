"""Payment ledger - records payment attempts against bookings.

Any number of pending or failed attempts may exist for a booking, but at most
one successful payment. recorded_at is always server time.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from django.utils import timezone

from cinema.domain import (
    AccountId,
    Booking,
    BookingId,
    Payment,
    PaymentDetail,
    PaymentDraft,
    PaymentId,
    PaymentMethod,
    PaymentStatus,
)
from cinema.domain.errors import (
    AlreadyPaidError,
    ConflictError,
    InvalidValueError,
    NotFoundError,
    ReferenceNotFoundError,
)
from cinema.services.consistency import ConsistencyCoordinator
from cinema.services.validation import optional_text, parse_id, parse_money
from cinema.stores.interfaces import (
    BookingGuard,
    EntityKind,
    MissingReference,
    PaymentConflict,
    PaymentStore,
)

logger = logging.getLogger(__name__)


def _enum(enum_type, value, field: str):
    try:
        return enum_type(value)
    except ValueError as exc:
        raise InvalidValueError(f"Unknown {field}: {value}") from exc


def _booking_is_payable(current: Booking) -> None:
    if not current.status.holds_seat:
        raise ConflictError(f"Booking is {current.status.value} and cannot be paid")


def _no_check(current: Booking) -> None:
    return None


class PaymentLedger:
    """Service for payment operations."""

    def __init__(
        self,
        store: PaymentStore,
        coordinator: ConsistencyCoordinator,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._store = store
        self._coordinator = coordinator
        self._clock = clock

    def _draft(
        self,
        booking_id: str,
        account_id: str,
        amount: Decimal | int | str,
        method: PaymentMethod | str,
        status: PaymentStatus | str,
        reference: str | None,
    ) -> PaymentDraft:
        booking = parse_id(BookingId, booking_id, "Booking")
        account = parse_id(AccountId, account_id, "Account")
        self._coordinator.require_reference(EntityKind.BOOKING, booking)
        self._coordinator.require_reference(EntityKind.ACCOUNT, account)
        return PaymentDraft(
            booking_id=booking,
            account_id=account,
            amount=parse_money(amount, "Amount"),
            method=_enum(PaymentMethod, method, "payment method"),
            status=_enum(PaymentStatus, status, "payment status"),
            reference=optional_text(reference, "Payment reference", 100),
        )

    def _require_unpaid(self, draft: PaymentDraft, exclude: PaymentId | None = None) -> None:
        if draft.status is PaymentStatus.SUCCESS and not self._coordinator.no_successful_payment(
            draft.booking_id, exclude_payment_id=exclude
        ):
            logger.warning("Payment for booking %s rejected: already paid", draft.booking_id)
            raise AlreadyPaidError(draft.booking_id)

    def _write(
        self, booking_id: BookingId, write: Callable[[], PaymentDetail | None]
    ) -> PaymentDetail | None:
        try:
            return write()
        except PaymentConflict as exc:
            logger.warning("Payment for booking %s rejected: already paid", booking_id)
            raise AlreadyPaidError(booking_id) from exc
        except MissingReference as exc:
            raise ReferenceNotFoundError(exc.kind.value, exc.entity_id) from exc

    def list_payments(self) -> list[PaymentDetail]:
        """Return all payments, most recent first."""
        return self._store.list_payments()

    def get_payment(self, payment_id: str) -> PaymentDetail:
        parsed = parse_id(PaymentId, payment_id, "Payment")
        detail = self._store.get_payment(parsed)
        if detail is None:
            raise NotFoundError("Payment", parsed)
        return detail

    def by_account(self, account_id: str) -> list[PaymentDetail]:
        """Return an account's payments, most recent first.

        Raises:
            NotFoundError: If the account does not exist.
        """
        parsed = parse_id(AccountId, account_id, "Account")
        self._coordinator.require_exists(EntityKind.ACCOUNT, parsed)
        return self._store.list_payments(account_id=parsed)

    def by_booking(self, booking_id: str) -> list[PaymentDetail]:
        """Return a booking's payments, most recent first.

        Raises:
            NotFoundError: If the booking does not exist.
        """
        parsed = parse_id(BookingId, booking_id, "Booking")
        self._coordinator.require_exists(EntityKind.BOOKING, parsed)
        return self._store.list_payments(booking_id=parsed)

    def record(
        self,
        booking_id: str,
        account_id: str,
        amount: Decimal | int | str,
        method: PaymentMethod | str,
        status: PaymentStatus | str = PaymentStatus.PENDING,
        reference: str | None = None,
    ) -> PaymentDetail:
        """Record a payment attempt against an active booking.

        Raises:
            ReferenceNotFoundError: If the booking or account does not exist.
            InvalidQuantityError: If the amount is not positive.
            ConflictError: If the booking is cancelled or expired.
            AlreadyPaidError: If status is success and the booking is already paid.
        """
        draft = self._draft(booking_id, account_id, amount, method, status, reference)
        self._require_unpaid(draft)
        payment = Payment(
            id=PaymentId(uuid.uuid4()),
            booking_id=draft.booking_id,
            account_id=draft.account_id,
            amount=draft.amount,
            method=draft.method,
            status=draft.status,
            recorded_at=self._clock(),
            reference=draft.reference,
        )
        detail = self._write(
            draft.booking_id,
            lambda: self._store.insert_payment(payment, _booking_is_payable),
        )
        logger.info(
            "Payment %s recorded for booking %s (%s)",
            payment.id,
            draft.booking_id,
            draft.status.value,
        )
        return detail

    def update(
        self,
        payment_id: str,
        booking_id: str,
        account_id: str,
        amount: Decimal | int | str,
        method: PaymentMethod | str,
        status: PaymentStatus | str,
        reference: str | None = None,
    ) -> PaymentDetail:
        """Replace a payment. The success check ignores the payment itself.

        Raises:
            NotFoundError: If the payment does not exist.
            ConflictError: If status becomes success on a booking that is not active.
            plus every error of record.
        """
        parsed = parse_id(PaymentId, payment_id, "Payment")
        self._coordinator.require_exists(EntityKind.PAYMENT, parsed)
        draft = self._draft(booking_id, account_id, amount, method, status, reference)
        self._require_unpaid(draft, exclude=parsed)
        payment = Payment(
            id=parsed,
            booking_id=draft.booking_id,
            account_id=draft.account_id,
            amount=draft.amount,
            method=draft.method,
            status=draft.status,
            # Kept by the store; recorded_at is fixed at creation.
            recorded_at=self._clock(),
            reference=draft.reference,
        )
        guard: BookingGuard = (
            _booking_is_payable if draft.status is PaymentStatus.SUCCESS else _no_check
        )
        detail = self._write(
            draft.booking_id, lambda: self._store.update_payment(payment, guard)
        )
        if detail is None:
            raise NotFoundError("Payment", parsed)
        logger.info("Payment %s updated (%s)", parsed, draft.status.value)
        return detail
