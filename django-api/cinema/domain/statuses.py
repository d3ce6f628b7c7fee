"""Closed enumerations and the booking state machine."""

from enum import Enum


class BookingStatus(str, Enum):
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @property
    def holds_seat(self) -> bool:
        """Only an active booking occupies its slot."""
        return self is BookingStatus.ACTIVE

    @property
    def is_terminal(self) -> bool:
        return self is not BookingStatus.ACTIVE


class PaymentStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class PaymentMethod(str, Enum):
    CARD = "card"
    EWALLET = "ewallet"
    BANK_TRANSFER = "bank_transfer"


class AccountRole(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


class InvalidTransition(Exception):
    """Raised when a booking cannot move from one status to another."""

    def __init__(self, current: BookingStatus, target: BookingStatus) -> None:
        super().__init__(f"Cannot move booking from {current.value} to {target.value}")
        self.current = current
        self.target = target


def transition_booking(current: BookingStatus, target: BookingStatus) -> BookingStatus:
    """Return the status a booking ends up in when ``target`` is requested.

    Active may move to either terminal status. Requesting the status a booking
    already has is a no-op, so cancel and expire are idempotent. Anything else
    (re-activation, cancelled <-> expired) is rejected.
    """
    if current is target:
        return current
    if current is BookingStatus.ACTIVE and target.is_terminal:
        return target
    raise InvalidTransition(current, target)
