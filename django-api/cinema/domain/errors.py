"""Domain error codes for the cinema module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    NOT_FOUND = "NOT_FOUND"
    REFERENCE_NOT_FOUND = "REFERENCE_NOT_FOUND"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    INVALID_VALUE = "INVALID_VALUE"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_TEMPORAL_VALUE = "INVALID_TEMPORAL_VALUE"
    SEAT_TAKEN = "SEAT_TAKEN"
    ALREADY_PAID = "ALREADY_PAID"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotFoundError(DomainError):
    """Raised when the target of an operation does not exist."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message=f"{entity} not found",
        )
        self.entity = entity
        self.entity_id = entity_id


class ReferenceNotFoundError(DomainError):
    """Raised when a referenced entity (a foreign key) does not resolve."""

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(
            code=ErrorCode.REFERENCE_NOT_FOUND,
            message=f"Referenced {entity.lower()} does not exist",
        )
        self.entity = entity
        self.entity_id = entity_id


class InvalidIdentifierError(DomainError):
    """Raised when an ID string is not a valid UUID."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_IDENTIFIER,
            message=f"Invalid {entity.lower()} ID format",
        )


class InvalidValueError(DomainError):
    """Raised when a text field breaks a domain rule."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_VALUE, message=message)


class InvalidQuantityError(DomainError):
    """Raised when a price, amount, capacity or duration is out of range."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_QUANTITY, message=message)


class InvalidTemporalValueError(DomainError):
    """Raised when a show time is not strictly in the future."""

    def __init__(self, message: str = "Show date and time must be in the future") -> None:
        super().__init__(code=ErrorCode.INVALID_TEMPORAL_VALUE, message=message)


class SeatTakenError(DomainError):
    """Raised when the seat already has an active booking for the schedule."""

    def __init__(self, schedule_id: object, seat_code: str) -> None:
        super().__init__(
            code=ErrorCode.SEAT_TAKEN,
            message=f"Seat {seat_code} is already booked for this schedule",
        )
        self.schedule_id = schedule_id
        self.seat_code = seat_code


class AlreadyPaidError(DomainError):
    """Raised when a booking already has a successful payment."""

    def __init__(self, booking_id: object) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_PAID,
            message="Booking already has a successful payment",
        )
        self.booking_id = booking_id


class ConflictError(DomainError):
    """Raised when dependent records or the current state block an operation."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.CONFLICT, message=message)
