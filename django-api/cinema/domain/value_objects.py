"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class EntityId:
    """Base for typed UUID identifiers."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class FilmId(EntityId):
    """Unique identifier for a Film."""


@dataclass(frozen=True)
class AuditoriumId(EntityId):
    """Unique identifier for an Auditorium."""


@dataclass(frozen=True)
class AccountId(EntityId):
    """Unique identifier for an Account."""


@dataclass(frozen=True)
class ScheduleId(EntityId):
    """Unique identifier for a Schedule."""


@dataclass(frozen=True)
class BookingId(EntityId):
    """Unique identifier for a Booking."""


@dataclass(frozen=True)
class PaymentId(EntityId):
    """Unique identifier for a Payment."""


@dataclass(frozen=True)
class Money:
    """Strictly positive amount with two decimal places."""

    amount: Decimal

    def __post_init__(self) -> None:
        try:
            amount = Decimal(self.amount)
            if amount.is_finite():
                amount = amount.quantize(Decimal("0.01"))
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ValueError("Money amount must be a decimal number") from exc
        # Positivity is checked on the stored (rounded) value.
        if not amount.is_finite() or amount <= 0:
            raise ValueError("Money amount must be positive")
        object.__setattr__(self, "amount", amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Seat capacity of an auditorium, between 1 and 1000."""

    value: int

    MIN = 1
    MAX = 1000

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValueError("Capacity must be an integer")
        if not self.MIN <= self.value <= self.MAX:
            raise ValueError(f"Capacity must be between {self.MIN} and {self.MAX}")


@dataclass(frozen=True)
class Duration:
    """Running time of a film in minutes."""

    minutes: int

    MAX = 600

    def __post_init__(self) -> None:
        if not isinstance(self.minutes, int) or isinstance(self.minutes, bool):
            raise ValueError("Duration must be an integer")
        if not 1 <= self.minutes <= self.MAX:
            raise ValueError(f"Duration must be between 1 and {self.MAX} minutes")


@dataclass(frozen=True)
class SeatCode:
    """Seat identifier within an auditorium, e.g. "A1".

    Codes are normalized (stripped, upper-cased) so that "a1" and "A1 " claim
    the same slot.
    """

    value: str

    MAX_LENGTH = 10

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValueError("Seat code must be a string")
        normalized = self.value.strip().upper()
        if not normalized:
            raise ValueError("Seat code cannot be empty")
        if len(normalized) > self.MAX_LENGTH:
            raise ValueError(f"Seat code cannot exceed {self.MAX_LENGTH} characters")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
