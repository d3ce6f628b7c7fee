"""Input parsing shared by services: raw values in, domain primitives out."""

from datetime import datetime
from decimal import Decimal
from typing import TypeVar

from django.utils import timezone

from cinema.domain import Capacity, Duration, Money, SeatCode
from cinema.domain.errors import (
    InvalidIdentifierError,
    InvalidQuantityError,
    InvalidValueError,
)
from cinema.domain.value_objects import EntityId

IdT = TypeVar("IdT", bound=EntityId)


def parse_id(id_type: type[IdT], value, entity: str) -> IdT:
    """Parse an ID string (or pass a typed ID through).

    Raises:
        InvalidIdentifierError: If the value is not a valid UUID.
    """
    if isinstance(value, id_type):
        return value
    try:
        return id_type.from_string(value)
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidIdentifierError(entity) from exc


def parse_money(value: Decimal | int | str, field: str) -> Money:
    try:
        return Money(value)
    except ValueError as exc:
        raise InvalidQuantityError(f"{field} must be greater than zero") from exc


def parse_capacity(value: int) -> Capacity:
    try:
        return Capacity(value)
    except ValueError as exc:
        raise InvalidQuantityError(str(exc)) from exc


def parse_duration(value: int) -> Duration:
    try:
        return Duration(value)
    except ValueError as exc:
        raise InvalidQuantityError(str(exc)) from exc


def parse_seat_code(value: str) -> SeatCode:
    try:
        return SeatCode(value)
    except ValueError as exc:
        raise InvalidValueError(str(exc)) from exc


def required_text(value: str | None, field: str, max_length: int) -> str:
    text = (value or "").strip()
    if not text:
        raise InvalidValueError(f"{field} is required")
    if len(text) > max_length:
        raise InvalidValueError(f"{field} cannot exceed {max_length} characters")
    return text


def optional_text(value: str | None, field: str, max_length: int) -> str | None:
    text = (value or "").strip()
    if not text:
        return None
    if len(text) > max_length:
        raise InvalidValueError(f"{field} cannot exceed {max_length} characters")
    return text


def aware(value: datetime) -> datetime:
    """Interpret naive datetimes in the default time zone."""
    if timezone.is_naive(value):
        return timezone.make_aware(value)
    return value
