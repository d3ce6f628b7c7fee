"""Consistency coordinator - existence and uniqueness checks shared by both ledgers.

The predicates here are the fast-fail path. The stores evaluate the same
queries again inside their atomic writes, where the database constraints make
the decision final.
"""

from cinema.domain import BookingId, PaymentId, ScheduleId, SeatCode
from cinema.domain.errors import NotFoundError, ReferenceNotFoundError
from cinema.stores.interfaces import ConsistencyStore, EntityKind


class ConsistencyCoordinator:
    """Stateless predicates over a ConsistencyStore."""

    def __init__(self, store: ConsistencyStore) -> None:
        self._store = store

    def exists(self, kind: EntityKind, entity_id) -> bool:
        return self._store.exists(kind, entity_id)

    def require_exists(self, kind: EntityKind, entity_id) -> None:
        """Raise NotFoundError if the target of an operation is missing."""
        if not self._store.exists(kind, entity_id):
            raise NotFoundError(kind.value, entity_id)

    def require_reference(self, kind: EntityKind, entity_id) -> None:
        """Raise ReferenceNotFoundError if a referenced entity is missing."""
        if not self._store.exists(kind, entity_id):
            raise ReferenceNotFoundError(kind.value, entity_id)

    def seat_free(
        self,
        schedule_id: ScheduleId,
        seat_code: SeatCode,
        exclude_booking_id: BookingId | None = None,
    ) -> bool:
        return self._store.seat_free(schedule_id, seat_code, exclude_booking_id)

    def no_successful_payment(
        self,
        booking_id: BookingId,
        exclude_payment_id: PaymentId | None = None,
    ) -> bool:
        return not self._store.has_successful_payment(booking_id, exclude_payment_id)
