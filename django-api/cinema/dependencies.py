"""Builds services wired to the Django ORM stores."""

from cinema.services import (
    CatalogService,
    ConsistencyCoordinator,
    PaymentLedger,
    ReservationLedger,
    ScheduleManager,
)
from cinema.stores.django_ledger import DjangoPaymentStore, DjangoReservationStore
from cinema.stores.django_store import (
    DjangoCatalogStore,
    DjangoConsistencyStore,
    DjangoScheduleStore,
)


def coordinator() -> ConsistencyCoordinator:
    return ConsistencyCoordinator(DjangoConsistencyStore())


def catalog_service() -> CatalogService:
    return CatalogService(DjangoCatalogStore())


def schedule_manager() -> ScheduleManager:
    return ScheduleManager(DjangoScheduleStore(), coordinator())


def reservation_ledger() -> ReservationLedger:
    return ReservationLedger(DjangoReservationStore(), coordinator())


def payment_ledger() -> PaymentLedger:
    return PaymentLedger(DjangoPaymentStore(), coordinator())
