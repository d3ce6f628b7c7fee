from cinema.services.catalog_service import CatalogService
from cinema.services.consistency import ConsistencyCoordinator
from cinema.services.payment_service import PaymentLedger
from cinema.services.reservation_service import ReservationLedger
from cinema.services.schedule_service import ScheduleManager

__all__ = [
    "CatalogService",
    "ConsistencyCoordinator",
    "PaymentLedger",
    "ReservationLedger",
    "ScheduleManager",
]
