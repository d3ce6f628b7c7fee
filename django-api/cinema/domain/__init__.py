from cinema.domain.models import (
    Account,
    Auditorium,
    Booking,
    BookingDetail,
    Film,
    Payment,
    PaymentDetail,
    PaymentDraft,
    Schedule,
    ScheduleDetail,
)
from cinema.domain.statuses import (
    AccountRole,
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
    transition_booking,
)
from cinema.domain.value_objects import (
    AccountId,
    AuditoriumId,
    BookingId,
    Capacity,
    Duration,
    FilmId,
    Money,
    PaymentId,
    ScheduleId,
    SeatCode,
)

__all__ = [
    "Account",
    "Auditorium",
    "Booking",
    "BookingDetail",
    "Film",
    "Payment",
    "PaymentDetail",
    "PaymentDraft",
    "Schedule",
    "ScheduleDetail",
    "AccountRole",
    "BookingStatus",
    "PaymentMethod",
    "PaymentStatus",
    "transition_booking",
    "AccountId",
    "AuditoriumId",
    "BookingId",
    "FilmId",
    "PaymentId",
    "ScheduleId",
    "Money",
    "Capacity",
    "Duration",
    "SeatCode",
]
