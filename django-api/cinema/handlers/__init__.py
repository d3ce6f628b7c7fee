from cinema.handlers.views import (
    AccountDetailView,
    AccountListView,
    AccountPaymentsView,
    AuditoriumDetailView,
    AuditoriumListView,
    BookingCancelView,
    BookingDetailView,
    BookingExpireView,
    BookingListView,
    BookingPaymentsView,
    FilmDetailView,
    FilmListView,
    PaymentDetailView,
    PaymentListView,
    ScheduleDetailView,
    ScheduleListView,
)

__all__ = [
    "AccountDetailView",
    "AccountListView",
    "AccountPaymentsView",
    "AuditoriumDetailView",
    "AuditoriumListView",
    "BookingCancelView",
    "BookingDetailView",
    "BookingExpireView",
    "BookingListView",
    "BookingPaymentsView",
    "FilmDetailView",
    "FilmListView",
    "PaymentDetailView",
    "PaymentListView",
    "ScheduleDetailView",
    "ScheduleListView",
]
