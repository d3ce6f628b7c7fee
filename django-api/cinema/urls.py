from django.urls import path

from cinema.handlers import (
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

urlpatterns = [
    path("films", FilmListView.as_view(), name="film-list"),
    path("films/<str:film_id>", FilmDetailView.as_view(), name="film-detail"),
    path("auditoriums", AuditoriumListView.as_view(), name="auditorium-list"),
    path(
        "auditoriums/<str:auditorium_id>",
        AuditoriumDetailView.as_view(),
        name="auditorium-detail",
    ),
    path("accounts", AccountListView.as_view(), name="account-list"),
    path("accounts/<str:account_id>", AccountDetailView.as_view(), name="account-detail"),
    path(
        "accounts/<str:account_id>/payments",
        AccountPaymentsView.as_view(),
        name="account-payments",
    ),
    path("schedules", ScheduleListView.as_view(), name="schedule-list"),
    path("schedules/<str:schedule_id>", ScheduleDetailView.as_view(), name="schedule-detail"),
    path("bookings", BookingListView.as_view(), name="booking-list"),
    path("bookings/<str:booking_id>", BookingDetailView.as_view(), name="booking-detail"),
    path(
        "bookings/<str:booking_id>/cancel",
        BookingCancelView.as_view(),
        name="booking-cancel",
    ),
    path(
        "bookings/<str:booking_id>/expire",
        BookingExpireView.as_view(),
        name="booking-expire",
    ),
    path(
        "bookings/<str:booking_id>/payments",
        BookingPaymentsView.as_view(),
        name="booking-payments",
    ),
    path("payments", PaymentListView.as_view(), name="payment-list"),
    path("payments/<str:payment_id>", PaymentDetailView.as_view(), name="payment-detail"),
]
