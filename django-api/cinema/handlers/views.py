"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain errors to the exception handler in handlers/errors.py
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from cinema import dependencies
from cinema.handlers.serializers import (
    AccountInputSerializer,
    AccountSerializer,
    AuditoriumInputSerializer,
    AuditoriumSerializer,
    BookingInputSerializer,
    BookingSerializer,
    FilmInputSerializer,
    FilmSerializer,
    PaymentInputSerializer,
    PaymentSerializer,
    ScheduleInputSerializer,
    ScheduleSerializer,
    SeatChangeInputSerializer,
)


def _valid(serializer_class, request: Request) -> dict:
    serializer = serializer_class(data=request.data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


class FilmListView(APIView):
    """Handler for GET/POST /api/films"""

    def get(self, request: Request) -> Response:
        films = dependencies.catalog_service().list_films()
        return Response(FilmSerializer(films, many=True).data)

    def post(self, request: Request) -> Response:
        film = dependencies.catalog_service().create_film(**_valid(FilmInputSerializer, request))
        return Response(FilmSerializer(film).data, status=status.HTTP_201_CREATED)


class FilmDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/films/{film_id}"""

    def get(self, request: Request, film_id: str) -> Response:
        return Response(FilmSerializer(dependencies.catalog_service().get_film(film_id)).data)

    def put(self, request: Request, film_id: str) -> Response:
        film = dependencies.catalog_service().update_film(
            film_id, **_valid(FilmInputSerializer, request)
        )
        return Response(FilmSerializer(film).data)

    def delete(self, request: Request, film_id: str) -> Response:
        dependencies.catalog_service().delete_film(film_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AuditoriumListView(APIView):
    """Handler for GET/POST /api/auditoriums"""

    def get(self, request: Request) -> Response:
        auditoriums = dependencies.catalog_service().list_auditoriums()
        return Response(AuditoriumSerializer(auditoriums, many=True).data)

    def post(self, request: Request) -> Response:
        auditorium = dependencies.catalog_service().create_auditorium(
            **_valid(AuditoriumInputSerializer, request)
        )
        return Response(AuditoriumSerializer(auditorium).data, status=status.HTTP_201_CREATED)


class AuditoriumDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/auditoriums/{auditorium_id}"""

    def get(self, request: Request, auditorium_id: str) -> Response:
        auditorium = dependencies.catalog_service().get_auditorium(auditorium_id)
        return Response(AuditoriumSerializer(auditorium).data)

    def put(self, request: Request, auditorium_id: str) -> Response:
        auditorium = dependencies.catalog_service().update_auditorium(
            auditorium_id, **_valid(AuditoriumInputSerializer, request)
        )
        return Response(AuditoriumSerializer(auditorium).data)

    def delete(self, request: Request, auditorium_id: str) -> Response:
        dependencies.catalog_service().delete_auditorium(auditorium_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AccountListView(APIView):
    """Handler for GET/POST /api/accounts"""

    def get(self, request: Request) -> Response:
        accounts = dependencies.catalog_service().list_accounts()
        return Response(AccountSerializer(accounts, many=True).data)

    def post(self, request: Request) -> Response:
        account = dependencies.catalog_service().create_account(
            **_valid(AccountInputSerializer, request)
        )
        return Response(AccountSerializer(account).data, status=status.HTTP_201_CREATED)


class AccountDetailView(APIView):
    """Handler for GET /api/accounts/{account_id}"""

    def get(self, request: Request, account_id: str) -> Response:
        account = dependencies.catalog_service().get_account(account_id)
        return Response(AccountSerializer(account).data)


class AccountPaymentsView(APIView):
    """Handler for GET /api/accounts/{account_id}/payments"""

    def get(self, request: Request, account_id: str) -> Response:
        payments = dependencies.payment_ledger().by_account(account_id)
        return Response(PaymentSerializer(payments, many=True).data)


class ScheduleListView(APIView):
    """Handler for GET/POST /api/schedules"""

    def get(self, request: Request) -> Response:
        schedules = dependencies.schedule_manager().list_schedules()
        return Response(ScheduleSerializer(schedules, many=True).data)

    def post(self, request: Request) -> Response:
        schedule = dependencies.schedule_manager().create_schedule(
            **_valid(ScheduleInputSerializer, request)
        )
        return Response(ScheduleSerializer(schedule).data, status=status.HTTP_201_CREATED)


class ScheduleDetailView(APIView):
    """Handler for GET/PUT/DELETE /api/schedules/{schedule_id}"""

    def get(self, request: Request, schedule_id: str) -> Response:
        schedule = dependencies.schedule_manager().get_schedule(schedule_id)
        return Response(ScheduleSerializer(schedule).data)

    def put(self, request: Request, schedule_id: str) -> Response:
        schedule = dependencies.schedule_manager().update_schedule(
            schedule_id, **_valid(ScheduleInputSerializer, request)
        )
        return Response(ScheduleSerializer(schedule).data)

    def delete(self, request: Request, schedule_id: str) -> Response:
        dependencies.schedule_manager().delete_schedule(schedule_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class BookingListView(APIView):
    """Handler for GET/POST /api/bookings"""

    def get(self, request: Request) -> Response:
        bookings = dependencies.reservation_ledger().list_bookings(
            schedule_id=request.query_params.get("schedule_id"),
            account_id=request.query_params.get("account_id"),
        )
        return Response(BookingSerializer(bookings, many=True).data)

    def post(self, request: Request) -> Response:
        booking = dependencies.reservation_ledger().reserve(
            **_valid(BookingInputSerializer, request)
        )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


class BookingDetailView(APIView):
    """Handler for GET/PUT /api/bookings/{booking_id}"""

    def get(self, request: Request, booking_id: str) -> Response:
        booking = dependencies.reservation_ledger().get_booking(booking_id)
        return Response(BookingSerializer(booking).data)

    def put(self, request: Request, booking_id: str) -> Response:
        data = _valid(SeatChangeInputSerializer, request)
        booking = dependencies.reservation_ledger().change_seat(
            booking_id, data["schedule_id"], data["seat_code"]
        )
        return Response(BookingSerializer(booking).data)


class BookingCancelView(APIView):
    """Handler for POST /api/bookings/{booking_id}/cancel"""

    def post(self, request: Request, booking_id: str) -> Response:
        booking = dependencies.reservation_ledger().cancel(booking_id)
        return Response(BookingSerializer(booking).data)


class BookingExpireView(APIView):
    """Handler for POST /api/bookings/{booking_id}/expire"""

    def post(self, request: Request, booking_id: str) -> Response:
        booking = dependencies.reservation_ledger().expire(booking_id)
        return Response(BookingSerializer(booking).data)


class BookingPaymentsView(APIView):
    """Handler for GET /api/bookings/{booking_id}/payments"""

    def get(self, request: Request, booking_id: str) -> Response:
        payments = dependencies.payment_ledger().by_booking(booking_id)
        return Response(PaymentSerializer(payments, many=True).data)


class PaymentListView(APIView):
    """Handler for GET/POST /api/payments"""

    def get(self, request: Request) -> Response:
        payments = dependencies.payment_ledger().list_payments()
        return Response(PaymentSerializer(payments, many=True).data)

    def post(self, request: Request) -> Response:
        payment = dependencies.payment_ledger().record(**_valid(PaymentInputSerializer, request))
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


class PaymentDetailView(APIView):
    """Handler for GET/PUT /api/payments/{payment_id}"""

    def get(self, request: Request, payment_id: str) -> Response:
        payment = dependencies.payment_ledger().get_payment(payment_id)
        return Response(PaymentSerializer(payment).data)

    def put(self, request: Request, payment_id: str) -> Response:
        payment = dependencies.payment_ledger().update(
            payment_id, **_valid(PaymentInputSerializer, request)
        )
        return Response(PaymentSerializer(payment).data)
