"""Serializers for request input and for domain models in API responses.

Input serializers check syntax only (types, lengths, choices). Domain rules
are enforced by the services.
"""

from decimal import Decimal

from rest_framework import serializers

from cinema.domain import AccountRole, PaymentMethod, PaymentStatus


def _values(enum) -> list[str]:
    return [member.value for member in enum]


class FilmSerializer(serializers.Serializer):
    """Serializer for Film domain model."""

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    genre = serializers.CharField(allow_null=True)
    duration = serializers.IntegerField(source="duration.minutes")
    description = serializers.CharField(allow_null=True)


class AuditoriumSerializer(serializers.Serializer):
    """Serializer for Auditorium domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    capacity = serializers.IntegerField(source="capacity.value")
    facilities = serializers.CharField(allow_null=True)


class AccountSerializer(serializers.Serializer):
    """Serializer for Account domain model. The credential is never exposed."""

    id = serializers.UUIDField(source="id.value")
    display_name = serializers.CharField()
    email = serializers.EmailField()
    login_name = serializers.CharField()
    phone = serializers.CharField(allow_null=True)
    role = serializers.CharField(source="role.value")
    created_at = serializers.DateTimeField()
    is_active = serializers.BooleanField()


class ScheduleSerializer(serializers.Serializer):
    """Serializer for ScheduleDetail projections."""

    id = serializers.UUIDField(source="schedule.id.value")
    auditorium_id = serializers.UUIDField(source="schedule.auditorium_id.value")
    film_id = serializers.UUIDField(source="schedule.film_id.value")
    show_time = serializers.DateTimeField(source="schedule.show_time")
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, source="schedule.price.amount"
    )
    auditorium = AuditoriumSerializer()
    film = FilmSerializer()


class BookingSerializer(serializers.Serializer):
    """Serializer for BookingDetail projections."""

    id = serializers.UUIDField(source="booking.id.value")
    schedule_id = serializers.UUIDField(source="booking.schedule_id.value")
    account_id = serializers.UUIDField(source="booking.account_id.value")
    seat_code = serializers.CharField(source="booking.seat_code.value")
    status = serializers.CharField(source="booking.status.value")
    booked_at = serializers.DateTimeField(source="booking.booked_at")
    schedule = ScheduleSerializer()
    account = AccountSerializer()


class PaymentSerializer(serializers.Serializer):
    """Serializer for PaymentDetail projections."""

    id = serializers.UUIDField(source="payment.id.value")
    booking_id = serializers.UUIDField(source="payment.booking_id.value")
    account_id = serializers.UUIDField(source="payment.account_id.value")
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, source="payment.amount.amount"
    )
    method = serializers.CharField(source="payment.method.value")
    status = serializers.CharField(source="payment.status.value")
    recorded_at = serializers.DateTimeField(source="payment.recorded_at")
    reference = serializers.CharField(source="payment.reference", allow_null=True)
    booking = BookingSerializer()
    account = AccountSerializer()


class FilmInputSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    genre = serializers.CharField(max_length=50, required=False, allow_null=True, allow_blank=True)
    duration = serializers.IntegerField(min_value=1, max_value=600)
    description = serializers.CharField(
        max_length=1000, required=False, allow_null=True, allow_blank=True
    )


class AuditoriumInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    capacity = serializers.IntegerField(min_value=1, max_value=1000)
    facilities = serializers.CharField(
        max_length=500, required=False, allow_null=True, allow_blank=True
    )


class AccountInputSerializer(serializers.Serializer):
    display_name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    login_name = serializers.CharField(max_length=50)
    credential = serializers.CharField(write_only=True, min_length=6, max_length=128)
    phone = serializers.CharField(max_length=20, required=False, allow_null=True, allow_blank=True)
    role = serializers.ChoiceField(choices=_values(AccountRole), default=AccountRole.CUSTOMER.value)


class ScheduleInputSerializer(serializers.Serializer):
    auditorium_id = serializers.UUIDField()
    film_id = serializers.UUIDField()
    show_time = serializers.DateTimeField()
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, max_value=Decimal("1000000")
    )


class BookingInputSerializer(serializers.Serializer):
    schedule_id = serializers.UUIDField()
    account_id = serializers.UUIDField()
    seat_code = serializers.CharField(max_length=10)


class SeatChangeInputSerializer(serializers.Serializer):
    schedule_id = serializers.UUIDField()
    seat_code = serializers.CharField(max_length=10)


class PaymentInputSerializer(serializers.Serializer):
    booking_id = serializers.UUIDField()
    account_id = serializers.UUIDField()
    amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, max_value=Decimal("10000000")
    )
    method = serializers.ChoiceField(choices=_values(PaymentMethod))
    status = serializers.ChoiceField(
        choices=_values(PaymentStatus), default=PaymentStatus.PENDING.value
    )
    reference = serializers.CharField(
        max_length=100, required=False, allow_null=True, allow_blank=True
    )
