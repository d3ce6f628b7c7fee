"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.

The two uniqueness rules of the ledger are partial unique constraints, so they
hold across processes no matter which code path writes the rows.
"""

import uuid

from django.db import models
from django.db.models import Q

from cinema.domain import AccountRole, BookingStatus, PaymentMethod, PaymentStatus


def _choices(enum) -> list[tuple[str, str]]:
    return [(member.value, member.name.replace("_", " ").title()) for member in enum]


class Film(models.Model):
    """Persistence model for films."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    genre = models.CharField(max_length=50, blank=True, null=True)
    duration_minutes = models.PositiveIntegerField()
    description = models.TextField(max_length=1000, blank=True, null=True)

    class Meta:
        ordering = ["title"]
        constraints = [
            models.CheckConstraint(
                condition=Q(duration_minutes__gte=1), name="film_duration_positive"
            ),
        ]

    def __str__(self) -> str:
        return self.title


class Auditorium(models.Model):
    """Persistence model for auditoriums."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    capacity = models.PositiveIntegerField()
    facilities = models.CharField(max_length=500, blank=True, null=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=Q(capacity__gte=1, capacity__lte=1000),
                name="auditorium_capacity_range",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class Account(models.Model):
    """Persistence model for customer and admin accounts."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    display_name = models.CharField(max_length=100)
    email = models.EmailField(max_length=254)
    login_name = models.CharField(max_length=50, unique=True)
    credential = models.CharField(max_length=128)
    phone = models.CharField(max_length=20, blank=True, null=True)
    role = models.CharField(
        max_length=20, choices=_choices(AccountRole), default=AccountRole.CUSTOMER.value
    )
    created_at = models.DateTimeField(auto_now_add=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["login_name"]

    def __str__(self) -> str:
        return self.login_name


class Schedule(models.Model):
    """Persistence model for screenings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    auditorium = models.ForeignKey(
        Auditorium, on_delete=models.PROTECT, related_name="schedules"
    )
    film = models.ForeignKey(Film, on_delete=models.PROTECT, related_name="schedules")
    show_time = models.DateTimeField()
    price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        ordering = ["show_time"]
        indexes = [
            models.Index(fields=["show_time"], name="schedule_show_time_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(price__gt=0), name="schedule_price_positive"),
        ]

    def __str__(self) -> str:
        return f"{self.film} @ {self.auditorium} - {self.show_time}"


class Booking(models.Model):
    """Persistence model for seat bookings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    schedule = models.ForeignKey(Schedule, on_delete=models.PROTECT, related_name="bookings")
    account = models.ForeignKey(Account, on_delete=models.PROTECT, related_name="bookings")
    seat_code = models.CharField(max_length=10)
    status = models.CharField(
        max_length=20, choices=_choices(BookingStatus), default=BookingStatus.ACTIVE.value
    )
    booked_at = models.DateTimeField()

    class Meta:
        ordering = ["-booked_at"]
        indexes = [
            models.Index(fields=["schedule", "seat_code"], name="booking_slot_idx"),
            models.Index(fields=["account", "-booked_at"], name="booking_account_recent_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["schedule", "seat_code"],
                condition=Q(status=BookingStatus.ACTIVE.value),
                name="booking_one_active_per_seat",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.seat_code} ({self.status})"


class Payment(models.Model):
    """Persistence model for payment attempts."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking = models.ForeignKey(Booking, on_delete=models.PROTECT, related_name="payments")
    account = models.ForeignKey(Account, on_delete=models.PROTECT, related_name="payments")
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    method = models.CharField(max_length=20, choices=_choices(PaymentMethod))
    status = models.CharField(
        max_length=20, choices=_choices(PaymentStatus), default=PaymentStatus.PENDING.value
    )
    recorded_at = models.DateTimeField()
    reference = models.CharField(max_length=100, blank=True, null=True)

    class Meta:
        ordering = ["-recorded_at"]
        indexes = [
            models.Index(fields=["booking", "-recorded_at"], name="payment_booking_recent_idx"),
            models.Index(fields=["account", "-recorded_at"], name="payment_account_recent_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["booking"],
                condition=Q(status=PaymentStatus.SUCCESS.value),
                name="payment_one_success_per_booking",
            ),
            models.CheckConstraint(condition=Q(amount__gt=0), name="payment_amount_positive"),
        ]

    def __str__(self) -> str:
        return f"{self.amount} ({self.status})"
