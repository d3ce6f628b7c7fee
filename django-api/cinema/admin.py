from django.contrib import admin

from cinema.models import Account, Auditorium, Booking, Film, Payment, Schedule


class ScheduleInline(admin.TabularInline):
    model = Schedule
    extra = 0


class LedgerAdminMixin:
    """Bookings and payments change only through the ledgers."""

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class PaymentInline(LedgerAdminMixin, admin.TabularInline):
    model = Payment
    extra = 0


@admin.register(Film)
class FilmAdmin(admin.ModelAdmin):
    list_display = ["title", "genre", "duration_minutes"]
    search_fields = ["title", "genre"]
    inlines = [ScheduleInline]


@admin.register(Auditorium)
class AuditoriumAdmin(admin.ModelAdmin):
    list_display = ["name", "capacity"]
    search_fields = ["name"]


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ["login_name", "display_name", "email", "role", "is_active", "created_at"]
    list_filter = ["role", "is_active"]
    search_fields = ["login_name", "display_name", "email"]
    exclude = ["credential"]


@admin.register(Schedule)
class ScheduleAdmin(admin.ModelAdmin):
    list_display = ["film", "auditorium", "show_time", "price"]
    list_filter = ["auditorium"]


@admin.register(Booking)
class BookingAdmin(LedgerAdminMixin, admin.ModelAdmin):
    list_display = ["seat_code", "schedule", "account", "status", "booked_at"]
    list_filter = ["status", "schedule__film"]
    inlines = [PaymentInline]


@admin.register(Payment)
class PaymentAdmin(LedgerAdminMixin, admin.ModelAdmin):
    list_display = ["booking", "account", "amount", "method", "status", "recorded_at"]
    list_filter = ["status", "method"]
