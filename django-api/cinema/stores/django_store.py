"""Django ORM implementation of the catalog, schedule and consistency stores.

Catalog rows are read-mostly and cached; signals drop the cached copies when a
row changes. Schedules are always read from the database in one joined query,
so a ScheduleDetail is consistent at the instant it was read.
"""

from django.contrib.auth.hashers import make_password
from django.core.cache import cache
from django.db import IntegrityError, transaction

from cinema import cache_keys
from cinema import models as orm
from cinema.domain import (
    Account,
    AccountId,
    AccountRole,
    Auditorium,
    AuditoriumId,
    Booking,
    BookingDetail,
    BookingId,
    BookingStatus,
    Capacity,
    Duration,
    Film,
    FilmId,
    Money,
    Payment,
    PaymentDetail,
    PaymentId,
    PaymentMethod,
    PaymentStatus,
    Schedule,
    ScheduleDetail,
    ScheduleId,
    SeatCode,
)
from cinema.stores.interfaces import (
    CatalogStore,
    ConsistencyStore,
    EntityKind,
    MissingReference,
    ProtectedRecord,
    ScheduleStore,
)

_MODELS = {
    EntityKind.FILM: orm.Film,
    EntityKind.AUDITORIUM: orm.Auditorium,
    EntityKind.ACCOUNT: orm.Account,
    EntityKind.SCHEDULE: orm.Schedule,
    EntityKind.BOOKING: orm.Booking,
    EntityKind.PAYMENT: orm.Payment,
}


def to_film(row: orm.Film) -> Film:
    return Film(
        id=FilmId(row.id),
        title=row.title,
        genre=row.genre or None,
        duration=Duration(row.duration_minutes),
        description=row.description or None,
    )


def to_auditorium(row: orm.Auditorium) -> Auditorium:
    return Auditorium(
        id=AuditoriumId(row.id),
        name=row.name,
        capacity=Capacity(row.capacity),
        facilities=row.facilities or None,
    )


def to_account(row: orm.Account) -> Account:
    return Account(
        id=AccountId(row.id),
        display_name=row.display_name,
        email=row.email,
        login_name=row.login_name,
        phone=row.phone or None,
        role=AccountRole(row.role),
        created_at=row.created_at,
        is_active=row.is_active,
    )


def to_schedule(row: orm.Schedule) -> Schedule:
    return Schedule(
        id=ScheduleId(row.id),
        auditorium_id=AuditoriumId(row.auditorium_id),
        film_id=FilmId(row.film_id),
        show_time=row.show_time,
        price=Money(row.price),
    )


def to_schedule_detail(row: orm.Schedule) -> ScheduleDetail:
    return ScheduleDetail(
        schedule=to_schedule(row),
        auditorium=to_auditorium(row.auditorium),
        film=to_film(row.film),
    )


def to_booking(row: orm.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        schedule_id=ScheduleId(row.schedule_id),
        account_id=AccountId(row.account_id),
        seat_code=SeatCode(row.seat_code),
        status=BookingStatus(row.status),
        booked_at=row.booked_at,
    )


def to_booking_detail(row: orm.Booking) -> BookingDetail:
    return BookingDetail(
        booking=to_booking(row),
        schedule=to_schedule_detail(row.schedule),
        account=to_account(row.account),
    )


def to_payment(row: orm.Payment) -> Payment:
    return Payment(
        id=PaymentId(row.id),
        booking_id=BookingId(row.booking_id),
        account_id=AccountId(row.account_id),
        amount=Money(row.amount),
        method=PaymentMethod(row.method),
        status=PaymentStatus(row.status),
        recorded_at=row.recorded_at,
        reference=row.reference or None,
    )


def to_payment_detail(row: orm.Payment) -> PaymentDetail:
    return PaymentDetail(
        payment=to_payment(row),
        booking=to_booking_detail(row.booking),
        account=to_account(row.account),
    )


def schedule_rows():
    return orm.Schedule.objects.select_related("auditorium", "film")


def seat_is_free(
    schedule_id: ScheduleId,
    seat_code: SeatCode,
    exclude_booking_id: BookingId | None = None,
) -> bool:
    """Slot availability query used by both the coordinator and the atomic writes."""
    query = orm.Booking.objects.filter(
        schedule_id=schedule_id.value,
        seat_code=str(seat_code),
        status=BookingStatus.ACTIVE.value,
    )
    if exclude_booking_id is not None:
        query = query.exclude(pk=exclude_booking_id.value)
    return not query.exists()


def successful_payment_exists(
    booking_id: BookingId,
    exclude_payment_id: PaymentId | None = None,
) -> bool:
    query = orm.Payment.objects.filter(
        booking_id=booking_id.value,
        status=PaymentStatus.SUCCESS.value,
    )
    if exclude_payment_id is not None:
        query = query.exclude(pk=exclude_payment_id.value)
    return query.exists()


def row_exists(kind: EntityKind, entity_id) -> bool:
    value = getattr(entity_id, "value", entity_id)
    return _MODELS[kind].objects.filter(pk=value).exists()


class DjangoConsistencyStore(ConsistencyStore):
    """Predicates evaluated directly against the database."""

    def exists(self, kind: EntityKind, entity_id) -> bool:
        return row_exists(kind, entity_id)

    def seat_free(
        self,
        schedule_id: ScheduleId,
        seat_code: SeatCode,
        exclude_booking_id: BookingId | None = None,
    ) -> bool:
        return seat_is_free(schedule_id, seat_code, exclude_booking_id)

    def has_successful_payment(
        self,
        booking_id: BookingId,
        exclude_payment_id: PaymentId | None = None,
    ) -> bool:
        return successful_payment_exists(booking_id, exclude_payment_id)


class DjangoCatalogStore(CatalogStore):
    """PostgreSQL-backed catalog store with cached lookups."""

    def _cached(self, key: str, load):
        found = cache.get(key)
        if found is not None:
            return found
        found = load()
        if found is not None:
            cache.set(key, found, cache_keys.catalog_timeout())
        return found

    def _delete(self, model, pk, reason: str) -> bool:
        try:
            with transaction.atomic():
                deleted, _ = model.objects.filter(pk=pk).delete()
        except IntegrityError as exc:
            raise ProtectedRecord(reason) from exc
        return deleted > 0

    def list_films(self) -> list[Film]:
        return [to_film(row) for row in orm.Film.objects.order_by("title")]

    def get_film(self, film_id: FilmId) -> Film | None:
        def load():
            row = orm.Film.objects.filter(pk=film_id.value).first()
            return to_film(row) if row else None

        return self._cached(cache_keys.film_key(film_id.value), load)

    def insert_film(self, film: Film) -> Film:
        row = orm.Film.objects.create(
            id=film.id.value,
            title=film.title,
            genre=film.genre,
            duration_minutes=film.duration.minutes,
            description=film.description,
        )
        return to_film(row)

    def update_film(self, film: Film) -> Film | None:
        updated = orm.Film.objects.filter(pk=film.id.value).update(
            title=film.title,
            genre=film.genre,
            duration_minutes=film.duration.minutes,
            description=film.description,
        )
        if not updated:
            return None
        # QuerySet.update() sends no signals.
        cache.delete(cache_keys.film_key(film.id.value))
        return film

    def delete_film(self, film_id: FilmId) -> bool:
        return self._delete(orm.Film, film_id.value, "Film is referenced by schedules")

    def list_auditoriums(self) -> list[Auditorium]:
        return [to_auditorium(row) for row in orm.Auditorium.objects.order_by("name")]

    def get_auditorium(self, auditorium_id: AuditoriumId) -> Auditorium | None:
        def load():
            row = orm.Auditorium.objects.filter(pk=auditorium_id.value).first()
            return to_auditorium(row) if row else None

        return self._cached(cache_keys.auditorium_key(auditorium_id.value), load)

    def insert_auditorium(self, auditorium: Auditorium) -> Auditorium:
        row = orm.Auditorium.objects.create(
            id=auditorium.id.value,
            name=auditorium.name,
            capacity=auditorium.capacity.value,
            facilities=auditorium.facilities,
        )
        return to_auditorium(row)

    def update_auditorium(self, auditorium: Auditorium) -> Auditorium | None:
        updated = orm.Auditorium.objects.filter(pk=auditorium.id.value).update(
            name=auditorium.name,
            capacity=auditorium.capacity.value,
            facilities=auditorium.facilities,
        )
        if not updated:
            return None
        cache.delete(cache_keys.auditorium_key(auditorium.id.value))
        return auditorium

    def delete_auditorium(self, auditorium_id: AuditoriumId) -> bool:
        return self._delete(
            orm.Auditorium, auditorium_id.value, "Auditorium is referenced by schedules"
        )

    def list_accounts(self) -> list[Account]:
        return [to_account(row) for row in orm.Account.objects.order_by("login_name")]

    def get_account(self, account_id: AccountId) -> Account | None:
        def load():
            row = orm.Account.objects.filter(pk=account_id.value).first()
            return to_account(row) if row else None

        return self._cached(cache_keys.account_key(account_id.value), load)

    def insert_account(self, account: Account, credential: str) -> Account:
        row = orm.Account.objects.create(
            id=account.id.value,
            display_name=account.display_name,
            email=account.email,
            login_name=account.login_name,
            credential=make_password(credential),
            phone=account.phone,
            role=account.role.value,
            is_active=account.is_active,
        )
        return to_account(row)

    def login_name_taken(self, login_name: str) -> bool:
        return orm.Account.objects.filter(login_name__iexact=login_name).exists()


class DjangoScheduleStore(ScheduleStore):
    """Schedule store; every read is a single joined query."""

    def list_schedules(self) -> list[ScheduleDetail]:
        return [to_schedule_detail(row) for row in schedule_rows().order_by("show_time")]

    def get_schedule(self, schedule_id: ScheduleId) -> ScheduleDetail | None:
        row = schedule_rows().filter(pk=schedule_id.value).first()
        return to_schedule_detail(row) if row else None

    def _explain(self, schedule: Schedule) -> None:
        if not row_exists(EntityKind.AUDITORIUM, schedule.auditorium_id):
            raise MissingReference(EntityKind.AUDITORIUM, schedule.auditorium_id)
        if not row_exists(EntityKind.FILM, schedule.film_id):
            raise MissingReference(EntityKind.FILM, schedule.film_id)

    def insert_schedule(self, schedule: Schedule) -> ScheduleDetail:
        try:
            with transaction.atomic():
                orm.Schedule.objects.create(
                    id=schedule.id.value,
                    auditorium_id=schedule.auditorium_id.value,
                    film_id=schedule.film_id.value,
                    show_time=schedule.show_time,
                    price=schedule.price.amount,
                )
        except IntegrityError:
            self._explain(schedule)
            raise
        return self.get_schedule(schedule.id)

    def update_schedule(self, schedule: Schedule) -> ScheduleDetail | None:
        try:
            with transaction.atomic():
                updated = orm.Schedule.objects.filter(pk=schedule.id.value).update(
                    auditorium_id=schedule.auditorium_id.value,
                    film_id=schedule.film_id.value,
                    show_time=schedule.show_time,
                    price=schedule.price.amount,
                )
        except IntegrityError:
            self._explain(schedule)
            raise
        if not updated:
            return None
        return self.get_schedule(schedule.id)

    def delete_schedule(self, schedule_id: ScheduleId) -> bool:
        try:
            with transaction.atomic():
                row = orm.Schedule.objects.select_for_update().filter(pk=schedule_id.value).first()
                if row is None:
                    return False
                bookings = orm.Booking.objects.filter(schedule=row)
                if bookings.exclude(status=BookingStatus.CANCELLED.value).exists():
                    raise ProtectedRecord("Schedule has bookings that are not cancelled")
                if orm.Payment.objects.filter(booking__schedule=row).exists():
                    raise ProtectedRecord("Schedule has bookings with payment records")
                bookings.delete()
                row.delete()
        except IntegrityError as exc:
            # A booking inserted after the checks above.
            raise ProtectedRecord("Schedule is still referenced by bookings") from exc
        return True
