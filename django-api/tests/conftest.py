"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from decimal import Decimal
from types import SimpleNamespace

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from cinema import models as orm
from cinema.services import (
    CatalogService,
    ConsistencyCoordinator,
    PaymentLedger,
    ReservationLedger,
    ScheduleManager,
)
from fakes import FakeClock, InMemoryStore

NOW = datetime(2030, 1, 1, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def cinema(memory_store, clock):
    """All services wired to one in-memory store and a fixed clock."""
    coordinator = ConsistencyCoordinator(memory_store)
    return SimpleNamespace(
        store=memory_store,
        clock=clock,
        coordinator=coordinator,
        catalog=CatalogService(memory_store, clock),
        schedules=ScheduleManager(memory_store, coordinator, clock),
        reservations=ReservationLedger(memory_store, coordinator, clock),
        payments=PaymentLedger(memory_store, coordinator, clock),
    )


@pytest.fixture
def showing(cinema):
    """A film on show tomorrow, and a customer who can book it."""
    film = cinema.catalog.create_film(title="Arrival", duration=116, genre="Sci-Fi")
    auditorium = cinema.catalog.create_auditorium(name="Hall 1", capacity=120)
    account = cinema.catalog.create_account(
        display_name="Ada Lovelace",
        email="ada@example.com",
        login_name="ada",
        credential="secret-pass",
    )
    schedule = cinema.schedules.create_schedule(
        auditorium_id=str(auditorium.id),
        film_id=str(film.id),
        show_time=NOW + timedelta(days=1),
        price=Decimal("50000"),
    )
    return SimpleNamespace(
        film_id=str(film.id),
        auditorium_id=str(auditorium.id),
        account_id=str(account.id),
        schedule_id=str(schedule.schedule.id),
    )


@pytest.fixture
def film_row(db) -> orm.Film:
    return orm.Film.objects.create(title="Arrival", genre="Sci-Fi", duration_minutes=116)


@pytest.fixture
def auditorium_row(db) -> orm.Auditorium:
    return orm.Auditorium.objects.create(name="Hall 1", capacity=120)


@pytest.fixture
def account_row(db) -> orm.Account:
    return orm.Account.objects.create(
        display_name="Ada Lovelace",
        email="ada@example.com",
        login_name="ada",
        credential="!",
    )


@pytest.fixture
def schedule_row(film_row, auditorium_row) -> orm.Schedule:
    return orm.Schedule.objects.create(
        film=film_row,
        auditorium=auditorium_row,
        show_time=timezone.now() + timedelta(days=1),
        price=Decimal("50000.00"),
    )
