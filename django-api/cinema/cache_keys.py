"""Cache keys for read-mostly catalog rows."""

from django.conf import settings


def catalog_timeout() -> int:
    return getattr(settings, "CINEMA_CATALOG_CACHE_TIMEOUT", 300)


def film_key(film_id) -> str:
    return f"films:{film_id}"


def auditorium_key(auditorium_id) -> str:
    return f"auditoriums:{auditorium_id}"


def account_key(account_id) -> str:
    return f"accounts:{account_id}"
