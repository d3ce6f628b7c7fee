"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

import pytest
from django.core.cache import cache

from cinema import cache_keys
from cinema import dependencies
from cinema.domain import FilmId
from cinema.domain.errors import NotFoundError


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_get_film_populates_detail_cache(self, film_row):
        """Reading a film stores it under films:{id}."""
        dependencies.catalog_service().get_film(str(film_row.id))
        assert cache.get(cache_keys.film_key(film_row.id)) is not None

    def test_film_save_invalidates_detail_cache(self, film_row):
        """Saving a film drops the films:{id} cache key."""
        dependencies.catalog_service().get_film(str(film_row.id))

        film_row.title = "Arrival (Director's Cut)"
        film_row.save()

        assert cache.get(cache_keys.film_key(film_row.id)) is None
        fresh = dependencies.catalog_service().get_film(str(film_row.id))
        assert fresh.title == "Arrival (Director's Cut)"

    def test_film_update_through_service_is_not_stale(self, film_row):
        """QuerySet updates send no signals; the store drops the key itself."""
        service = dependencies.catalog_service()
        service.get_film(str(film_row.id))

        service.update_film(str(film_row.id), title="Sicario", duration=121)

        assert service.get_film(str(film_row.id)).title == "Sicario"

    def test_auditorium_delete_invalidates_detail_cache(self, auditorium_row):
        dependencies.catalog_service().get_auditorium(str(auditorium_row.id))
        key = cache_keys.auditorium_key(auditorium_row.id)

        auditorium_row.delete()

        assert cache.get(key) is None

    def test_account_save_invalidates_detail_cache(self, account_row):
        dependencies.catalog_service().get_account(str(account_row.id))

        account_row.display_name = "Countess of Lovelace"
        account_row.save()

        assert cache.get(cache_keys.account_key(account_row.id)) is None

    def test_missing_film_is_not_cached(self, db):
        missing = FilmId.from_string("00000000-0000-0000-0000-000000000001")
        with pytest.raises(NotFoundError):
            dependencies.catalog_service().get_film(str(missing))
        assert cache.get(cache_keys.film_key(missing.value)) is None
