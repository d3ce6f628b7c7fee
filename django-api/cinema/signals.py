"""Django signals for cache invalidation.

Only catalog rows are cached. Bookings and payments are always read from the
database.
"""

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from cinema import cache_keys
from cinema.models import Account, Auditorium, Film


@receiver([post_save, post_delete], sender=Film)
def invalidate_film_cache(sender, instance, **kwargs):
    """Invalidate the cached film when it is saved or deleted."""
    cache.delete(cache_keys.film_key(instance.pk))


@receiver([post_save, post_delete], sender=Auditorium)
def invalidate_auditorium_cache(sender, instance, **kwargs):
    """Invalidate the cached auditorium when it is saved or deleted."""
    cache.delete(cache_keys.auditorium_key(instance.pk))


@receiver([post_save, post_delete], sender=Account)
def invalidate_account_cache(sender, instance, **kwargs):
    """Invalidate the cached account when it is saved or deleted."""
    cache.delete(cache_keys.account_key(instance.pk))
