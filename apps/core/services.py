"""Shared services: per-user counters."""

import logging

from django.db import IntegrityError, transaction

from .models import Counter

logger = logging.getLogger(__name__)


@transaction.atomic
def next_counter_value(*, user, key: str) -> int:
    """
    Atomically increment and return the next value of a user's counter.

    The first call for a key returns 1. The row is locked with
    select_for_update() so concurrent callers never receive the same value.
    """
    counter = _locked_counter(user=user, key=key)
    counter.last_value += 1
    counter.save(update_fields=['last_value', 'updated_at'])
    logger.debug("Counter %s for user %s advanced to %s", key, user.pk, counter.last_value)
    return counter.last_value


@transaction.atomic
def ensure_counter_at_least(*, user, key: str, value: int) -> None:
    """Raise a counter to `value` when an explicitly chosen number got ahead of it."""
    counter = _locked_counter(user=user, key=key)
    if counter.last_value < value:
        counter.last_value = value
        counter.save(update_fields=['last_value', 'updated_at'])


def _locked_counter(*, user, key):
    try:
        return Counter.objects.select_for_update().get(user=user, key=key)
    except Counter.DoesNotExist:
        pass

    try:
        with transaction.atomic():
            Counter.objects.create(user=user, key=key, last_value=0)
    except IntegrityError:
        # Created concurrently, fall through to the locked read
        pass
    return Counter.objects.select_for_update().get(user=user, key=key)
