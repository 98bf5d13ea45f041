"""Freshness policy for cached capabilities."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Literal


if TYPE_CHECKING:
    from sitecaps.core.models import CacheEntry

DEFAULT_VALIDITY_WINDOW = timedelta(minutes=15)

FreshnessState = Literal["fresh", "stale", "missing"]


def is_fresh(
    last_updated: datetime | None,
    now: datetime,
    validity_window: timedelta,
) -> bool:
    """Check whether a cache entry written at last_updated is still valid.

    An entry written exactly validity_window ago is already stale.

    Args:
        last_updated: When the entry was written, or None if never cached.
        now: Current time.
        validity_window: Maximum age of a valid entry.

    Returns:
        True if last_updated > now - validity_window.
    """
    if last_updated is None:
        return False
    return last_updated > now - validity_window


def freshness_state(
    entry: CacheEntry | None,
    now: datetime,
    validity_window: timedelta,
) -> FreshnessState:
    """Classify a cache entry as fresh, stale, or missing."""
    if entry is None:
        return "missing"
    if is_fresh(entry.last_updated, now, validity_window):
        return "fresh"
    return "stale"
