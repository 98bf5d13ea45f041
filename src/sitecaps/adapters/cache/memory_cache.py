"""In-memory cache adapter implementing CapabilityCachePort."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from sitecaps.core.models import CacheEntry


if TYPE_CHECKING:
    from datetime import datetime

    from sitecaps.core.models import CapabilitySet


class MemoryCapabilityCache:
    """Process-local capability cache.

    Safe to share between the event loop and fetch worker threads.
    """

    def __init__(self) -> None:
        self._entries: dict[int, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, site_id: int) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(site_id)

    def set(
        self, site_id: int, capabilities: CapabilitySet, last_updated: datetime
    ) -> None:
        entry = CacheEntry(
            site_id=site_id,
            capabilities=frozenset(capabilities),
            last_updated=last_updated,
        )
        with self._lock:
            self._entries[site_id] = entry

    def clear(self, site_id: int) -> None:
        with self._lock:
            self._entries.pop(site_id, None)

    def list_site_ids(self) -> list[int]:
        with self._lock:
            return sorted(self._entries)
