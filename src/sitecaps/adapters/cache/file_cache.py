"""File-based cache adapter implementing CapabilityCachePort."""

from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from sitecaps.core.exceptions import CacheCorruptError
from sitecaps.core.models import CacheEntry, capabilities_from_names


if TYPE_CHECKING:
    from sitecaps.core.models import CapabilitySet


class FileCapabilityCache:
    """Capability cache storing one JSON document per site.

    Each site is stored as ``<site_id>.capabilities.json`` holding the
    capability names and the last-updated timestamp.

    Attributes:
        cache_dir: Directory where cache files are stored.
    """

    def __init__(self, cache_dir: Path) -> None:
        """Initialize the cache with a directory path.

        Args:
            cache_dir: Directory where cache files will be stored. Created
                on first write.
        """
        self.cache_dir = cache_dir

    def _entry_path(self, site_id: int) -> Path:
        """Get the path for a site's cache file."""
        return self.cache_dir / f"{site_id}.capabilities.json"

    def get(self, site_id: int) -> CacheEntry | None:
        """Get the cached entry for a site, or None if not cached.

        Args:
            site_id: Remote identifier of the site.

        Returns:
            The CacheEntry if cached, None otherwise.

        Raises:
            CacheCorruptError: If the cache file exists but cannot be parsed.
        """
        path = self._entry_path(site_id)
        if not path.exists():
            return None

        try:
            with path.open() as f:
                data = json.load(f)
            return CacheEntry(
                site_id=site_id,
                capabilities=capabilities_from_names(data["capabilities"]),
                last_updated=datetime.fromisoformat(data["last_updated"]),
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise CacheCorruptError(
                f"Cache file corrupt for site {site_id}",
                site_id=site_id,
                path=path,
                cause=e,
            ) from e

    def set(
        self, site_id: int, capabilities: CapabilitySet, last_updated: datetime
    ) -> None:
        """Replace the cached capabilities for a site.

        The file is written to a temporary sibling and moved into place,
        so readers never observe a partial document.

        Args:
            site_id: Remote identifier of the site.
            capabilities: The full capability set.
            last_updated: Timestamp to store with the set.
        """
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        data = {
            "capabilities": sorted(cap.value for cap in capabilities),
            "last_updated": last_updated.isoformat(),
        }

        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, suffix=".tmp")
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f)
            tmp_path.replace(self._entry_path(site_id))
        finally:
            tmp_path.unlink(missing_ok=True)

    def clear(self, site_id: int) -> None:
        """Remove a site's cache file.

        Args:
            site_id: Remote identifier of the site.
        """
        self._entry_path(site_id).unlink(missing_ok=True)

    def list_site_ids(self) -> list[int]:
        """List the sites that currently have a cache file."""
        if not self.cache_dir.exists():
            return []
        site_ids = []
        for path in self.cache_dir.glob("*.capabilities.json"):
            stem = path.name.removesuffix(".capabilities.json")
            if stem.isdigit():
                site_ids.append(int(stem))
        return sorted(site_ids)
