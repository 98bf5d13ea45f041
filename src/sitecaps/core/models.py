"""Core domain models for sitecaps.

These models are pure Python types with no I/O dependencies.
They represent the capabilities granted to a site and the values
derived from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Self


if TYPE_CHECKING:
    from collections.abc import Iterable


class Capability(StrEnum):
    """A feature granted to a site, using the remote API's names as values."""

    BACKUP = "backup"
    BACKUP_DAILY = "backup-daily"
    BACKUP_REALTIME = "backup-realtime"
    SCAN = "scan"
    ANTISPAM = "antispam"
    RESTORE = "restore"
    ALTERNATE_RESTORE = "alternate-restore"

    @classmethod
    def parse(cls, name: str) -> Capability | None:
        """Look up a capability by its wire name, or None if unknown."""
        try:
            return cls(name)
        except ValueError:
            return None


CapabilitySet = frozenset[Capability]

EMPTY_CAPABILITIES: CapabilitySet = frozenset()


def capabilities_from_names(names: Iterable[str]) -> CapabilitySet:
    """Build a CapabilitySet from wire names, ignoring names we don't know."""
    parsed = (Capability.parse(name) for name in names)
    return frozenset(cap for cap in parsed if cap is not None)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Cached capabilities for one site.

    Attributes:
        site_id: Remote identifier of the site.
        capabilities: The full capability set from the last successful fetch.
        last_updated: When the set was written to the cache.
    """

    site_id: int
    capabilities: CapabilitySet
    last_updated: datetime


@dataclass(frozen=True, slots=True)
class PurchasedProducts:
    """Product flags derived from a site's capabilities.

    Example:
        >>> PurchasedProducts(scan=True, backup=False).any_purchased
        True
    """

    scan: bool
    backup: bool

    @property
    def any_purchased(self) -> bool:
        """True if at least one product is enabled."""
        return self.scan or self.backup


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Outcome of a remote capability fetch, as delivered by a fetch channel.

    Attributes:
        site_id: The site the result belongs to.
        capabilities: Capabilities reported by the remote, or None.
        is_error: Whether the remote reported a failure.
        error: Human-readable failure description, if any.
    """

    site_id: int
    capabilities: CapabilitySet | None = None
    is_error: bool = False
    error: str | None = None

    @classmethod
    def ok(cls, site_id: int, capabilities: Iterable[Capability]) -> Self:
        """Build a successful result."""
        return cls(site_id=site_id, capabilities=frozenset(capabilities))

    @classmethod
    def failed(
        cls,
        site_id: int,
        error: str,
        capabilities: Iterable[Capability] | None = None,
    ) -> Self:
        """Build an error result, optionally carrying partial capabilities."""
        return cls(
            site_id=site_id,
            capabilities=frozenset(capabilities) if capabilities is not None else None,
            is_error=True,
            error=error,
        )
