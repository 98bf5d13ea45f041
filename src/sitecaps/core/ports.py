"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from concurrent.futures import Future
    from datetime import datetime

    from sitecaps.core.models import CacheEntry, CapabilitySet, FetchResult

ResultSubscriber = Callable[["FetchResult"], None]


@runtime_checkable
class CapabilityCachePort(Protocol):
    """Per-site capability cache with last-updated tracking."""

    def get(self, site_id: int) -> CacheEntry | None:
        """Get the cached entry for a site, or None if never cached."""
        ...

    def set(
        self, site_id: int, capabilities: CapabilitySet, last_updated: datetime
    ) -> None:
        """Replace the cached capabilities for a site.

        Args:
            site_id: Remote identifier of the site.
            capabilities: The full capability set; replaces any previous set.
            last_updated: Timestamp to record alongside the set.
        """
        ...

    def clear(self, site_id: int) -> None:
        """Remove the cached entry for a site. Missing entries are ignored."""
        ...


@runtime_checkable
class ClockPort(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...


@runtime_checkable
class FetchChannelPort(Protocol):
    """Asynchronous request/notify channel for remote capability fetches.

    A request is issued with dispatch(). At some later point, on a thread
    of the channel's choosing, every registered subscriber is called with
    the FetchResult.
    """

    def register(self, subscriber: ResultSubscriber) -> None:
        """Start delivering results to subscriber."""
        ...

    def unregister(self, subscriber: ResultSubscriber) -> None:
        """Stop delivering results to subscriber. Unknown subscribers are ignored."""
        ...

    def dispatch(self, site_id: int) -> None:
        """Request capabilities for site_id without waiting for the answer."""
        ...


@runtime_checkable
class CapabilitySourcePort(Protocol):
    """Blocking lookup of a site's capabilities from the authoritative source."""

    def fetch(self, site_id: int) -> CapabilitySet:
        """Fetch the current capabilities for a site.

        Raises:
            CapabilitySourceError: If the lookup fails.
        """
        ...


@runtime_checkable
class ExecutorPort(Protocol):
    """Executor for background task execution.

    Abstracts over concurrent.futures executors to allow dependency injection
    and testing. Fetch channels use this protocol instead of directly
    importing ThreadPoolExecutor, keeping concurrency at the edges.
    """

    def submit(
        self, fn: Callable[..., object], *args: object, **kwargs: object
    ) -> Future[object]:  # type: ignore[name-defined, unused-ignore]
        """Submit a function for execution.

        Args:
            fn: Function to execute.
            *args: Positional arguments to pass to fn.
            **kwargs: Keyword arguments to pass to fn.

        Returns:
            Future representing the pending result.
        """
        ...

    def shutdown(self, wait: bool = True) -> None:
        """Release worker resources."""
        ...
