"""Core domain services for sitecaps."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from datetime import timedelta
from typing import TYPE_CHECKING

from sitecaps.core.coordinator import FetchCoordinator
from sitecaps.core.exceptions import CacheError, FetchTimeoutError, SitecapsError
from sitecaps.core.freshness import DEFAULT_VALIDITY_WINDOW, is_fresh
from sitecaps.core.models import (
    EMPTY_CAPABILITIES,
    CacheEntry,
    CapabilitySet,
    PurchasedProducts,
)
from sitecaps.core.products import map_products


if TYPE_CHECKING:
    from sitecaps.config import ResolverConfig
    from sitecaps.core.ports import CapabilityCachePort, ClockPort, FetchChannelPort

logger = logging.getLogger(__name__)


class CapabilityResolver:
    """Resolves a site's purchased products, cache first.

    Cached capabilities are served immediately. Fresh ones are fetched
    through a FetchCoordinator, which allows one outstanding fetch at a
    time, and written back to the cache on success.
    """

    def __init__(
        self,
        cache: CapabilityCachePort,
        coordinator: FetchCoordinator,
        clock: ClockPort,
        *,
        validity_window: timedelta = DEFAULT_VALIDITY_WINDOW,
        fetch_timeout: float | None = None,
    ) -> None:
        self._cache = cache
        self._coordinator = coordinator
        self._clock = clock
        self.validity_window = validity_window
        self.fetch_timeout = fetch_timeout

    @classmethod
    def from_config(
        cls,
        config: ResolverConfig,
        channel: FetchChannelPort,
        cache: CapabilityCachePort | None = None,
        clock: ClockPort | None = None,
    ) -> CapabilityResolver:
        """Create a resolver wired from configuration.

        Args:
            config: Resolver settings.
            channel: Channel that performs the remote fetches.
            cache: Cache to use. Defaults to a FileCapabilityCache in
                config.cache_dir.
            clock: Clock to use. Defaults to SystemClock.

        Returns:
            A configured CapabilityResolver.
        """
        from sitecaps.adapters.cache import FileCapabilityCache
        from sitecaps.adapters.clock import SystemClock

        return cls(
            cache=cache if cache is not None else FileCapabilityCache(config.cache_dir),
            coordinator=FetchCoordinator(channel, match_site_id=config.match_site_id),
            clock=clock if clock is not None else SystemClock(),
            validity_window=config.validity_window,
            fetch_timeout=config.fetch_timeout,
        )

    @property
    def coordinator(self) -> FetchCoordinator:
        """The coordinator serializing this resolver's fetches."""
        return self._coordinator

    def _read_cache(self, site_id: int) -> CacheEntry | None:
        """Read the cache entry, treating an unreadable one as missing.

        A missing entry is stale, so the next fetch overwrites the bad one.
        """
        try:
            return self._cache.get(site_id)
        except CacheError as e:
            logger.warning("Ignoring unreadable cache for site %s: %s", site_id, e)
            return None

    def has_valid_cache(self, site_id: int) -> bool:
        """Whether the site's cached capabilities are within the validity window."""
        entry = self._read_cache(site_id)
        last_updated = entry.last_updated if entry is not None else None
        return is_fresh(last_updated, self._clock.now(), self.validity_window)

    def get_cached_capabilities(self, site_id: int) -> CapabilitySet:
        """Return cached capabilities, or an empty set if never cached or unreadable."""
        entry = self._read_cache(site_id)
        if entry is None:
            return EMPTY_CAPABILITIES
        return entry.capabilities

    def get_cached_products(self, site_id: int) -> PurchasedProducts:
        """Map the cached capabilities to product flags without any fetch."""
        return map_products(self.get_cached_capabilities(site_id))

    async def fetch_capabilities(self, site_id: int) -> CapabilitySet:
        """Fetch capabilities from the remote source.

        On success the cache is replaced with the delivered set. On an
        error result the cache is left alone and whatever the channel
        returned (usually nothing) is passed through.

        Raises:
            FetchInProgressError: If another fetch is outstanding.
            FetchTimeoutError: If fetch_timeout elapses first.
        """
        future = self._coordinator.begin_fetch(site_id)
        try:
            result = await asyncio.wait_for(
                asyncio.wrap_future(future), timeout=self.fetch_timeout
            )
        except TimeoutError:
            self._coordinator.cancel()
            logger.warning(
                "Gave up waiting for site %s after %ss", site_id, self.fetch_timeout
            )
            raise FetchTimeoutError(site_id, self.fetch_timeout or 0.0) from None
        except asyncio.CancelledError:
            self._coordinator.cancel()
            raise

        capabilities = (
            result.capabilities if result.capabilities is not None else EMPTY_CAPABILITIES
        )
        if result.is_error:
            logger.debug("Fetch failed for site %s: %s", site_id, result.error)
            return capabilities

        # Timestamp taken on arrival, not when the request was made.
        self._cache.set(site_id, capabilities, self._clock.now())
        logger.debug(
            "Cached %d capabilities for site %s", len(capabilities), site_id
        )
        return capabilities

    async def fetch_products(self, site_id: int) -> PurchasedProducts:
        """Fetch capabilities remotely and map them to product flags."""
        return map_products(await self.fetch_capabilities(site_id))

    async def observe_products(self, site_id: int) -> AsyncIterator[PurchasedProducts]:
        """Yield cached products, then fetched ones if the cache is stale.

        The first element is always the cached value. A second element is
        produced only when the cache is outside the validity window. If the
        fetch cannot run (another fetch is outstanding, or it timed out) the
        error is logged and the second element is omitted.

        Example:
            >>> async for products in resolver.observe_products(42):
            ...     render(products)
        """
        yield self.get_cached_products(site_id)
        if self.has_valid_cache(site_id):
            return
        try:
            products = await self.fetch_products(site_id)
        except SitecapsError as e:
            logger.warning("Skipping refresh for site %s: %s", site_id, e)
            return
        yield products
