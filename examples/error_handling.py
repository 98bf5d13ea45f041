"""Error handling patterns with recovery hints.

This example demonstrates how to handle the errors a resolver can raise
and use the recovery_hint property to provide actionable guidance.
"""

import asyncio
from pathlib import Path

from sitecaps import (
    CacheCorruptError,
    CapabilityResolver,
    FetchCoordinator,
    FetchInProgressError,
    FetchTimeoutError,
    FileCapabilityCache,
    PurchasedProducts,
    SitecapsError,
    StaticCapabilitySource,
    SystemClock,
    ThreadedFetchChannel,
    ThreadPoolExecutorAdapter,
)


executor = ThreadPoolExecutorAdapter(max_workers=1)
resolver = CapabilityResolver(
    cache=FileCapabilityCache(Path("./data")),
    coordinator=FetchCoordinator(
        ThreadedFetchChannel(StaticCapabilitySource({}), executor)
    ),
    clock=SystemClock(),
    fetch_timeout=10.0,
)


# Pattern 1: Another fetch is already outstanding
async def fetch_or_cached(resolver: CapabilityResolver, site_id: int) -> PurchasedProducts:
    """Fetch products, falling back to the cache if a fetch is running."""
    try:
        return await resolver.fetch_products(site_id)
    except FetchInProgressError as e:
        # Don't retry in a loop; the outstanding request may never finish
        print(f"Hint: {e.recovery_hint}")
        return resolver.get_cached_products(site_id)


# Pattern 2: The remote never answered
async def fetch_with_timeout(
    resolver: CapabilityResolver, site_id: int
) -> PurchasedProducts | None:
    """Fetch products, returning None on timeout."""
    try:
        return await resolver.fetch_products(site_id)
    except FetchTimeoutError as e:
        print(f"Timed out after {e.timeout}s")
        return None


# Pattern 3: Catch-all for any library error
def cached_safe(resolver: CapabilityResolver, site_id: int) -> PurchasedProducts | None:
    """Read cached products with comprehensive error handling."""
    try:
        return resolver.get_cached_products(site_id)
    except CacheCorruptError as e:
        print(f"Corrupt cache file: {e.path}")
        print(f"Hint: {e.recovery_hint}")
        return None
    except SitecapsError as e:
        print(f"Unexpected error: {e}")
        print(f"Hint: {e.recovery_hint}")
        return None


# Example usage
if __name__ == "__main__":
    # Site 42 is unknown to the empty source, so the remote reports an
    # error: the cache stays as it was and no products are returned.
    print(asyncio.run(fetch_or_cached(resolver, 42)))
    executor.shutdown()
