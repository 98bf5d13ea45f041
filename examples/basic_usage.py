"""Basic cached-then-fresh lookup.

This example shows the simplest usage pattern: wire a resolver to the
WordPress.com API and a file cache, then observe a site's products. The
cached value arrives first; a fetched value follows only when the cache
is older than the validity window.
"""

import asyncio
import os
from pathlib import Path

from sitecaps import (
    CapabilityResolver,
    FetchCoordinator,
    FileCapabilityCache,
    HttpCapabilitySource,
    SystemClock,
    ThreadedFetchChannel,
    ThreadPoolExecutorAdapter,
)


async def main(site_id: int) -> None:
    with (
        HttpCapabilitySource(token=os.environ.get("SITECAPS_TOKEN")) as source,
        ThreadPoolExecutorAdapter(max_workers=1) as executor,
    ):
        resolver = CapabilityResolver(
            cache=FileCapabilityCache(Path("./data")),
            coordinator=FetchCoordinator(ThreadedFetchChannel(source, executor)),
            clock=SystemClock(),
        )

        # First element: cache. Second (only if stale): remote.
        async for products in resolver.observe_products(site_id):
            print(f"scan={products.scan} backup={products.backup}")


if __name__ == "__main__":
    asyncio.run(main(42))
