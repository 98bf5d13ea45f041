"""Local development without network access.

StaticCapabilitySource and MemoryCapabilityCache stand in for the remote
API and the file cache, and FixedClock makes staleness deterministic.
"""

import asyncio
from datetime import timedelta

from sitecaps import (
    Capability,
    CapabilityResolver,
    FetchCoordinator,
    FixedClock,
    MemoryCapabilityCache,
    StaticCapabilitySource,
    SynchronousExecutor,
    ThreadedFetchChannel,
)


source = StaticCapabilitySource(
    {
        42: [Capability.SCAN, Capability.BACKUP_DAILY],
        7: [Capability.ANTISPAM],
    }
)
clock = FixedClock()
resolver = CapabilityResolver(
    cache=MemoryCapabilityCache(),
    coordinator=FetchCoordinator(ThreadedFetchChannel(source, SynchronousExecutor())),
    clock=clock,
)


async def show(site_id: int) -> list[str]:
    return [
        f"scan={p.scan} backup={p.backup}"
        async for p in resolver.observe_products(site_id)
    ]


if __name__ == "__main__":
    print(asyncio.run(show(42)))  # cached (empty), then fetched
    print(asyncio.run(show(42)))  # fresh: cached only
    clock.advance(timedelta(minutes=15))
    print(asyncio.run(show(42)))  # stale again: cached, then fetched
