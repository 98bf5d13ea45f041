"""sitecaps - Cached, single-flight lookup of site capabilities.

This library returns a site's purchased products (scan, backup) straight
from a local cache and refreshes them from the remote API when the cache
is older than the validity window. Only one remote fetch runs at a time.

Example:
    >>> from sitecaps import (
    ...     CapabilityResolver, FetchCoordinator, FileCapabilityCache,
    ...     HttpCapabilitySource, SystemClock, ThreadedFetchChannel,
    ...     ThreadPoolExecutorAdapter,
    ... )
    >>> channel = ThreadedFetchChannel(HttpCapabilitySource(), ThreadPoolExecutorAdapter(1))
    >>> resolver = CapabilityResolver(
    ...     cache=FileCapabilityCache(Path("./data")),
    ...     coordinator=FetchCoordinator(channel),
    ...     clock=SystemClock(),
    ... )
    >>> async for products in resolver.observe_products(42):
    ...     print(products)
"""

from sitecaps.adapters.cache import FileCapabilityCache, MemoryCapabilityCache
from sitecaps.adapters.channel import ThreadedFetchChannel
from sitecaps.adapters.clock import FixedClock, SystemClock
from sitecaps.adapters.executor import SynchronousExecutor, ThreadPoolExecutorAdapter
from sitecaps.adapters.source import HttpCapabilitySource, StaticCapabilitySource
from sitecaps.config import ResolverConfig, find_project_root, load_config
from sitecaps.core.coordinator import FetchCoordinator
from sitecaps.core.exceptions import (
    CacheCorruptError,
    CacheError,
    CapabilitySourceError,
    ConfigurationError,
    FetchInProgressError,
    FetchTimeoutError,
    SitecapsError,
)
from sitecaps.core.freshness import DEFAULT_VALIDITY_WINDOW, is_fresh
from sitecaps.core.models import (
    CacheEntry,
    Capability,
    CapabilitySet,
    FetchResult,
    PurchasedProducts,
)
from sitecaps.core.ports import (
    CapabilityCachePort,
    CapabilitySourcePort,
    ClockPort,
    ExecutorPort,
    FetchChannelPort,
)
from sitecaps.core.products import map_products
from sitecaps.core.services import CapabilityResolver


__version__ = "0.1.0"

__all__ = [
    "DEFAULT_VALIDITY_WINDOW",
    "CacheCorruptError",
    "CacheEntry",
    "CacheError",
    "Capability",
    "CapabilityCachePort",
    "CapabilityResolver",
    "CapabilitySet",
    "CapabilitySourceError",
    "CapabilitySourcePort",
    "ClockPort",
    "ConfigurationError",
    "ExecutorPort",
    "FetchChannelPort",
    "FetchCoordinator",
    "FetchInProgressError",
    "FetchResult",
    "FetchTimeoutError",
    "FileCapabilityCache",
    "FixedClock",
    "HttpCapabilitySource",
    "MemoryCapabilityCache",
    "PurchasedProducts",
    "ResolverConfig",
    "SitecapsError",
    "StaticCapabilitySource",
    "SynchronousExecutor",
    "SystemClock",
    "ThreadPoolExecutorAdapter",
    "ThreadedFetchChannel",
    "__version__",
    "find_project_root",
    "is_fresh",
    "load_config",
    "map_products",
]
