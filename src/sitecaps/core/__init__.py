"""Core domain module for sitecaps.

This module contains pure Python domain models, policies and port
definitions. It has no I/O dependencies and can be tested in isolation.
"""

from sitecaps.core.coordinator import FetchCoordinator
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
    FetchChannelPort,
)
from sitecaps.core.products import map_products


__all__ = [
    "DEFAULT_VALIDITY_WINDOW",
    "CacheEntry",
    "Capability",
    "CapabilityCachePort",
    "CapabilitySet",
    "CapabilitySourcePort",
    "ClockPort",
    "FetchChannelPort",
    "FetchCoordinator",
    "FetchResult",
    "PurchasedProducts",
    "is_fresh",
    "map_products",
]
