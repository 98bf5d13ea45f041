"""Mapping from capabilities to purchased product flags."""

from __future__ import annotations

from collections.abc import Iterable

from sitecaps.core.models import Capability, PurchasedProducts


SCAN_CAPABILITIES = frozenset({Capability.SCAN})
BACKUP_CAPABILITIES = frozenset(
    {Capability.BACKUP, Capability.BACKUP_DAILY, Capability.BACKUP_REALTIME}
)


def map_products(capabilities: Iterable[Capability]) -> PurchasedProducts:
    """Derive product flags from a site's capabilities.

    Args:
        capabilities: Capabilities granted to the site. May be empty.

    Returns:
        PurchasedProducts with scan set if SCAN is present, and backup set
        if any of the backup tiers is present.
    """
    caps = frozenset(capabilities)
    return PurchasedProducts(
        scan=not caps.isdisjoint(SCAN_CAPABILITIES),
        backup=not caps.isdisjoint(BACKUP_CAPABILITIES),
    )
