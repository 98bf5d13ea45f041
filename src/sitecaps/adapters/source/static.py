"""Dictionary-backed capability source."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from sitecaps.core.exceptions import CapabilitySourceError
from sitecaps.core.models import Capability, CapabilitySet


class StaticCapabilitySource:
    """Serves capabilities from a fixed mapping of site id to capabilities.

    Handy for local development and tests. Unknown sites fail the same way
    a remote 404 would.
    """

    def __init__(self, capabilities: Mapping[int, Iterable[Capability]]) -> None:
        self._capabilities = {
            site_id: frozenset(caps) for site_id, caps in capabilities.items()
        }

    def fetch(self, site_id: int) -> CapabilitySet:
        try:
            return self._capabilities[site_id]
        except KeyError:
            raise CapabilitySourceError(
                f"Unknown site {site_id}", site_id=site_id, status_code=404
            ) from None
