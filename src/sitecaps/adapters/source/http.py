"""HTTP capability source for the WordPress.com REST API."""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING

import httpx

from sitecaps.core.exceptions import CapabilitySourceError
from sitecaps.core.models import capabilities_from_names


if TYPE_CHECKING:
    from sitecaps.core.models import CapabilitySet

DEFAULT_API_BASE = "https://public-api.wordpress.com/wpcom/v2"


class HttpCapabilitySource:
    """Looks up site capabilities via ``GET /sites/{id}/rewind/capabilities``.

    The endpoint answers with ``{"capabilities": ["backup", "scan", ...]}``.
    Names this library doesn't know are ignored.

    Usage:
        with HttpCapabilitySource(token=os.environ["SITECAPS_TOKEN"]) as source:
            caps = source.fetch(42)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE,
        token: str | None = None,
        *,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            base_url: API root, without trailing slash.
            token: Optional bearer token.
            timeout: HTTP request timeout in seconds.
            client: Client to use instead of creating one. Its lifetime
                stays with the caller.
        """
        self.base_url = base_url.rstrip("/")
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._headers = headers

    def __enter__(self) -> HttpCapabilitySource:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager and close the HTTP client."""
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this source created it."""
        if self._owns_client:
            self._client.close()

    def fetch(self, site_id: int) -> CapabilitySet:
        """Fetch the capabilities granted to a site.

        Args:
            site_id: Remote identifier of the site.

        Returns:
            The site's capability set.

        Raises:
            CapabilitySourceError: On transport failure, a non-2xx response,
                or a malformed body.
        """
        url = f"{self.base_url}/sites/{site_id}/rewind/capabilities"
        try:
            response = self._client.get(url, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CapabilitySourceError(
                f"Capabilities request for site {site_id} failed with "
                f"HTTP {e.response.status_code}",
                site_id=site_id,
                status_code=e.response.status_code,
                cause=e,
            ) from e
        except httpx.HTTPError as e:
            raise CapabilitySourceError(
                f"Capabilities request for site {site_id} failed: {e}",
                site_id=site_id,
                cause=e,
            ) from e

        try:
            names = response.json()["capabilities"]
        except (ValueError, KeyError, TypeError) as e:
            raise CapabilitySourceError(
                f"Malformed capabilities response for site {site_id}",
                site_id=site_id,
                status_code=response.status_code,
                cause=e,
            ) from e
        if not isinstance(names, list):
            raise CapabilitySourceError(
                f"Malformed capabilities response for site {site_id}",
                site_id=site_id,
                status_code=response.status_code,
            )
        return capabilities_from_names(str(name) for name in names)
