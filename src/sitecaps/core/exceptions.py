"""Domain exceptions for sitecaps.

All library errors inherit from SitecapsError, allowing users to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from pathlib import Path


class SitecapsError(Exception):
    """Base class for all sitecaps exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class FetchInProgressError(SitecapsError):
    """Raised when a capability fetch is started while another is pending.

    Only one remote fetch may be outstanding per coordinator. The second
    caller is rejected rather than queued.

    Attributes:
        site_id: The site the rejected fetch was issued for.
        pending_site_id: The site of the request that is still outstanding.
    """

    def __init__(self, site_id: int, pending_site_id: int) -> None:
        self.site_id = site_id
        self.pending_site_id = pending_site_id
        super().__init__("Request already in progress.")

    @property
    def recovery_hint(self) -> str:
        """Warn against blind retries."""
        return (
            f"A fetch for site {self.pending_site_id} is still outstanding; "
            "wait for it to finish instead of retrying in a loop"
        )


class FetchTimeoutError(SitecapsError):
    """Raised when the remote channel does not answer within fetch_timeout.

    Attributes:
        site_id: The site the abandoned fetch was issued for.
        timeout: The configured timeout in seconds.
    """

    def __init__(self, site_id: int, timeout: float) -> None:
        self.site_id = site_id
        self.timeout = timeout
        super().__init__(
            f"No capabilities received for site {site_id} after {timeout:g}s"
        )

    @property
    def recovery_hint(self) -> str:
        """Suggest raising the timeout."""
        return "Check connectivity or increase fetch_timeout in [tool.sitecaps]"


class CapabilitySourceError(SitecapsError):
    """Raised by capability sources when the remote lookup fails.

    Fetch channels convert this into an error FetchResult, so resolver
    callers never see it directly.

    Attributes:
        site_id: The site being looked up.
        status_code: HTTP status code, if the failure came from a response.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        site_id: int,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.site_id = site_id
        self.status_code = status_code
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str | None:
        """Suggest checking credentials for auth failures."""
        if self.status_code in (401, 403):
            return "Check the SITECAPS_TOKEN environment variable"
        if self.status_code == 404:
            return f"Verify that site {self.site_id} exists"
        return None


class CacheError(SitecapsError):
    """Base class for cache-related errors."""

    pass


class CacheCorruptError(CacheError):
    """Raised when a cached capability file is corrupt or unreadable.

    Attributes:
        site_id: The site whose cache entry is corrupt.
        path: The path to the corrupt file.
    """

    def __init__(
        self,
        message: str,
        site_id: int,
        path: Path,
        cause: Exception | None = None,
    ) -> None:
        self.site_id = site_id
        self.path = path
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest clearing the corrupt cache entry."""
        return f"Run 'sitecaps clear {self.site_id}' and fetch again"


class ConfigurationError(SitecapsError):
    """Raised for configuration problems (invalid or unknown settings)."""

    pass
