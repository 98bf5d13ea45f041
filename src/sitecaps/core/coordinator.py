"""Single-flight coordination of remote capability fetches.

The fetch channel answers on its own worker thread by calling every
registered subscriber. FetchCoordinator turns that callback into a
one-shot Future for the caller that started the fetch, and refuses to
start a second fetch while one is outstanding.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sitecaps.core.exceptions import FetchInProgressError


if TYPE_CHECKING:
    from sitecaps.core.models import FetchResult
    from sitecaps.core.ports import FetchChannelPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PendingRequest:
    """The one outstanding fetch: who asked, and where to deliver the answer."""

    site_id: int
    future: Future[FetchResult]


class FetchCoordinator:
    """Serializes capability fetches into a single outstanding request.

    Attributes:
        match_site_id: When True, results for a site other than the pending
            one are logged and dropped, and the request stays pending. When
            False, any delivered result resumes the pending caller.
    """

    def __init__(self, channel: FetchChannelPort, *, match_site_id: bool = True) -> None:
        self._channel = channel
        self.match_site_id = match_site_id
        self._lock = threading.Lock()
        self._pending: PendingRequest | None = None

    @property
    def in_flight(self) -> bool:
        """Whether a fetch is currently outstanding."""
        with self._lock:
            return self._pending is not None

    @property
    def pending_site_id(self) -> int | None:
        """Site of the outstanding fetch, or None."""
        with self._lock:
            return self._pending.site_id if self._pending is not None else None

    def begin_fetch(self, site_id: int) -> Future[FetchResult]:
        """Start a remote fetch for site_id.

        Args:
            site_id: Remote identifier of the site.

        Returns:
            A Future resolved with the FetchResult once the channel delivers it.

        Raises:
            FetchInProgressError: If another fetch is still outstanding.
        """
        future: Future[FetchResult] = Future()
        with self._lock:
            if self._pending is not None:
                raise FetchInProgressError(site_id, self._pending.site_id)
            self._channel.register(self.on_result)
            self._pending = PendingRequest(site_id=site_id, future=future)

        logger.debug("Fetching capabilities for site %s", site_id)
        try:
            self._channel.dispatch(site_id)
        except Exception:
            self._abandon(future)
            raise
        return future

    def on_result(self, result: FetchResult) -> None:
        """Deliver a result from the channel to the pending caller.

        Called by the channel, possibly from a worker thread.
        """
        with self._lock:
            pending = self._pending
            if pending is None:
                logger.warning(
                    "Dropping capabilities for site %s: no fetch pending",
                    result.site_id,
                )
                return
            if self.match_site_id and result.site_id != pending.site_id:
                logger.warning(
                    "Dropping capabilities for site %s: waiting for site %s",
                    result.site_id,
                    pending.site_id,
                )
                return
            self._channel.unregister(self.on_result)
            self._pending = None

        # Resolve outside the lock; done-callbacks may start the next fetch.
        if not pending.future.set_running_or_notify_cancel():
            return
        pending.future.set_result(result)

    def cancel(self) -> bool:
        """Abandon the outstanding fetch, if any.

        The pending Future is cancelled and a result arriving later is
        dropped.

        Returns:
            True if a pending fetch was abandoned.
        """
        with self._lock:
            pending = self._pending
        if pending is None:
            return False
        return self._abandon(pending.future)

    def _abandon(self, future: Future[FetchResult]) -> bool:
        with self._lock:
            if self._pending is None or self._pending.future is not future:
                return False
            self._channel.unregister(self.on_result)
            self._pending = None
        future.cancel()
        return True
