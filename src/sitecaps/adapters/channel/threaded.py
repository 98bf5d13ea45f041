"""Fetch channel that runs a capability source on a worker pool."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from sitecaps.core.exceptions import CapabilitySourceError
from sitecaps.core.models import FetchResult


if TYPE_CHECKING:
    from sitecaps.core.ports import (
        CapabilitySourcePort,
        ExecutorPort,
        ResultSubscriber,
    )

logger = logging.getLogger(__name__)


class ThreadedFetchChannel:
    """Event-bus style FetchChannelPort backed by an executor.

    dispatch() submits the source lookup to the executor and returns at
    once. When the lookup finishes, the worker thread delivers a
    FetchResult to every subscriber registered at that moment. Source
    failures are delivered as error results rather than raised.

    Example:
        >>> with ThreadPoolExecutorAdapter(max_workers=1) as executor:
        ...     channel = ThreadedFetchChannel(source, executor)
        ...     coordinator = FetchCoordinator(channel)
    """

    def __init__(self, source: CapabilitySourcePort, executor: ExecutorPort) -> None:
        self._source = source
        self._executor = executor
        self._subscribers: list[ResultSubscriber] = []
        self._lock = threading.Lock()

    def register(self, subscriber: ResultSubscriber) -> None:
        """Add subscriber; registering twice has no extra effect."""
        with self._lock:
            if subscriber not in self._subscribers:
                self._subscribers.append(subscriber)

    def unregister(self, subscriber: ResultSubscriber) -> None:
        """Remove subscriber if registered."""
        with self._lock:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def dispatch(self, site_id: int) -> None:
        """Look up site_id in the background and publish the result.

        If the executor refuses the work (for example after shutdown), an
        error result is published from the calling thread instead.
        """
        try:
            self._executor.submit(self._run, site_id)
        except RuntimeError as e:
            logger.warning("Could not schedule lookup for site %s: %s", site_id, e)
            self.publish(FetchResult.failed(site_id, f"not scheduled: {e}"))

    def _run(self, site_id: int) -> None:
        try:
            capabilities = self._source.fetch(site_id)
        except CapabilitySourceError as e:
            logger.debug("Capability lookup failed for site %s: %s", site_id, e)
            result = FetchResult.failed(site_id, str(e))
        except Exception as e:
            # Still publish, or the waiting caller would never resume.
            logger.exception("Unexpected error looking up site %s", site_id)
            result = FetchResult.failed(site_id, f"unexpected error: {e}")
        else:
            result = FetchResult.ok(site_id, capabilities)
        self.publish(result)

    def publish(self, result: FetchResult) -> None:
        """Deliver result to a snapshot of the current subscribers."""
        with self._lock:
            subscribers = list(self._subscribers)
        for subscriber in subscribers:
            subscriber(result)
