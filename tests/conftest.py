"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fakes for the test suite.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from sitecaps.adapters.cache import MemoryCapabilityCache
from sitecaps.adapters.clock import FixedClock
from sitecaps.core.models import FetchResult
from sitecaps.core.ports import ResultSubscriber


T0 = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, policies, and services")
    config.addinivalue_line("markers", "cache: Cache adapters")
    config.addinivalue_line("markers", "channel: Fetch channels, sources, executors")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


class FakeChannel:
    """FetchChannelPort that records requests and delivers results on demand."""

    def __init__(self) -> None:
        self.subscribers: list[ResultSubscriber] = []
        self.dispatched: list[int] = []
        self.dispatch_error: Exception | None = None

    def register(self, subscriber: ResultSubscriber) -> None:
        if subscriber not in self.subscribers:
            self.subscribers.append(subscriber)

    def unregister(self, subscriber: ResultSubscriber) -> None:
        if subscriber in self.subscribers:
            self.subscribers.remove(subscriber)

    def dispatch(self, site_id: int) -> None:
        if self.dispatch_error is not None:
            raise self.dispatch_error
        self.dispatched.append(site_id)

    def deliver(self, result: FetchResult) -> None:
        for subscriber in list(self.subscribers):
            subscriber(result)


class AnsweringChannel(FakeChannel):
    """FakeChannel that answers every dispatch synchronously, inside dispatch()."""

    def __init__(self, answers: dict[int, FetchResult]) -> None:
        super().__init__()
        self.answers = answers

    def dispatch(self, site_id: int) -> None:
        super().dispatch(site_id)
        self.deliver(self.answers[site_id])


@pytest.fixture
def fake_channel() -> FakeChannel:
    """Channel that only delivers when a test calls deliver()."""
    return FakeChannel()


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to a known instant."""
    return FixedClock(T0)


@pytest.fixture
def memory_cache() -> MemoryCapabilityCache:
    """Empty in-memory capability cache."""
    return MemoryCapabilityCache()


@pytest.fixture
def answering_channel() -> type[AnsweringChannel]:
    """Factory for channels that answer each dispatch immediately."""
    return AnsweringChannel
