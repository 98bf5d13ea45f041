"""Shared fixtures for integration tests."""

from __future__ import annotations

import threading
from collections.abc import Iterator

import pytest

from sitecaps.adapters.executor import ThreadPoolExecutorAdapter
from sitecaps.core.models import CapabilitySet


class GatedSource:
    """Capability source that blocks each lookup until the test opens the gate."""

    def __init__(self, capabilities: CapabilitySet) -> None:
        self.capabilities = capabilities
        self.gate = threading.Event()
        self.calls: list[int] = []

    def fetch(self, site_id: int) -> CapabilitySet:
        self.calls.append(site_id)
        self.gate.wait(timeout=10)
        return self.capabilities


@pytest.fixture
def executor() -> Iterator[ThreadPoolExecutorAdapter]:
    """Single-worker pool, shut down after the test."""
    with ThreadPoolExecutorAdapter(max_workers=1) as pool:
        yield pool


@pytest.fixture
def gated_source() -> type[GatedSource]:
    """Factory for sources whose answers the test releases explicitly."""
    return GatedSource
