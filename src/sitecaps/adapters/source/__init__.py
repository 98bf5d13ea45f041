"""Capability source adapters."""

from sitecaps.adapters.source.http import DEFAULT_API_BASE, HttpCapabilitySource
from sitecaps.adapters.source.static import StaticCapabilitySource


__all__ = ["DEFAULT_API_BASE", "HttpCapabilitySource", "StaticCapabilitySource"]
