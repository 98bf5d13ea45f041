"""Fetch channel adapters."""

from sitecaps.adapters.channel.threaded import ThreadedFetchChannel


__all__ = ["ThreadedFetchChannel"]
