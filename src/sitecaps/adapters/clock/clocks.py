"""Clock adapters implementing ClockPort."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        """Return the current UTC time."""
        return datetime.now(UTC)


class FixedClock:
    """A clock that only moves when told to.

    Used in tests and examples to control cache freshness.

    Example:
        >>> clock = FixedClock(datetime(2024, 1, 1, tzinfo=UTC))
        >>> clock.advance(timedelta(minutes=20))
        >>> clock.now().minute
        20
    """

    def __init__(self, at: datetime | None = None) -> None:
        """Initialize the clock.

        Args:
            at: Starting time. Defaults to the current UTC time.
        """
        self._now = at if at is not None else datetime.now(UTC)

    def now(self) -> datetime:
        """Return the clock's current time."""
        return self._now

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward by delta."""
        self._now += delta

    def set(self, at: datetime) -> None:
        """Jump the clock to a specific time."""
        self._now = at
