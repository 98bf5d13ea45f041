"""Clock adapters implementing ClockPort."""

from sitecaps.adapters.clock.clocks import FixedClock, SystemClock


__all__ = ["FixedClock", "SystemClock"]
