"""
Calendar clocks used for expiry checks.

Components take a clock instead of calling date.today() themselves, so tests
and the scenario driver can pin "today" to a known day.
"""

from datetime import date
from typing import Protocol


class Clock(Protocol):
    """Anything that can tell the current calendar day."""

    def today(self) -> date:
        ...


class SystemClock:
    """Reads the local calendar date from the system."""

    def today(self) -> date:
        return date.today()

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Always reports the same day."""

    def __init__(self, day: date):
        self._day = day

    def today(self) -> date:
        return self._day

    def set(self, day: date) -> None:
        """Move the clock to another day."""
        self._day = day

    def __repr__(self) -> str:
        return f"FixedClock({self._day.isoformat()})"
