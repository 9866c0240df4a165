"""Injectable time source.

Services never call ``datetime.now()`` directly; they receive a Clock so
month rollover can be driven deterministically in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current local time."""
        raise NotImplementedError


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Clock frozen at a given instant until moved explicitly."""

    def __init__(self, fixed_time: datetime):
        self._now = fixed_time

    def now(self) -> datetime:
        return self._now

    def set_time(self, value: datetime) -> None:
        self._now = value

    def advance(self, *, days: int = 0, seconds: int = 0) -> None:
        self._now = self._now + timedelta(days=days, seconds=seconds)
