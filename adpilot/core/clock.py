"""ADPILOT — Clock Sources.

The reconciler never reads the time itself; callers inject a Clock.
SystemClock follows the wall clock, SimulationClock is stepped by hand
or by the scheduler's simulation tick.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional

from adpilot.config import settings


def as_utc(instant: datetime) -> datetime:
    """Return the instant in UTC. Naive datetimes are taken to be UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


class Clock(ABC):
    """Abstract source of the current instant."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as a timezone-aware UTC datetime."""
        ...


class SystemClock(Clock):
    """Real wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class SimulationClock(Clock):
    """Manually or automatically steppable clock for simulations and tests."""

    def __init__(
        self,
        start: Optional[datetime] = None,
        step: Optional[timedelta] = None,
    ):
        self._now = as_utc(start) if start else datetime.now(timezone.utc)
        self.step = step or timedelta(minutes=settings.simulation_step_minutes)

    def now(self) -> datetime:
        return self._now

    def set(self, instant: datetime) -> datetime:
        self._now = as_utc(instant)
        return self._now

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock by delta (negative deltas rewind it)."""
        self._now = self._now + delta
        return self._now

    def tick(self) -> datetime:
        """Advance by the fixed simulation step."""
        return self.advance(self.step)
