"""ADPILOT — Budget Monitor.

Periodic caller of the reconciler: reads portfolios and schedules from
their repositories, reconciles at the clock's current instant, writes back
changed portfolios and retains a bounded window of change-log lines.
"""

from collections import deque
from datetime import timedelta
from typing import Deque, List, Optional

from adpilot.config import settings
from adpilot.core.clock import Clock, SimulationClock
from adpilot.core.logging import get_logger
from adpilot.dayparting.budget_reconciler import reconcile
from adpilot.models.budget_models import ReconciliationResult
from adpilot.repositories import PortfolioRepository, ScheduleRepository

logger = get_logger("dayparting.monitor")


class BudgetMonitor:
    """Applies dayparting schedules to stored portfolios."""

    def __init__(
        self,
        portfolios: PortfolioRepository,
        schedules: ScheduleRepository,
        clock: Clock,
        log_retention: Optional[int] = None,
    ):
        self.portfolios = portfolios
        self.schedules = schedules
        self.clock = clock
        retention = log_retention if log_retention is not None else settings.log_retention
        self._logs: Deque[str] = deque(maxlen=retention)

    @property
    def recent_logs(self) -> List[str]:
        """Retained change-log lines, newest pass first, each pass in input order."""
        return list(self._logs)

    def run_once(self, account_id: Optional[str] = None) -> ReconciliationResult:
        """Reconcile one batch (optionally a single account) at clock.now()."""
        instant = self.clock.now()
        batch = self.portfolios.list(account_id)
        schedules = self.schedules.list([p.id for p in batch])

        result = reconcile(batch, schedules, instant)

        changed = 0
        for before, after in zip(batch, result.portfolios):
            if after.current_budget_cap != before.current_budget_cap:
                self.portfolios.update(after)
                changed += 1
        # Newest pass on the left; overflow falls off the right
        self._logs.extendleft(reversed(result.change_log))

        logger.info(
            f"Budget monitor pass: {len(batch)} portfolios, {changed} updated",
            extra={"instant": instant.isoformat()},
        )
        return result

    def step(
        self, delta: timedelta, account_id: Optional[str] = None
    ) -> ReconciliationResult:
        """Move a simulation clock by delta, then reconcile."""
        if not isinstance(self.clock, SimulationClock):
            raise TypeError("step() requires a SimulationClock")
        self.clock.advance(delta)
        return self.run_once(account_id)
