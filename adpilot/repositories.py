"""ADPILOT — Repository Interfaces & In-Memory Stores.

The engines never own master collections. They receive batches read
through these interfaces and hand back new state to be written.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from adpilot.models.budget_models import BudgetSchedule, Portfolio
from adpilot.models.performance_models import PerformanceRecord
from adpilot.core.logging import get_logger

logger = get_logger("repositories")


class NotFoundError(KeyError):
    """Raised when an entity id is not present in a repository."""


class PortfolioRepository(ABC):
    @abstractmethod
    def list(self, account_id: Optional[str] = None) -> List[Portfolio]: ...

    @abstractmethod
    def get(self, portfolio_id: str) -> Portfolio: ...

    @abstractmethod
    def update(self, portfolio: Portfolio) -> Portfolio: ...

    def set_dayparting(self, portfolio_id: str, enabled: bool) -> Portfolio:
        """Toggle whether operators may edit a portfolio's schedules."""
        portfolio = self.get(portfolio_id)
        return self.update(portfolio.model_copy(update={"dayparting_enabled": enabled}))


class ScheduleRepository(ABC):
    @abstractmethod
    def list(self, portfolio_ids: Optional[Iterable[str]] = None) -> List[BudgetSchedule]:
        """Schedules in declaration order, which is also their priority."""
        ...

    @abstractmethod
    def get(self, schedule_id: str) -> BudgetSchedule: ...

    @abstractmethod
    def add(self, schedule: BudgetSchedule) -> BudgetSchedule: ...

    @abstractmethod
    def delete(self, schedule_id: str) -> None: ...


class PerformanceRepository(ABC):
    @abstractmethod
    def list(self, account_id: Optional[str] = None) -> List[PerformanceRecord]: ...


# ─────────────────────────────────────────────
# IN-MEMORY IMPLEMENTATIONS
# ─────────────────────────────────────────────


class InMemoryPortfolioRepository(PortfolioRepository):
    def __init__(self, portfolios: Iterable[Portfolio] = ()):
        self._items: Dict[str, Portfolio] = {p.id: p for p in portfolios}

    def list(self, account_id: Optional[str] = None) -> List[Portfolio]:
        return [
            p
            for p in self._items.values()
            if account_id is None or p.account_id == account_id
        ]

    def get(self, portfolio_id: str) -> Portfolio:
        try:
            return self._items[portfolio_id]
        except KeyError:
            raise NotFoundError(f"Portfolio {portfolio_id} not found") from None

    def update(self, portfolio: Portfolio) -> Portfolio:
        if portfolio.id not in self._items:
            raise NotFoundError(f"Portfolio {portfolio.id} not found")
        self._items[portfolio.id] = portfolio
        return portfolio


class InMemoryScheduleRepository(ScheduleRepository):
    def __init__(self, schedules: Iterable[BudgetSchedule] = ()):
        self._items: Dict[str, BudgetSchedule] = {s.id: s for s in schedules}

    def list(self, portfolio_ids: Optional[Iterable[str]] = None) -> List[BudgetSchedule]:
        if portfolio_ids is None:
            return list(self._items.values())
        wanted = set(portfolio_ids)
        return [s for s in self._items.values() if s.portfolio_id in wanted]

    def get(self, schedule_id: str) -> BudgetSchedule:
        try:
            return self._items[schedule_id]
        except KeyError:
            raise NotFoundError(f"Schedule {schedule_id} not found") from None

    def add(self, schedule: BudgetSchedule) -> BudgetSchedule:
        self._items[schedule.id] = schedule
        logger.info(
            f"Added schedule {schedule.name!r}",
            extra={"schedule_id": schedule.id, "portfolio_id": schedule.portfolio_id},
        )
        return schedule

    def delete(self, schedule_id: str) -> None:
        if self._items.pop(schedule_id, None) is None:
            raise NotFoundError(f"Schedule {schedule_id} not found")
        logger.info("Deleted schedule", extra={"schedule_id": schedule_id})


class InMemoryPerformanceRepository(PerformanceRepository):
    def __init__(self, records: Iterable[PerformanceRecord] = ()):
        self._records: List[PerformanceRecord] = list(records)

    def list(self, account_id: Optional[str] = None) -> List[PerformanceRecord]:
        return [
            r for r in self._records if account_id is None or r.account_id == account_id
        ]
