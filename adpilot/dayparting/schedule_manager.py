"""ADPILOT — Schedule Creation.

Validates new schedules before they reach a repository.
"""

import uuid
from typing import Iterable, Optional

from adpilot.models.budget_models import BudgetSchedule, parse_time_of_day
from adpilot.repositories import PortfolioRepository, ScheduleRepository


class DaypartingDisabledError(Exception):
    """Raised when editing schedules of a portfolio with dayparting off."""


def create_schedule(
    portfolios: PortfolioRepository,
    schedules: ScheduleRepository,
    portfolio_id: str,
    name: str,
    scheduled_budget_cap: float,
    start_time_utc: str,
    end_time_utc: str,
    days_of_week: Iterable[int],
    schedule_id: Optional[str] = None,
) -> BudgetSchedule:
    """Create and store a schedule for a dayparting-enabled portfolio.

    Raises:
        InvalidScheduleFormat: start or end is not HH:MM.
        DaypartingDisabledError: the portfolio does not allow dayparting.
        NotFoundError: the portfolio does not exist.
    """
    parse_time_of_day(start_time_utc)
    parse_time_of_day(end_time_utc)

    portfolio = portfolios.get(portfolio_id)
    if not portfolio.dayparting_enabled:
        raise DaypartingDisabledError(
            f"Dayparting is disabled for portfolio {portfolio.name!r}"
        )

    schedule = BudgetSchedule(
        id=schedule_id or f"sched_{uuid.uuid4().hex[:8]}",
        portfolio_id=portfolio_id,
        name=name,
        scheduled_budget_cap=scheduled_budget_cap,
        start_time_utc=start_time_utc,
        end_time_utc=end_time_utc,
        days_of_week=sorted(set(days_of_week)),
        is_active=True,
    )
    return schedules.add(schedule)
