"""ADPILOT — Schedule Evaluator.

Selects the budget schedule that applies to a portfolio at an instant.

Windows are half-open ``[start, end)`` in UTC minutes of the day.
A window whose end is earlier than its start runs overnight: it covers
``[start, 24:00)`` on each listed day and ``[00:00, end)`` on the following
day. A window with ``start == end`` is empty.
When several schedules match, the first one in the given order wins.
"""

from datetime import datetime
from typing import Iterable, Optional

from adpilot.core.clock import as_utc
from adpilot.models.budget_models import BudgetSchedule


def utc_weekday(instant: datetime) -> int:
    """Day of week in UTC with 0=Sunday … 6=Saturday."""
    return (as_utc(instant).weekday() + 1) % 7


def utc_minute_of_day(instant: datetime) -> int:
    utc = as_utc(instant)
    return utc.hour * 60 + utc.minute


def schedule_matches(schedule: BudgetSchedule, weekday: int, minute: int) -> bool:
    """Check whether a schedule's window covers (weekday, minute)."""
    start, end = schedule.start_minute, schedule.end_minute
    days = schedule.days_of_week

    if start <= end:
        return weekday in days and start <= minute < end

    # Overnight: evening part on the listed day, early part on the next day
    if minute >= start:
        return weekday in days
    if minute < end:
        return (weekday - 1) % 7 in days
    return False


def evaluate(
    schedules: Iterable[BudgetSchedule],
    portfolio_id: str,
    instant: datetime,
) -> Optional[BudgetSchedule]:
    """Return the active schedule for a portfolio at an instant, if any."""
    weekday = utc_weekday(instant)
    minute = utc_minute_of_day(instant)

    for schedule in schedules:
        if schedule.portfolio_id != portfolio_id or not schedule.is_active:
            continue
        if schedule_matches(schedule, weekday, minute):
            return schedule
    return None
