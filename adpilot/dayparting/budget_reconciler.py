"""ADPILOT — Budget Reconciler.

Brings every portfolio's current cap in line with its schedules at an
instant. One log line is produced per changed portfolio, in input order:

  [2025-01-15T14:30:00.000Z] Portfolio "Brand": Changed budget from $500 to $1000 (Schedule: Peak)
"""

from datetime import datetime
from typing import List, Optional, Sequence

from adpilot.core.clock import as_utc
from adpilot.core.logging import get_logger
from adpilot.dayparting.schedule_evaluator import evaluate
from adpilot.models.budget_models import (
    BudgetSchedule,
    Portfolio,
    ReconciliationResult,
)

logger = get_logger("dayparting.reconciler")

DEFAULT_REASON = "Reverting to Default"


def format_instant(instant: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a Z suffix."""
    return as_utc(instant).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_amount(value: float) -> str:
    """Render whole amounts without a decimal part (500, not 500.0)."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_change(
    instant: datetime,
    portfolio: Portfolio,
    new_cap: float,
    schedule: Optional[BudgetSchedule],
) -> str:
    reason = f"Schedule: {schedule.name}" if schedule else DEFAULT_REASON
    return (
        f"[{format_instant(instant)}] Portfolio \"{portfolio.name}\": "
        f"Changed budget from ${format_amount(portfolio.current_budget_cap)} "
        f"to ${format_amount(new_cap)} ({reason})"
    )


def reconcile(
    portfolios: Sequence[Portfolio],
    schedules: Sequence[BudgetSchedule],
    instant: datetime,
) -> ReconciliationResult:
    """Compute each portfolio's cap at ``instant``.

    Unchanged portfolios are returned as given; changed ones are copies.
    The ``dayparting_enabled`` flag is not consulted here.
    """
    updated: List[Portfolio] = []
    change_log: List[str] = []

    for portfolio in portfolios:
        override = evaluate(schedules, portfolio.id, instant)
        desired = (
            override.scheduled_budget_cap if override else portfolio.default_budget_cap
        )

        if desired == portfolio.current_budget_cap:
            updated.append(portfolio)
            continue

        line = format_change(instant, portfolio, desired, override)
        change_log.append(line)
        updated.append(portfolio.model_copy(update={"current_budget_cap": desired}))
        logger.info(
            line,
            extra={
                "portfolio_id": portfolio.id,
                "schedule_id": override.id if override else None,
                "instant": format_instant(instant),
            },
        )

    logger.debug(
        f"Reconciled {len(updated)} portfolios, {len(change_log)} changed"
    )
    return ReconciliationResult(portfolios=updated, change_log=change_log)
