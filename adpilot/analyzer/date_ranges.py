"""ADPILOT — Reporting Date Ranges.

Resolves dashboard / report range options into inclusive YYYY-MM-DD bounds
and scopes performance records to a range, account or portfolio.
"""

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, List, Optional

from adpilot.models.performance_models import PerformanceRecord


class DateRangeOption(str, Enum):
    LAST_7_DAYS = "LAST_7_DAYS"
    LAST_30_DAYS = "LAST_30_DAYS"
    THIS_MONTH = "THIS_MONTH"
    LAST_90_DAYS = "LAST_90_DAYS"  # Client report window
    LAST_COMPLETE_MONTH = "LAST_COMPLETE_MONTH"


def _validate_date(d: Optional[str]) -> Optional[str]:
    """Return the date as zero-padded YYYY-MM-DD if valid, else None."""
    if not d:
        return None
    try:
        return datetime.strptime(d, "%Y-%m-%d").strftime("%Y-%m-%d")
    except ValueError:
        return None


def resolve_date_range(
    option: Optional[DateRangeOption] = None,
    today: Optional[date] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> tuple[str, str]:
    """Resolve range parameters into inclusive (start, end) strings.

    Explicit, valid ``start_date`` and ``end_date`` take precedence.
    Without an option the last 30 days are used.
    """
    today = today or datetime.now(timezone.utc).date()

    start_date = _validate_date(start_date)
    end_date = _validate_date(end_date)
    if start_date and end_date:
        return start_date, end_date

    first_of_month = today.replace(day=1)
    last_month_end = first_of_month - timedelta(days=1)
    mapping = {
        DateRangeOption.LAST_7_DAYS: (today - timedelta(days=7), today),
        DateRangeOption.LAST_30_DAYS: (today - timedelta(days=30), today),
        DateRangeOption.THIS_MONTH: (first_of_month, today),
        DateRangeOption.LAST_90_DAYS: (today - timedelta(days=90), today),
        DateRangeOption.LAST_COMPLETE_MONTH: (
            last_month_end.replace(day=1),
            last_month_end,
        ),
    }
    s, e = mapping.get(option, mapping[DateRangeOption.LAST_30_DAYS])
    return s.strftime("%Y-%m-%d"), e.strftime("%Y-%m-%d")


def filter_records(
    records: Iterable[PerformanceRecord],
    start: Optional[str] = None,
    end: Optional[str] = None,
    account_id: Optional[str] = None,
    portfolio_id: Optional[str] = None,
) -> List[PerformanceRecord]:
    """Select records within [start, end] and scope, sorted by date."""
    selected = [
        r
        for r in records
        if (start is None or r.date >= start)
        and (end is None or r.date <= end)
        and (account_id is None or r.account_id == account_id)
        and (portfolio_id is None or r.portfolio_id == portfolio_id)
    ]
    return sorted(selected, key=lambda r: r.date)
