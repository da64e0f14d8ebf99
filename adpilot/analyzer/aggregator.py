"""ADPILOT — Aggregation Engine.

Buckets raw daily performance records into Daily, Weekly or Monthly
points. Rates are always recomputed from the summed totals of a bucket,
never averaged across records.
"""

from datetime import datetime, timedelta
from typing import Dict, Iterable, List

from adpilot.models.performance_models import (
    ChartDataPoint,
    Granularity,
    PerformanceRecord,
)
from adpilot.core.logging import get_logger

logger = get_logger("analyzer.aggregator")

# Orders are not ingested; they are estimated as ppc_sales / AOV.
# This is an approximation, not a count.
AVERAGE_ORDER_VALUE = 25.0


def bucket_key(date_str: str, granularity: Granularity) -> str:
    """Map a YYYY-MM-DD date onto its bucket key.

    Keys sort lexicographically in chronological order.
    """
    if granularity == Granularity.MONTHLY:
        return date_str[:7]

    if granularity == Granularity.WEEKLY:
        day = datetime.strptime(date_str, "%Y-%m-%d")
        days_since_sunday = (day.weekday() + 1) % 7
        return (day - timedelta(days=days_since_sunday)).strftime("%Y-%m-%d")

    return date_str


def _with_rates(point: ChartDataPoint) -> ChartDataPoint:
    spend, clicks = point.spend, point.clicks
    return point.model_copy(
        update={
            "acos": (spend / point.ppc_sales * 100) if point.ppc_sales > 0 else 0.0,
            "tacos": (spend / point.sales * 100) if point.sales > 0 else 0.0,
            "ctr": (clicks / point.impressions * 100) if point.impressions > 0 else 0.0,
            "cvr": (point.orders / clicks * 100) if clicks > 0 else 0.0,
            "cpc": (spend / clicks) if clicks > 0 else 0.0,
        }
    )


def bucket(
    records: Iterable[PerformanceRecord],
    granularity: Granularity,
) -> List[ChartDataPoint]:
    """Aggregate records into chart points sorted ascending by bucket key."""
    granularity = Granularity(granularity)
    buckets: Dict[str, ChartDataPoint] = {}

    for r in records:
        key = bucket_key(r.date, granularity)
        entry = buckets.get(key)
        if entry is None:
            entry = buckets[key] = ChartDataPoint(date=key)
        entry.spend += r.spend
        entry.sales += r.total_sales
        entry.ppc_sales += r.ppc_sales
        entry.impressions += r.impressions
        entry.clicks += r.clicks
        entry.orders += r.ppc_sales / AVERAGE_ORDER_VALUE

    points = [_with_rates(p) for p in buckets.values()]
    points.sort(key=lambda p: p.date)

    logger.debug(
        f"Bucketed records into {len(points)} points",
        extra={"granularity": granularity.value},
    )
    return points


def format_bucket_label(key: str, granularity: Granularity) -> str:
    """Human-readable label for a bucket key, e.g. "Week of Jan 5"."""
    if granularity == Granularity.MONTHLY:
        month = datetime.strptime(key, "%Y-%m")
        return month.strftime("%B %Y")

    day = datetime.strptime(key, "%Y-%m-%d")
    label = f"{day.strftime('%b')} {day.day}"
    if granularity == Granularity.WEEKLY:
        return f"Week of {label}"
    return label
