"""ADPILOT — Metrics Calculator.

Reduces raw records or bucketed chart points into a single summary.
Counters are summed first and ratios derived afterwards, so totals over
buckets equal totals over the underlying records.
"""

from typing import Iterable, Union

from adpilot.analyzer.aggregator import AVERAGE_ORDER_VALUE
from adpilot.models.performance_models import (
    AggregatedMetrics,
    ChartDataPoint,
    PerformanceRecord,
)

MetricSource = Union[PerformanceRecord, ChartDataPoint]


def _total_sales(item: MetricSource) -> float:
    # Chart points name the field "sales"
    if isinstance(item, ChartDataPoint):
        return item.sales
    return item.total_sales


def totals(items: Iterable[MetricSource]) -> AggregatedMetrics:
    """Sum counters across items and derive efficiency ratios."""
    impressions = 0
    clicks = 0
    spend = 0.0
    ppc_sales = 0.0
    total_sales = 0.0

    for item in items:
        impressions += item.impressions
        clicks += item.clicks
        spend += item.spend
        ppc_sales += item.ppc_sales
        total_sales += _total_sales(item)

    orders = ppc_sales / AVERAGE_ORDER_VALUE

    return AggregatedMetrics(
        impressions=impressions,
        clicks=clicks,
        spend=spend,
        ppc_sales=ppc_sales,
        total_sales=total_sales,
        acos=(spend / ppc_sales * 100) if ppc_sales > 0 else 0.0,
        tacos=(spend / total_sales * 100) if total_sales > 0 else 0.0,
        ctr=(clicks / impressions * 100) if impressions > 0 else 0.0,
        cvr=(orders / clicks * 100) if clicks > 0 else 0.0,
        ppc_percent_of_sales=(
            (ppc_sales / total_sales * 100) if total_sales > 0 else 0.0
        ),
        roas=(ppc_sales / spend) if spend > 0 else 0.0,
        cpc=(spend / clicks) if clicks > 0 else 0.0,
    )
