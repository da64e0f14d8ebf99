"""
Tests for the Metrics Calculator

Range-wide totals over raw records and over bucketed points.
"""

import pytest

from adpilot.analyzer.aggregator import bucket
from adpilot.analyzer.metrics_calculator import totals
from adpilot.models.performance_models import AggregatedMetrics, Granularity
from tests.conftest import make_record


class TestTotals:
    """Summation and ratios"""

    def test_empty(self):
        assert totals([]) == AggregatedMetrics()

    def test_ratios(self):
        summary = totals([
            make_record("2025-01-13"),
            make_record("2025-01-14", impressions=3000, clicks=150, spend=200.0,
                        ppc_sales=750.0, total_sales=1500.0),
        ])

        assert summary.impressions == 4000
        assert summary.clicks == 200
        assert summary.spend == pytest.approx(300.0)
        assert summary.ppc_sales == pytest.approx(1000.0)
        assert summary.total_sales == pytest.approx(2000.0)
        assert summary.acos == pytest.approx(30.0)
        assert summary.tacos == pytest.approx(15.0)
        assert summary.ctr == pytest.approx(5.0)
        assert summary.cvr == pytest.approx(20.0)  # (1000 / 25) / 200
        assert summary.ppc_percent_of_sales == pytest.approx(50.0)
        assert summary.roas == pytest.approx(1000.0 / 300.0)
        assert summary.cpc == pytest.approx(1.5)

    def test_zero_denominators(self):
        summary = totals([
            make_record("2025-01-13", impressions=0, clicks=0, spend=10.0,
                        ppc_sales=0.0, total_sales=0.0),
        ])
        assert summary.spend == 10.0
        assert (summary.acos, summary.tacos, summary.ctr, summary.cvr) == (0, 0, 0, 0)
        assert summary.ppc_percent_of_sales == 0
        assert summary.cpc == 0

    def test_chart_points_use_sales_field(self, records):
        points = bucket(records, Granularity.MONTHLY)
        assert totals(points).total_sales == pytest.approx(
            sum(r.total_sales for r in records)
        )


class TestBucketedTotalsMatchRaw:
    """Totals over buckets equal totals over the underlying records"""

    @pytest.mark.parametrize("granularity", list(Granularity))
    def test_associative(self, records, granularity):
        raw = totals(records)
        bucketed = totals(bucket(records, granularity))

        for field, value in raw.model_dump().items():
            assert getattr(bucketed, field) == pytest.approx(value), field
