"""Shared fixtures for ADPILOT tests."""

from datetime import datetime, timezone

import pytest

from adpilot.models.budget_models import BudgetSchedule, Portfolio
from adpilot.models.performance_models import PerformanceRecord

WEEKDAYS = [1, 2, 3, 4, 5]


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def make_portfolio(**overrides) -> Portfolio:
    fields = dict(
        id="pf_1",
        account_id="acc_1",
        name="Brand Defense",
        default_budget_cap=500,
        current_budget_cap=500,
        marketplace="US",
        dayparting_enabled=True,
    )
    fields.update(overrides)
    return Portfolio(**fields)


def make_schedule(**overrides) -> BudgetSchedule:
    fields = dict(
        id="sched_1",
        portfolio_id="pf_1",
        name="Afternoon Push",
        scheduled_budget_cap=1000,
        start_time_utc="13:00",
        end_time_utc="17:00",
        days_of_week=WEEKDAYS,
        is_active=True,
    )
    fields.update(overrides)
    return BudgetSchedule(**fields)


def make_record(date: str, **overrides) -> PerformanceRecord:
    fields = dict(
        date=date,
        account_id="acc_1",
        portfolio_id="pf_1",
        campaign_id="cmp_1",
        campaign_name="SP - Exact",
        impressions=1000,
        clicks=50,
        spend=100.0,
        ppc_sales=250.0,
        total_sales=500.0,
    )
    fields.update(overrides)
    return PerformanceRecord(**fields)


@pytest.fixture
def portfolio():
    return make_portfolio()


@pytest.fixture
def afternoon_schedule():
    """Mon–Fri 13:00–17:00 UTC at $1000."""
    return make_schedule()


@pytest.fixture
def records():
    """Two weeks of mixed records across two months, unsorted."""
    return [
        make_record("2025-02-01", impressions=2000, clicks=40, spend=80.0,
                    ppc_sales=200.0, total_sales=400.0),
        make_record("2025-01-13"),
        make_record("2025-01-13", campaign_id="cmp_2", impressions=3000,
                    clicks=150, spend=200.0, ppc_sales=750.0, total_sales=1500.0),
        make_record("2025-01-12", impressions=500, clicks=10, spend=12.5,
                    ppc_sales=0.0, total_sales=100.0),
        make_record("2025-01-30", account_id="acc_2", portfolio_id="pf_9"),
        make_record("2025-01-18", impressions=0, clicks=0, spend=0.0,
                    ppc_sales=0.0, total_sales=0.0),
    ]
