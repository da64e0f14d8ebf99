"""
Tests for the Budget Monitor

Repository write-back, log retention and simulation stepping.
"""

from datetime import timedelta

import pytest

from adpilot.core.clock import SimulationClock, SystemClock
from adpilot.dayparting.budget_monitor import BudgetMonitor
from adpilot.repositories import (
    InMemoryPortfolioRepository,
    InMemoryScheduleRepository,
)
from tests.conftest import make_portfolio, make_schedule, utc


@pytest.fixture
def clock():
    # Wednesday 12:00 UTC, one hour before the afternoon window
    return SimulationClock(start=utc(2025, 1, 15, 12, 0))


@pytest.fixture
def monitor(clock):
    portfolios = InMemoryPortfolioRepository([
        make_portfolio(id="pf_1"),
        make_portfolio(id="pf_2", account_id="acc_2", name="Generic"),
    ])
    schedules = InMemoryScheduleRepository([
        make_schedule(id="s1", portfolio_id="pf_1"),
        make_schedule(id="s2", portfolio_id="pf_2", name="Other", scheduled_budget_cap=800),
    ])
    return BudgetMonitor(portfolios, schedules, clock, log_retention=3)


class TestRunOnce:
    def test_nothing_to_do(self, monitor):
        result = monitor.run_once()
        assert result.change_log == []
        assert monitor.recent_logs == []

    def test_writes_back_changes(self, monitor, clock):
        clock.set(utc(2025, 1, 15, 14, 30))
        result = monitor.run_once()

        assert len(result.change_log) == 2
        assert monitor.portfolios.get("pf_1").current_budget_cap == 1000
        assert monitor.portfolios.get("pf_2").current_budget_cap == 800

    def test_account_scope(self, monitor, clock):
        clock.set(utc(2025, 1, 15, 14, 30))
        monitor.run_once(account_id="acc_2")

        assert monitor.portfolios.get("pf_1").current_budget_cap == 500
        assert monitor.portfolios.get("pf_2").current_budget_cap == 800


class TestSimulation:
    """Stepping the simulated clock through the afternoon window"""

    def test_step_hourly(self, monitor):
        assert monitor.step(timedelta(hours=1)).change_log  # 13:00 enters window
        assert monitor.step(timedelta(hours=1)).change_log == []  # 14:00
        monitor.step(timedelta(hours=3))  # 17:00 leaves window

        assert monitor.portfolios.get("pf_1").current_budget_cap == 500
        assert monitor.clock.now() == utc(2025, 1, 15, 17, 0)

    def test_retention_keeps_newest_first(self, monitor):
        monitor.step(timedelta(hours=1))  # two entries
        monitor.step(timedelta(hours=4))  # two more

        logs = monitor.recent_logs
        assert len(logs) == 3
        # Newest pass first, each pass in portfolio order
        assert logs[0].startswith("[2025-01-15T17:00:00.000Z] Portfolio \"Brand Defense\"")
        assert logs[1].startswith("[2025-01-15T17:00:00.000Z] Portfolio \"Generic\"")
        assert all("Reverting to Default" in line for line in logs[:2])
        assert logs[2].startswith("[2025-01-15T13:00:00.000Z] Portfolio \"Brand Defense\"")

    def test_batch_order_matches_change_log(self, monitor):
        result = monitor.step(timedelta(hours=1))
        assert monitor.recent_logs == result.change_log

    def test_oversized_batch_keeps_first_lines(self, clock):
        portfolios = InMemoryPortfolioRepository(
            [make_portfolio(id=f"pf_{i}", name=f"P{i}") for i in range(4)]
        )
        schedules = InMemoryScheduleRepository(
            [make_schedule(id=f"s{i}", portfolio_id=f"pf_{i}") for i in range(4)]
        )
        monitor = BudgetMonitor(portfolios, schedules, clock, log_retention=2)

        result = monitor.step(timedelta(hours=1))

        assert len(result.change_log) == 4
        assert monitor.recent_logs == result.change_log[:2]

    def test_step_requires_simulation_clock(self):
        monitor = BudgetMonitor(
            InMemoryPortfolioRepository(), InMemoryScheduleRepository(), SystemClock()
        )
        with pytest.raises(TypeError):
            monitor.step(timedelta(hours=1))
