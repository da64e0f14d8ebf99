"""ADPILOT — Scheduler Jobs.

APScheduler interval jobs that drive the budget monitor: a periodic
reconciliation pass and, in simulation mode, a tick that advances the
simulated clock before each pass.
"""

from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from adpilot.config import settings
from adpilot.core.clock import SimulationClock
from adpilot.dayparting.budget_monitor import BudgetMonitor
from adpilot.core.logging import get_logger

logger = get_logger("scheduler")

scheduler = AsyncIOScheduler()


async def budget_monitor_job(monitor: BudgetMonitor):
    """Run one reconciliation pass."""
    try:
        result = monitor.run_once()
        logger.info(f"Budget monitor job complete. Changes: {len(result.change_log)}")
    except Exception as e:
        logger.error(f"Budget monitor job failed: {e}")


async def simulation_tick_job(monitor: BudgetMonitor, clock: SimulationClock):
    """Advance simulated time by one step and reconcile."""
    try:
        clock.tick()
        monitor.run_once()
    except Exception as e:
        logger.error(f"Simulation tick failed: {e}")


def configure_jobs(
    monitor: BudgetMonitor,
    clock: Optional[SimulationClock] = None,
    target: AsyncIOScheduler = scheduler,
) -> AsyncIOScheduler:
    """Register the monitor (and optional simulation) jobs."""
    target.add_job(
        budget_monitor_job,
        "interval",
        minutes=settings.monitor_interval_minutes,
        args=[monitor],
        id="budget_monitor",
        replace_existing=True,
        misfire_grace_time=300,
    )
    if clock is not None and settings.simulation_enabled:
        target.add_job(
            simulation_tick_job,
            "interval",
            seconds=settings.simulation_tick_seconds,
            args=[monitor, clock],
            id="simulation_tick",
            replace_existing=True,
        )
    return target


def start_scheduler(monitor: BudgetMonitor, clock: Optional[SimulationClock] = None):
    """Configure and start the scheduler."""
    if not settings.monitor_enabled:
        logger.info("Scheduler disabled via config")
        return

    configure_jobs(monitor, clock)
    scheduler.start()
    logger.info(
        f"Scheduler started. Budget monitor every {settings.monitor_interval_minutes} min"
    )


def stop_scheduler():
    """Shutdown the scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
