"""ADPILOT — Service Entry Point.

Loads portfolios and schedules from the configured seed file, wires the
repositories, a clock and the budget monitor, then keeps the scheduler
running until interrupted.
"""

import asyncio
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import BaseModel

from adpilot.config import settings
from adpilot.core.clock import Clock, SimulationClock, SystemClock
from adpilot.core.logging import get_logger
from adpilot.dayparting.budget_monitor import BudgetMonitor
from adpilot.models.budget_models import BudgetSchedule, Portfolio
from adpilot.repositories import (
    InMemoryPortfolioRepository,
    InMemoryScheduleRepository,
)
from adpilot.scheduler.jobs import start_scheduler, stop_scheduler

logger = get_logger("main")


class SeedData(BaseModel):
    """Initial store contents, e.g. exported from the management UI."""

    portfolios: List[Portfolio] = []
    schedules: List[BudgetSchedule] = []


def load_seed(path: str) -> SeedData:
    """Read and validate a seed JSON file."""
    seed = SeedData.model_validate_json(Path(path).read_text(encoding="utf-8"))
    logger.info(
        f"Loaded {len(seed.portfolios)} portfolios and "
        f"{len(seed.schedules)} schedules from {path}"
    )
    return seed


def build_clock() -> Clock:
    """Simulation clock when simulation is enabled, wall clock otherwise."""
    if settings.simulation_enabled:
        return SimulationClock()
    return SystemClock()


def build_monitor(
    portfolios: Iterable[Portfolio] = (),
    schedules: Iterable[BudgetSchedule] = (),
    clock: Optional[Clock] = None,
) -> BudgetMonitor:
    return BudgetMonitor(
        InMemoryPortfolioRepository(portfolios),
        InMemoryScheduleRepository(schedules),
        clock or build_clock(),
    )


def build_monitor_from_seed(path: str, clock: Optional[Clock] = None) -> BudgetMonitor:
    seed = load_seed(path)
    return build_monitor(seed.portfolios, seed.schedules, clock)


async def serve(monitor: BudgetMonitor):
    """Run the scheduler until cancelled."""
    logger.info("🚀 ADPILOT starting up...")
    sim_clock = monitor.clock if isinstance(monitor.clock, SimulationClock) else None
    start_scheduler(monitor, sim_clock)
    monitor.run_once()
    try:
        await asyncio.Event().wait()
    finally:
        stop_scheduler()
        logger.info("ADPILOT shut down")


def main() -> int:
    if not settings.seed_file:
        logger.error("❌ SEED_FILE is not set — nothing to monitor")
        return 1
    try:
        monitor = build_monitor_from_seed(settings.seed_file)
    except (OSError, ValueError) as e:
        logger.error(f"❌ Could not load seed file {settings.seed_file}: {e}")
        return 1
    try:
        asyncio.run(serve(monitor))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
