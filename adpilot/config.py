"""ADPILOT — Central Configuration via Pydantic Settings."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── App ──
    log_level: str = "INFO"

    # ── Budget Monitor ──
    monitor_enabled: bool = True
    monitor_interval_minutes: int = 15  # Reconcile every 15 minutes
    log_retention: int = 50  # Most recent change-log lines kept in memory
    seed_file: Optional[str] = None  # JSON with "portfolios" and "schedules"

    # ── Simulation ──
    simulation_enabled: bool = False
    simulation_step_minutes: int = 15  # Simulated minutes per tick
    simulation_tick_seconds: float = 1.0  # Real seconds between ticks

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
