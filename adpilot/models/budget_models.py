"""ADPILOT — Portfolio & Budget Schedule Models."""

import re
from typing import List

from pydantic import BaseModel, Field, field_validator

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")


class InvalidScheduleFormat(ValueError):
    """Raised when a schedule time is not a valid HH:MM string."""


def parse_time_of_day(value: str) -> int:
    """Parse an HH:MM string (UTC) into minutes since midnight."""
    match = _TIME_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        raise InvalidScheduleFormat(f"Expected HH:MM, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidScheduleFormat(f"Time out of range: {value!r}")
    return hours * 60 + minutes


class Portfolio(BaseModel):
    """A group of campaigns sharing one budget cap.

    ``current_budget_cap`` is the only field the reconciler rewrites, and it
    does so by returning a copy.
    """

    model_config = {"frozen": True}

    id: str
    account_id: str
    name: str
    default_budget_cap: float = Field(ge=0)
    current_budget_cap: float = Field(ge=0)
    marketplace: str = ""
    dayparting_enabled: bool = False  # Gates schedule editing only


class BudgetSchedule(BaseModel):
    """Time-windowed override of a portfolio's budget cap."""

    model_config = {"frozen": True}

    id: str
    portfolio_id: str
    name: str
    scheduled_budget_cap: float = Field(ge=0)
    start_time_utc: str = Field(description="HH:MM, inclusive")
    end_time_utc: str = Field(description="HH:MM, exclusive")
    days_of_week: List[int] = Field(description="0=Sunday … 6=Saturday")
    is_active: bool = True

    @field_validator("start_time_utc", "end_time_utc")
    @classmethod
    def _check_time(cls, value: str) -> str:
        parse_time_of_day(value)
        return value

    @field_validator("days_of_week")
    @classmethod
    def _check_days(cls, value: List[int]) -> List[int]:
        for day in value:
            if not 0 <= day <= 6:
                raise ValueError(f"Day of week out of range: {day}")
        return value

    @property
    def start_minute(self) -> int:
        return parse_time_of_day(self.start_time_utc)

    @property
    def end_minute(self) -> int:
        return parse_time_of_day(self.end_time_utc)

    @property
    def is_overnight(self) -> bool:
        return self.end_minute < self.start_minute


class ReconciliationResult(BaseModel):
    """Output of one reconciliation pass."""

    portfolios: List[Portfolio] = []
    change_log: List[str] = []
