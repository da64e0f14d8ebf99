"""ADPILOT — Performance Data Models.

PerformanceRecord rows are produced by ingestion and never modified.
ChartDataPoint and AggregatedMetrics are recomputed on every query.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Granularity(str, Enum):
    """Bucket size for aggregated series."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class PerformanceRecord(BaseModel):
    """One campaign's advertising results for one day."""

    model_config = {"frozen": True}

    date: str = Field(description="YYYY-MM-DD")
    account_id: str
    portfolio_id: str
    campaign_id: str
    campaign_name: str = ""
    impressions: int = 0
    clicks: int = 0
    spend: float = 0.0
    ppc_sales: float = 0.0
    total_sales: float = 0.0

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        # Normalize to zero-padded ISO so bucket keys sort chronologically
        return datetime.strptime(value, "%Y-%m-%d").strftime("%Y-%m-%d")


class ChartDataPoint(BaseModel):
    """A bucket of summed counters with rates derived from the sums."""

    date: str  # Bucket key: YYYY-MM-DD (day / week start) or YYYY-MM
    spend: float = 0.0
    sales: float = 0.0
    ppc_sales: float = 0.0
    impressions: int = 0
    clicks: int = 0
    orders: float = 0.0  # Estimated, see AVERAGE_ORDER_VALUE
    acos: float = 0.0
    tacos: float = 0.0
    ctr: float = 0.0
    cvr: float = 0.0
    cpc: float = 0.0


class AggregatedMetrics(BaseModel):
    """Range-wide summary with derived efficiency ratios."""

    impressions: int = 0
    clicks: int = 0
    spend: float = 0.0
    ppc_sales: float = 0.0
    total_sales: float = 0.0
    acos: float = 0.0
    tacos: float = 0.0
    ctr: float = 0.0
    cvr: float = 0.0
    ppc_percent_of_sales: float = 0.0
    roas: float = 0.0
    cpc: float = 0.0
