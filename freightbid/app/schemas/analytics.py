"""
Analytics Schemas for bid dashboards.

All shapes are derived per request and never persisted.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class BidParticipationStats(BaseModel):
    """Invited vs. responded carriers for a bid."""
    total_invited: int = 0
    responded_count: int = 0
    response_rate: float = 0.0


class CarrierRef(BaseModel):
    """Carrier identity for display."""
    id: int
    name: str


class RouteAnalytics(BaseModel):
    """Per-route rate statistics within a bid."""
    route_id: int
    origin: str
    destination: str
    equipment_type: str
    commodity: str
    best_rate: Optional[float] = None
    best_rate_carriers: List[CarrierRef] = Field(default_factory=list)
    average_rate: Optional[float] = None
    response_count: int = 0
    is_outlier: bool = False
    distance: Optional[float] = None


class CostDistributionRate(BaseModel):
    """A single per-mile rate placed in a cost bucket."""
    carrier_id: int
    carrier_name: str
    route_id: int
    rate: float


class CostDistributionBucket(BaseModel):
    """Histogram bucket covering per-mile rates in [min, max)."""
    min: float
    max: float
    count: int = 0
    rates: List[CostDistributionRate] = Field(default_factory=list)


class NationalComparison(BaseModel):
    """Weighted bid average relative to the national reference."""
    comparison_percent: float
    label: str  # "above", "below" or "at"


class AverageRateAnalytics(BaseModel):
    """Distance-weighted average rate for a bid."""
    weighted_average_per_mile: Optional[float] = None
    total_responses: int = 0
    national_average: Optional[float] = None
    national_average_comparison: Optional[float] = None
    comparison_label: Optional[str] = None


class NationalAverageResponse(BaseModel):
    """Global national average for an equipment type."""
    equipment_type: str
    value: Optional[float] = None


class DashboardStats(BaseModel):
    """Organization-level dashboard counters."""
    total_carriers: int
    active_bids: int
    total_routes: int
