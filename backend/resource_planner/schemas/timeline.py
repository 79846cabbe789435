from typing import List, Literal, Optional

from resource_planner.schemas.base import CamelModel


TimelineSourceType = Literal["weekly_pattern", "exception"]


class TimelineDayResponse(CamelModel):
    date: str  # YYYY-MM-DD
    hours_available: float
    hourly_rate: float
    currency: str
    is_working_day: bool
    source: TimelineSourceType
    day_of_week: int  # 0=Monday, 6=Sunday
    cost: float
    notes: Optional[str] = None


class TimelineSummaryResponse(CamelModel):
    total_days: int
    working_days: int
    exception_days: int
    total_hours: float
    total_cost: float
    average_hours_per_working_day: float


class ResourceTimelineResponse(CamelModel):
    id: int
    name: str
    type: str
    hourly_rate: float
    currency: str
    is_active: bool
    timeline_data: List[TimelineDayResponse]
    summary: TimelineSummaryResponse


class DateRangeResponse(CamelModel):
    start_date: str
    end_date: str
    total_days: int


class TimelineMetadataResponse(CamelModel):
    generated_at: str
    timezone: str
    total_resources: int
    organization_id: int


class CurrencyTotal(CamelModel):
    currency: str
    total_hours: float
    total_cost: float


class BatchSummaryResponse(CamelModel):
    totals_by_currency: List[CurrencyTotal]
    working_days: int
    exception_days: int


class TimelineResponse(CamelModel):
    resources: List[ResourceTimelineResponse]
    date_range: DateRangeResponse
    metadata: TimelineMetadataResponse
    summary: BatchSummaryResponse


class SingleResourceTimelineResponse(CamelModel):
    resource_id: int
    date_range: DateRangeResponse
    timeline_data: List[TimelineDayResponse]
