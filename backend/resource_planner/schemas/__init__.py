from resource_planner.schemas.resource import ResourceCreate, ResourceUpdate, ResourceResponse
from resource_planner.schemas.pattern import (
    DailyPatternInput, WeeklyPatternUpdate, ResetToDefaultsRequest, DailyPatternResponse, WeeklyPatternResponse,
)
from resource_planner.schemas.availability_exception import ExceptionCreate, ExceptionUpdate, ExceptionResponse
from resource_planner.schemas.timeline import (
    TimelineDayResponse, TimelineSummaryResponse, ResourceTimelineResponse, TimelineResponse,
    SingleResourceTimelineResponse,
)

__all__ = [
    "ResourceCreate", "ResourceUpdate", "ResourceResponse",
    "DailyPatternInput", "WeeklyPatternUpdate", "ResetToDefaultsRequest", "DailyPatternResponse",
    "WeeklyPatternResponse",
    "ExceptionCreate", "ExceptionUpdate", "ExceptionResponse",
    "TimelineDayResponse", "TimelineSummaryResponse", "ResourceTimelineResponse", "TimelineResponse",
    "SingleResourceTimelineResponse",
]
