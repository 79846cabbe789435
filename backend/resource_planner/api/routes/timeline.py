from typing import List, Optional
from decimal import Decimal
from fastapi import APIRouter, Depends, Query

from resource_planner.api.deps import get_availability_source
from resource_planner.schemas.timeline import (
    SingleResourceTimelineResponse,
    TimelineResponse,
    TimelineSummaryResponse,
)
from resource_planner.services.aggregator import AvailabilityStatus, TimelineAggregator, TimelineFilters
from resource_planner.services.repositories import SqlAvailabilitySource
from resource_planner.services.timeline import TimelineService

router = APIRouter()


@router.get("/", response_model=TimelineResponse, response_model_exclude_none=True)
async def get_timeline(
    start_date: str = Query(..., description="YYYY-MM-DD"),
    end_date: str = Query(..., description="YYYY-MM-DD"),
    resource_ids: Optional[List[int]] = Query(None),
    resource_type: Optional[str] = Query(None),
    availability_status: Optional[AvailabilityStatus] = Query(None),
    min_hours: Optional[Decimal] = Query(None),
    max_hours: Optional[Decimal] = Query(None),
    source: SqlAvailabilitySource = Depends(get_availability_source),
):
    """
    Resolve the availability timeline for many resources.

    Without resource_ids every active resource of the organization is
    included. Filters only narrow the returned days; they never change how
    a day is resolved.
    """
    filters = None
    if any(v is not None for v in (resource_type, availability_status, min_hours, max_hours)):
        filters = TimelineFilters(
            resource_type=resource_type,
            availability_status=availability_status,
            min_hours=min_hours,
            max_hours=max_hours,
        )
    timeline = TimelineAggregator(source).resolve_batch(resource_ids, start_date, end_date, filters)
    return timeline.to_dict()


@router.get("/resources/{resource_id}", response_model=SingleResourceTimelineResponse, response_model_exclude_none=True)
async def get_resource_timeline(
    resource_id: int,
    start_date: str = Query(..., description="YYYY-MM-DD"),
    end_date: str = Query(..., description="YYYY-MM-DD"),
    source: SqlAvailabilitySource = Depends(get_availability_source),
):
    """Resolve one resource's timeline, one entry per day."""
    days = TimelineService(source).resolve_timeline(resource_id, start_date, end_date)
    return {
        "resourceId": resource_id,
        "dateRange": {
            "startDate": days[0].date.isoformat(),
            "endDate": days[-1].date.isoformat(),
            "totalDays": len(days),
        },
        "timelineData": [day.to_dict() for day in days],
    }


@router.get("/resources/{resource_id}/summary", response_model=TimelineSummaryResponse)
async def get_resource_timeline_summary(
    resource_id: int,
    start_date: str = Query(..., description="YYYY-MM-DD"),
    end_date: str = Query(..., description="YYYY-MM-DD"),
    source: SqlAvailabilitySource = Depends(get_availability_source),
):
    """Working days, hours and cost totals for one resource over a date range."""
    return TimelineService(source).summarize(resource_id, start_date, end_date).to_dict()
