from typing import Optional
from fastapi import APIRouter, Depends, Query

from resource_planner.api.deps import get_organization_scope
from resource_planner.config import get_settings
from resource_planner.schemas.pattern import (
    DailyPatternResponse,
    ResetToDefaultsRequest,
    WeeklyPatternResponse,
    WeeklyPatternUpdate,
)
from resource_planner.services.pattern_service import PatternService
from resource_planner.services.patterns import WeeklyPattern, default_weekly_pattern
from resource_planner.services.repositories import OrganizationScope
from resource_planner.services.validators import round_money

router = APIRouter()
settings = get_settings()


def to_response(pattern: WeeklyPattern, resource_id: Optional[int] = None, is_default: bool = False) -> WeeklyPatternResponse:
    days = sorted(pattern.days, key=lambda d: d.day_of_week.weekday)
    return WeeklyPatternResponse(
        resource_id=resource_id,
        currency=pattern.currency,
        is_default=is_default,
        patterns=[
            DailyPatternResponse(
                day_of_week=day.day_of_week,
                weekday=day.day_of_week.weekday,
                is_active=day.is_active,
                start_time=day.start_time,
                end_time=day.end_time,
                total_work_hours=float(round_money(day.hours)),
                hourly_rate=float(day.hourly_rate) if day.hourly_rate is not None else None,
            )
            for day in days
        ],
    )


@router.get("/patterns/default", response_model=WeeklyPatternResponse)
async def get_default_pattern(currency: Optional[str] = Query(None)):
    """Canonical default week: Monday-Friday 09:00-17:00, weekend off."""
    pattern = default_weekly_pattern(currency or settings.default_currency)
    return to_response(pattern, is_default=True)


@router.get("/resources/{resource_id}/pattern", response_model=WeeklyPatternResponse)
async def get_resource_pattern(
    resource_id: int,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """Get a resource's weekly pattern, or the default week if none is stored."""
    pattern, is_default = PatternService(scope).get_pattern(resource_id)
    return to_response(pattern, resource_id, is_default)


@router.put("/resources/{resource_id}/pattern", response_model=WeeklyPatternResponse)
async def replace_resource_pattern(
    resource_id: int,
    pattern_data: WeeklyPatternUpdate,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """Replace the whole week. All seven days must be submitted."""
    pattern = PatternService(scope).replace_pattern(resource_id, pattern_data.patterns, pattern_data.currency)
    return to_response(pattern, resource_id)


@router.post("/resources/{resource_id}/pattern/reset", response_model=WeeklyPatternResponse)
async def reset_resource_pattern(
    resource_id: int,
    reset_data: Optional[ResetToDefaultsRequest] = None,
    scope: OrganizationScope = Depends(get_organization_scope),
):
    """Reset a resource's weekly pattern to the default week."""
    currency = reset_data.currency if reset_data else None
    pattern = PatternService(scope).reset_to_defaults(resource_id, currency)
    return to_response(pattern, resource_id)
