from typing import List, Optional
from decimal import Decimal

from resource_planner.schemas.base import CamelModel
from resource_planner.services.patterns import DayOfWeek


class DailyPatternInput(CamelModel):
    day_of_week: DayOfWeek
    is_active: bool
    start_time: str  # HH:MM
    end_time: str    # HH:MM
    hourly_rate: Optional[Decimal] = None


class WeeklyPatternUpdate(CamelModel):
    """Whole-week replace: all seven days are always resubmitted."""
    patterns: List[DailyPatternInput]
    currency: Optional[str] = None


class ResetToDefaultsRequest(CamelModel):
    currency: Optional[str] = None


class DailyPatternResponse(CamelModel):
    day_of_week: DayOfWeek
    weekday: int  # 0=Monday, 6=Sunday
    is_active: bool
    start_time: str
    end_time: str
    total_work_hours: float
    hourly_rate: Optional[float] = None


class WeeklyPatternResponse(CamelModel):
    resource_id: Optional[int] = None
    currency: str
    is_default: bool = False
    patterns: List[DailyPatternResponse]
