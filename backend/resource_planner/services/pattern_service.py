"""
Weekly pattern persistence.

A pattern is only ever written as a whole week: the seven stored rows are
deleted and re-inserted inside one transaction.
"""

import logging
from typing import Iterable, Optional, Tuple

from resource_planner.config import get_settings
from resource_planner.models.work_schedule import ResourceWorkSchedule
from resource_planner.services.patterns import WeeklyPattern, default_weekly_pattern, validate_weekly_pattern
from resource_planner.services.repositories import OrganizationScope, to_weekly_pattern
from resource_planner.services.resources import ResourceService
from resource_planner.services.validators import parse_time_of_day

settings = get_settings()
logger = logging.getLogger(__name__)


class PatternService:
    def __init__(self, scope: OrganizationScope):
        self.scope = scope
        self.db = scope.db
        self.resources = ResourceService(scope)

    def get_pattern(self, resource_id: int) -> Tuple[WeeklyPattern, bool]:
        """Stored pattern, or the default week when none is stored. Second item is True for defaults."""
        resource = self.resources.get(resource_id)
        pattern = to_weekly_pattern(self.scope.work_schedules.for_resources([resource_id]))
        if pattern is None:
            return default_weekly_pattern(resource.currency), True
        return pattern, False

    def replace_pattern(self, resource_id: int, days: Iterable, currency: Optional[str] = None) -> WeeklyPattern:
        self.resources.get(resource_id)
        pattern = validate_weekly_pattern(days, currency or settings.default_currency)
        self._write(resource_id, pattern)
        logger.info(f"Replaced weekly pattern for resource {resource_id} ({len(pattern.active_days)} active days)")
        return pattern

    def reset_to_defaults(self, resource_id: int, currency: Optional[str] = None) -> WeeklyPattern:
        self.resources.get(resource_id)
        pattern = default_weekly_pattern(currency or settings.default_currency)
        self._write(resource_id, pattern)
        logger.info(f"Reset weekly pattern for resource {resource_id} to defaults")
        return pattern

    def _write(self, resource_id: int, pattern: WeeklyPattern) -> None:
        try:
            self.scope.work_schedules.delete_for_resource(resource_id)
            self.db.flush()
            for day in pattern.days:
                self.scope.work_schedules.add(ResourceWorkSchedule(
                    resource_id=resource_id,
                    day_of_week=day.day_of_week.weekday,
                    is_active=day.is_active,
                    start_time=parse_time_of_day(day.start_time),
                    end_time=parse_time_of_day(day.end_time),
                    hourly_rate=day.hourly_rate,
                    currency=pattern.currency,
                ))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
