"""
Timeline Aggregator

Resolves timelines for many resources of one organization and composes
them into a single response with a date range descriptor, metadata and
summaries. Filters are applied to the resolved days afterwards and never
influence resolution.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Protocol, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from resource_planner.config import get_settings
from resource_planner.core.exceptions import ResourceNotFoundError, TooManyResourcesError, ValidationError
from resource_planner.services.patterns import WeeklyPattern
from resource_planner.services.timeline import (
    AvailabilitySource,
    ExceptionRecord,
    ResourceBase,
    TimelineDay,
    TimelineService,
    TimelineSource,
    TimelineSummary,
    check_date_range,
    resolve_timeline,
    summarize_timeline,
)
from resource_planner.services.validators import parse_iso_date

settings = get_settings()
logger = logging.getLogger(__name__)


class AvailabilityStatus(str, Enum):
    WORKING = "working"
    NON_WORKING = "non-working"
    EXCEPTION = "exception"


@dataclass
class TimelineFilters:
    resource_type: Optional[str] = None
    availability_status: Optional[AvailabilityStatus] = None
    min_hours: Optional[Decimal] = None
    max_hours: Optional[Decimal] = None

    def __post_init__(self):
        if self.min_hours is not None and self.min_hours < 0:
            raise ValidationError("min_hours cannot be negative", field="min_hours")
        if self.max_hours is not None and self.max_hours < 0:
            raise ValidationError("max_hours cannot be negative", field="max_hours")
        if self.min_hours is not None and self.max_hours is not None and self.min_hours > self.max_hours:
            raise ValidationError("min_hours cannot exceed max_hours", field="min_hours")

    def accepts_day(self, day: TimelineDay) -> bool:
        if self.availability_status == AvailabilityStatus.WORKING and not day.is_working_day:
            return False
        if self.availability_status == AvailabilityStatus.NON_WORKING and day.is_working_day:
            return False
        if self.availability_status == AvailabilityStatus.EXCEPTION and day.source != TimelineSource.EXCEPTION:
            return False
        if self.min_hours is not None and day.hours_available < self.min_hours:
            return False
        if self.max_hours is not None and day.hours_available > self.max_hours:
            return False
        return True


class OrganizationAvailabilitySource(AvailabilitySource, Protocol):
    """Bulk reads used when resolving many resources at once."""

    organization_id: int

    def list_resources(self, resource_ids: Optional[Sequence[int]] = None) -> List[ResourceBase]:
        ...

    def get_weekly_patterns(self, resource_ids: Sequence[int]) -> Dict[int, WeeklyPattern]:
        ...

    def get_exceptions_for(
        self, resource_ids: Sequence[int], start_date: date, end_date: date
    ) -> Dict[int, List[ExceptionRecord]]:
        ...

    def get_timezone(self) -> Optional[str]:
        ...


@dataclass
class ResourceTimeline:
    resource: ResourceBase
    days: List[TimelineDay]
    summary: TimelineSummary

    def to_dict(self) -> Dict:
        return {
            "id": self.resource.id,
            "name": self.resource.name,
            "type": self.resource.type,
            "hourlyRate": float(self.resource.hourly_rate),
            "currency": self.resource.currency,
            "isActive": self.resource.is_active,
            "timelineData": [day.to_dict() for day in self.days],
            "summary": self.summary.to_dict(),
        }


@dataclass
class AggregatedTimeline:
    organization_id: int
    start_date: date
    end_date: date
    total_days: int
    timezone: str
    generated_at: datetime
    resources: List[ResourceTimeline] = field(default_factory=list)

    def totals_by_currency(self) -> Dict[str, Dict]:
        totals: Dict[str, Dict] = {}
        for item in self.resources:
            for day in item.days:
                bucket = totals.setdefault(day.currency, {"hours": Decimal("0"), "cost": Decimal("0")})
                bucket["hours"] += day.hours_available
                bucket["cost"] += day.cost
        return totals

    def to_dict(self) -> Dict:
        return {
            "resources": [item.to_dict() for item in self.resources],
            "dateRange": {
                "startDate": self.start_date.isoformat(),
                "endDate": self.end_date.isoformat(),
                "totalDays": self.total_days,
            },
            "metadata": {
                "generatedAt": self.generated_at.isoformat(),
                "timezone": self.timezone,
                "totalResources": len(self.resources),
                "organizationId": self.organization_id,
            },
            "summary": {
                "totalsByCurrency": [
                    {"currency": currency, "totalHours": float(values["hours"]), "totalCost": float(values["cost"])}
                    for currency, values in sorted(self.totals_by_currency().items())
                ],
                "workingDays": sum(item.summary.working_days for item in self.resources),
                "exceptionDays": sum(item.summary.exception_days for item in self.resources),
            },
        }


def resolve_timezone(label: Optional[str]) -> str:
    """Validate an IANA timezone label, falling back to the default."""
    if not label:
        return settings.default_timezone
    try:
        ZoneInfo(label)
        return label
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Invalid timezone {label}, falling back to {settings.default_timezone}")
        return settings.default_timezone


class TimelineAggregator:
    """Resolves and composes timelines for up to ``max_timeline_resources`` resources."""

    def __init__(self, source: OrganizationAvailabilitySource, timeline_service: Optional[TimelineService] = None):
        self.source = source
        self.timeline_service = timeline_service or TimelineService(source)
        self.max_resources = settings.max_timeline_resources

    def _load_resources(self, resource_ids: Optional[Sequence[int]]) -> List[ResourceBase]:
        if not resource_ids:
            return [r for r in self.source.list_resources() if r.is_active]

        unique_ids = list(dict.fromkeys(resource_ids))
        found = self.source.list_resources(unique_ids)
        found_ids = {r.id for r in found}
        missing = [rid for rid in unique_ids if rid not in found_ids]
        if missing:
            raise ResourceNotFoundError(missing)
        return [r for r in found if r.is_active]

    def resolve_batch(
        self,
        resource_ids: Optional[Sequence[int]],
        start_date,
        end_date,
        filters: Optional[TimelineFilters] = None,
    ) -> AggregatedTimeline:
        if resource_ids and len(resource_ids) > self.max_resources:
            raise TooManyResourcesError(len(resource_ids), self.max_resources)

        start = parse_iso_date(start_date, "start_date")
        end = parse_iso_date(end_date, "end_date")
        total_days = check_date_range(start, end)

        resources = self._load_resources(resource_ids)
        if len(resources) > self.max_resources:
            raise TooManyResourcesError(len(resources), self.max_resources)

        ids = [r.id for r in resources]
        patterns = self.source.get_weekly_patterns(ids) if ids else {}
        exceptions = self.source.get_exceptions_for(ids, start, end) if ids else {}

        resolved: Dict[int, ResourceTimeline] = {}
        for resource in resources:
            pattern = self.timeline_service.pattern_for(resource, patterns.get(resource.id))
            days = resolve_timeline(resource, pattern, exceptions.get(resource.id, []), start, end)
            resolved[resource.id] = ResourceTimeline(resource, days, summarize_timeline(days))

        timelines = [resolved[r.id] for r in sorted(resources, key=lambda r: (r.name.lower(), r.id))]
        if filters is not None:
            timelines = apply_filters(timelines, filters)

        logger.info(
            f"Resolved timeline for {len(resources)} resources over {total_days} days "
            f"(organization {self.source.organization_id})"
        )

        return AggregatedTimeline(
            organization_id=self.source.organization_id,
            start_date=start,
            end_date=end,
            total_days=total_days,
            timezone=resolve_timezone(self.source.get_timezone()),
            generated_at=datetime.now(timezone.utc),
            resources=timelines,
        )


def apply_filters(timelines: List[ResourceTimeline], filters: TimelineFilters) -> List[ResourceTimeline]:
    """Filter resolved days; resources left without days are dropped. Summaries are kept as resolved."""
    filtered = []
    for item in timelines:
        if filters.resource_type and item.resource.type != filters.resource_type:
            continue
        days = [day for day in item.days if filters.accepts_day(day)]
        if not days:
            continue
        filtered.append(ResourceTimeline(item.resource, days, item.summary))
    return filtered
