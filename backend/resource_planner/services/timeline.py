"""
Timeline Resolver

Derives a resource's per-day availability for a date range by merging its
weekly pattern with date-specific exceptions:
- an active exception for a date fully determines that day
- otherwise the weekly pattern entry for the weekday applies
- inactive exceptions are ignored completely

The resolver is a pure function of its inputs. ``TimelineService`` wires it
to an ``AvailabilitySource`` for loading the inputs.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

from resource_planner.config import get_settings
from resource_planner.core.exceptions import (
    InvalidDateRangeError,
    PatternNotFoundError,
    RangeTooLargeError,
    ResourceNotFoundError,
)
from resource_planner.services.patterns import WeeklyPattern, default_weekly_pattern
from resource_planner.services.validators import CENT, parse_iso_date, round_money

settings = get_settings()


class TimelineSource(str, Enum):
    WEEKLY_PATTERN = "weekly_pattern"
    EXCEPTION = "exception"


@dataclass(frozen=True)
class ResourceBase:
    """The resource fields the resolver needs."""
    id: int
    hourly_rate: Decimal
    currency: str
    is_active: bool = True
    name: str = ""
    type: str = "human"


@dataclass(frozen=True)
class ExceptionRecord:
    """A date-specific override as read from the exception store."""
    resource_id: int
    exception_date: date
    hours_available: Decimal
    exception_type: str
    is_active: bool = True
    hourly_rate: Optional[Decimal] = None
    currency: Optional[str] = None
    notes: Optional[str] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class TimelineDay:
    date: date
    hours_available: Decimal
    hourly_rate: Decimal
    currency: str
    is_working_day: bool
    source: TimelineSource
    day_of_week: int  # 0=Monday, 6=Sunday
    cost: Decimal
    notes: Optional[str] = None

    def to_dict(self) -> Dict:
        data = {
            "date": self.date.isoformat(),
            "hoursAvailable": float(self.hours_available),
            "hourlyRate": float(self.hourly_rate),
            "currency": self.currency,
            "isWorkingDay": self.is_working_day,
            "source": self.source.value,
            "dayOfWeek": self.day_of_week,
            "cost": float(self.cost),
        }
        if self.notes:
            data["notes"] = self.notes
        return data


@dataclass(frozen=True)
class TimelineSummary:
    total_days: int
    working_days: int
    exception_days: int
    total_hours: Decimal
    total_cost: Decimal
    average_hours_per_working_day: Decimal

    def to_dict(self) -> Dict:
        return {
            "totalDays": self.total_days,
            "workingDays": self.working_days,
            "exceptionDays": self.exception_days,
            "totalHours": float(self.total_hours),
            "totalCost": float(self.total_cost),
            "averageHoursPerWorkingDay": float(self.average_hours_per_working_day),
        }


class AvailabilitySource(Protocol):
    """Read access to resources, patterns and exceptions for one organization."""

    def get_resource_base(self, resource_id: int) -> Optional[ResourceBase]:
        ...

    def get_weekly_pattern(self, resource_id: int) -> Optional[WeeklyPattern]:
        ...

    def get_exceptions(self, resource_id: int, start_date: date, end_date: date) -> List[ExceptionRecord]:
        ...


def date_range(start_date: date, end_date: date) -> Iterable[date]:
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def check_date_range(start_date: date, end_date: date, max_days: Optional[int] = None) -> int:
    """Validate range bounds and return the number of days it spans."""
    if max_days is None:
        max_days = settings.max_timeline_days
    if start_date > end_date:
        raise InvalidDateRangeError("Start date must be before or equal to end date", field="start_date")
    span = (end_date - start_date).days
    if span > max_days:
        raise RangeTooLargeError(span, max_days)
    return span + 1


def _resolve_exception(day: date, exception: ExceptionRecord, resource: ResourceBase) -> TimelineDay:
    hours = round_money(Fraction(exception.hours_available))
    rate = exception.hourly_rate if exception.hourly_rate is not None else resource.hourly_rate
    rate = Decimal(rate).quantize(CENT, rounding=ROUND_HALF_UP)
    return TimelineDay(
        date=day,
        hours_available=hours,
        hourly_rate=rate,
        currency=exception.currency or resource.currency,
        is_working_day=hours > 0,
        source=TimelineSource.EXCEPTION,
        day_of_week=day.weekday(),
        cost=round_money(hours * rate),
        notes=exception.notes or None,
    )


def _resolve_pattern(day: date, pattern: WeeklyPattern, resource: ResourceBase) -> TimelineDay:
    entry = pattern.for_weekday(day.weekday())
    hours = round_money(entry.hours)
    if entry.hourly_rate is not None:
        rate, currency = entry.hourly_rate, pattern.currency
    else:
        rate, currency = resource.hourly_rate, resource.currency
    rate = Decimal(rate).quantize(CENT, rounding=ROUND_HALF_UP)
    return TimelineDay(
        date=day,
        hours_available=hours,
        hourly_rate=rate,
        currency=currency,
        is_working_day=entry.is_active,
        source=TimelineSource.WEEKLY_PATTERN,
        day_of_week=day.weekday(),
        cost=round_money(hours * rate),
    )


def resolve_timeline(
    resource: ResourceBase,
    weekly_pattern: WeeklyPattern,
    exceptions: Iterable[ExceptionRecord],
    start_date: date,
    end_date: date,
    max_days: Optional[int] = None,
) -> List[TimelineDay]:
    """
    Resolve one entry per calendar day in ``[start_date, end_date]``.

    Exceptions take absolute precedence over the weekly pattern. Cost is
    rounded half-up to cents per day, never on an aggregate.
    """
    check_date_range(start_date, end_date, max_days)

    by_date: Dict[date, ExceptionRecord] = {}
    for exception in exceptions:
        if not exception.is_active or exception.resource_id != resource.id:
            continue
        if start_date <= exception.exception_date <= end_date:
            by_date[exception.exception_date] = exception

    timeline = []
    for day in date_range(start_date, end_date):
        exception = by_date.get(day)
        if exception is not None:
            timeline.append(_resolve_exception(day, exception, resource))
        else:
            timeline.append(_resolve_pattern(day, weekly_pattern, resource))
    return timeline


def summarize_timeline(days: Sequence[TimelineDay]) -> TimelineSummary:
    """Totals over resolved days. Total cost is the sum of the per-day costs."""
    working = [d for d in days if d.is_working_day]
    total_hours = sum((d.hours_available for d in working), Decimal("0"))
    total_cost = sum((d.cost for d in days), Decimal("0"))
    average = round_money(total_hours / len(working)) if working else Decimal("0.00")
    return TimelineSummary(
        total_days=len(days),
        working_days=len(working),
        exception_days=sum(1 for d in days if d.source == TimelineSource.EXCEPTION),
        total_hours=total_hours,
        total_cost=total_cost,
        average_hours_per_working_day=average,
    )


class TimelineService:
    """Loads inputs through an availability source and resolves timelines."""

    def __init__(self, source: AvailabilitySource, fallback_to_default_pattern: Optional[bool] = None):
        self.source = source
        if fallback_to_default_pattern is None:
            fallback_to_default_pattern = settings.fallback_to_default_pattern
        self.fallback_to_default_pattern = fallback_to_default_pattern

    def pattern_for(self, resource: ResourceBase, pattern: Optional[WeeklyPattern]) -> WeeklyPattern:
        if pattern is not None:
            return pattern
        if not self.fallback_to_default_pattern:
            raise PatternNotFoundError(resource.id)
        return default_weekly_pattern(resource.currency)

    def resolve_timeline(self, resource_id: int, start_date, end_date) -> List[TimelineDay]:
        start = parse_iso_date(start_date, "start_date")
        end = parse_iso_date(end_date, "end_date")
        check_date_range(start, end)

        resource = self.source.get_resource_base(resource_id)
        if resource is None:
            raise ResourceNotFoundError([resource_id])

        pattern = self.pattern_for(resource, self.source.get_weekly_pattern(resource_id))
        exceptions = self.source.get_exceptions(resource_id, start, end)
        return resolve_timeline(resource, pattern, exceptions, start, end)

    def summarize(self, resource_id: int, start_date, end_date) -> TimelineSummary:
        return summarize_timeline(self.resolve_timeline(resource_id, start_date, end_date))
