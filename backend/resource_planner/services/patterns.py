"""
Weekly Pattern Validator

A weekly pattern is exactly seven daily entries, one per day of week.
Days are indexed Monday=0 ... Sunday=6, matching ``date.weekday()``; the
same index is used for stored rows and for the ``dayOfWeek`` field of
resolved timeline days.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, Iterable, List, Optional, Tuple

from resource_planner.core.exceptions import IncompleteWeekError, NoActiveDaysError, ValidationError
from resource_planner.services.validators import (
    duration_hours,
    parse_time_of_day,
    validate_currency_code,
    validate_decimal_precision,
)


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def weekday(self) -> int:
        return DAYS_OF_WEEK.index(self)

    @classmethod
    def from_weekday(cls, weekday: int) -> "DayOfWeek":
        return DAYS_OF_WEEK[weekday]


DAYS_OF_WEEK: Tuple[DayOfWeek, ...] = tuple(DayOfWeek)


@dataclass(frozen=True)
class DailyPattern:
    day_of_week: DayOfWeek
    is_active: bool
    start_time: str
    end_time: str
    hourly_rate: Optional[Decimal] = None

    @property
    def hours(self) -> Fraction:
        """Exact working hours; zero for inactive days."""
        if not self.is_active:
            return Fraction(0)
        return duration_hours(self.start_time, self.end_time)


@dataclass(frozen=True)
class WeeklyPattern:
    days: Tuple[DailyPattern, ...]
    currency: str = "USD"
    _by_index: Dict[int, DailyPattern] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_by_index", {day.day_of_week.weekday: day for day in self.days})

    def for_weekday(self, weekday: int) -> DailyPattern:
        return self._by_index[weekday]

    @property
    def active_days(self) -> List[DayOfWeek]:
        return [day.day_of_week for day in self.days if day.is_active]


def _coerce_day(entry: Any) -> DailyPattern:
    if isinstance(entry, DailyPattern):
        return entry
    if isinstance(entry, dict):
        get = entry.get
    else:
        def get(name, default=None):
            return getattr(entry, name, default)
    return DailyPattern(
        day_of_week=get("day_of_week"),
        is_active=bool(get("is_active", False)),
        start_time=get("start_time"),
        end_time=get("end_time"),
        hourly_rate=get("hourly_rate"),
    )


def _check_days_of_week(days: List[DailyPattern]) -> List[DailyPattern]:
    labels = []
    checked = []
    for position, day in enumerate(days):
        try:
            label = DayOfWeek(day.day_of_week)
        except ValueError:
            raise IncompleteWeekError(
                f"Unrecognized day of week '{day.day_of_week}'",
                field=f"patterns[{position}].day_of_week",
            )
        labels.append(label)
        checked.append(DailyPattern(label, day.is_active, day.start_time, day.end_time, day.hourly_rate))

    duplicates = sorted({label.value for label in labels if labels.count(label) > 1})
    missing = [label.value for label in DAYS_OF_WEEK if label not in labels]
    if len(labels) != 7 or duplicates or missing:
        parts = []
        if duplicates:
            parts.append(f"duplicated: {', '.join(duplicates)}")
        if missing:
            parts.append(f"missing: {', '.join(missing)}")
        detail = "; ".join(parts) or f"got {len(labels)} entries"
        raise IncompleteWeekError(
            f"Exactly 7 days (monday to sunday) must be provided ({detail})",
            field="patterns",
            details={"duplicated": duplicates, "missing": missing},
        )
    return checked


def validate_weekly_pattern(days: Iterable[Any], currency: str = "USD") -> WeeklyPattern:
    """
    Validate a complete week and return it unchanged.

    Checks, in order: the seven labels, per-day time format and range,
    per-day rate precision, and finally that at least one day is active.
    """
    entries = _check_days_of_week([_coerce_day(entry) for entry in days])
    validate_currency_code(currency)

    validated = []
    for day in entries:
        name = day.day_of_week.value
        parse_time_of_day(day.start_time, f"{name}.start_time")
        parse_time_of_day(day.end_time, f"{name}.end_time")
        if day.is_active:
            duration_hours(day.start_time, day.end_time, field=f"{name}.end_time")

        rate = day.hourly_rate
        if rate is not None:
            rate = validate_decimal_precision(rate, 2, f"{name}.hourly_rate")
            if rate < 0:
                raise ValidationError(f"Hourly rate must be non-negative for {name}", field=f"{name}.hourly_rate")
        validated.append(DailyPattern(day.day_of_week, day.is_active, day.start_time, day.end_time, rate))

    if not any(day.is_active for day in validated):
        raise NoActiveDaysError("At least one day must be active", field="patterns")

    return WeeklyPattern(days=tuple(validated), currency=currency)


def default_weekly_pattern(currency: str = "USD") -> WeeklyPattern:
    """Monday to Friday 09:00-17:00, weekend off, no per-day rate override."""
    validate_currency_code(currency)
    days = []
    for day in DAYS_OF_WEEK:
        if day in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY):
            days.append(DailyPattern(day, False, "00:00", "00:00"))
        else:
            days.append(DailyPattern(day, True, "09:00", "17:00"))
    return WeeklyPattern(days=tuple(days), currency=currency)
