from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP

import pytest

from resource_planner.core.exceptions import (
    InvalidDateFormatError,
    InvalidDateRangeError,
    PatternNotFoundError,
    RangeTooLargeError,
    ResourceNotFoundError,
)
from resource_planner.services.patterns import DAYS_OF_WEEK, default_weekly_pattern, validate_weekly_pattern
from resource_planner.services.timeline import (
    ExceptionRecord,
    ResourceBase,
    TimelineService,
    TimelineSource,
    check_date_range,
    resolve_timeline,
    summarize_timeline,
)

from fakes import FakeAvailabilitySource

MONDAY = date(2024, 1, 1)
RESOURCE = ResourceBase(id=1, hourly_rate=Decimal("20.00"), currency="USD", name="Ana")


def holiday(day, resource_id=1, **kwargs):
    values = dict(
        resource_id=resource_id,
        exception_date=day,
        hours_available=Decimal("0"),
        exception_type="holiday",
    )
    values.update(kwargs)
    return ExceptionRecord(**values)


def test_pattern_only_follows_weekday_activity():
    pattern = default_weekly_pattern()
    days = resolve_timeline(RESOURCE, pattern, [], MONDAY, MONDAY + timedelta(days=20))
    for day in days:
        assert day.is_working_day == pattern.for_weekday(day.date.weekday()).is_active
        assert day.source == TimelineSource.WEEKLY_PATTERN
        assert day.day_of_week == day.date.weekday()


def test_wednesday_holiday_week():
    days = resolve_timeline(
        RESOURCE, default_weekly_pattern(), [holiday(MONDAY + timedelta(days=2), notes="New Year week")],
        MONDAY, MONDAY + timedelta(days=6),
    )
    hours = [day.hours_available for day in days]
    assert hours == [Decimal("8.00"), Decimal("8.00"), Decimal("0.00"), Decimal("8.00"), Decimal("8.00"),
                     Decimal("0.00"), Decimal("0.00")]

    wednesday = days[2]
    assert wednesday.source == TimelineSource.EXCEPTION
    assert not wednesday.is_working_day
    assert wednesday.cost == Decimal("0.00")
    assert wednesday.notes == "New Year week"

    for weekend in days[5:]:
        assert weekend.source == TimelineSource.WEEKLY_PATTERN
        assert not weekend.is_working_day

    assert days[0].cost == Decimal("160.00")
    summary = summarize_timeline(days)
    assert summary.working_days == 4
    assert summary.exception_days == 1
    assert summary.total_hours == Decimal("32.00")
    assert summary.total_cost == Decimal("640.00")
    assert summary.average_hours_per_working_day == Decimal("8.00")


def test_exception_takes_hours_rate_and_currency():
    exception = holiday(
        MONDAY, hours_available=Decimal("4"), exception_type="training",
        hourly_rate=Decimal("35.00"), currency="EUR",
    )
    day = resolve_timeline(RESOURCE, default_weekly_pattern(), [exception], MONDAY, MONDAY)[0]
    assert day.source == TimelineSource.EXCEPTION
    assert day.hours_available == Decimal("4.00")
    assert day.hourly_rate == Decimal("35.00")
    assert day.currency == "EUR"
    assert day.is_working_day
    assert day.cost == Decimal("140.00")


def test_exception_without_rate_uses_resource_rate_and_currency():
    exception = holiday(MONDAY + timedelta(days=5), hours_available=Decimal("3"), exception_type="custom")
    day = resolve_timeline(RESOURCE, default_weekly_pattern(), [exception], MONDAY, MONDAY + timedelta(days=6))[5]
    assert day.source == TimelineSource.EXCEPTION
    assert day.hourly_rate == Decimal("20.00")
    assert day.currency == "USD"
    assert day.is_working_day
    assert day.cost == Decimal("60.00")


def test_inactive_and_foreign_exceptions_are_ignored():
    exceptions = [
        holiday(MONDAY, is_active=False),
        holiday(MONDAY + timedelta(days=1), resource_id=2),
        holiday(MONDAY + timedelta(days=30)),
    ]
    days = resolve_timeline(RESOURCE, default_weekly_pattern(), exceptions, MONDAY, MONDAY + timedelta(days=6))
    assert all(day.source == TimelineSource.WEEKLY_PATTERN for day in days)


def test_pattern_rate_override_uses_pattern_currency():
    entries = []
    for day in DAYS_OF_WEEK:
        entries.append({
            "day_of_week": day,
            "is_active": True,
            "start_time": "09:00",
            "end_time": "17:00",
            "hourly_rate": Decimal("30.00") if day.weekday == 5 else None,
        })
    pattern = validate_weekly_pattern(entries, "EUR")
    days = resolve_timeline(RESOURCE, pattern, [], MONDAY, MONDAY + timedelta(days=6))

    assert days[0].hourly_rate == Decimal("20.00")
    assert days[0].currency == "USD"
    assert days[5].hourly_rate == Decimal("30.00")
    assert days[5].currency == "EUR"
    assert days[5].cost == Decimal("240.00")


def test_output_is_contiguous_and_ascending():
    start, end = date(2024, 2, 20), date(2024, 3, 5)
    days = resolve_timeline(RESOURCE, default_weekly_pattern(), [], start, end)
    assert len(days) == (end - start).days + 1
    dates = [day.date for day in days]
    assert dates == sorted(set(dates))
    assert dates[0] == start and dates[-1] == end
    assert date(2024, 2, 29) in dates


def twenty_minute_week(end_time):
    return validate_weekly_pattern([
        {"day_of_week": day, "is_active": True, "start_time": "09:00", "end_time": end_time}
        for day in DAYS_OF_WEEK
    ])


def test_cost_is_rounded_per_day_and_summed():
    # 09:00-09:20 is 1/3 hour, reported as 0.33
    days = resolve_timeline(RESOURCE, twenty_minute_week("09:20"), [], MONDAY, MONDAY + timedelta(days=2))

    for day in days:
        assert day.hours_available == Decimal("0.33")
        assert day.cost == Decimal("6.60")

    summary = summarize_timeline(days)
    assert summary.total_hours == Decimal("0.99")
    assert summary.total_cost == Decimal("19.80")


def test_cost_matches_reported_hours_and_rate_on_every_entry():
    resource = ResourceBase(id=1, hourly_rate=Decimal("37.35"), currency="USD")
    exceptions = [
        holiday(MONDAY + timedelta(days=1), hours_available=Decimal("2.75"), exception_type="custom",
                hourly_rate=Decimal("19.99")),
        holiday(MONDAY + timedelta(days=2), hours_available=Decimal("0.01"), exception_type="custom"),
    ]
    days = resolve_timeline(resource, twenty_minute_week("17:20"), exceptions, MONDAY, MONDAY + timedelta(days=13))

    assert days[0].hours_available == Decimal("8.33")
    assert days[0].cost == Decimal("311.13")
    for day in days:
        expected = (day.hours_available * day.hourly_rate).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        assert day.cost == expected


def test_cost_rounds_half_up():
    resource = ResourceBase(id=1, hourly_rate=Decimal("0.25"), currency="USD")
    exception = holiday(MONDAY, hours_available=Decimal("0.50"), exception_type="custom")
    day = resolve_timeline(resource, default_weekly_pattern(), [exception], MONDAY, MONDAY)[0]
    # 0.5 * 0.25 = 0.125 -> 0.13
    assert day.cost == Decimal("0.13")


def test_range_limits():
    assert check_date_range(MONDAY, MONDAY) == 1
    assert check_date_range(MONDAY, MONDAY + timedelta(days=90)) == 91
    with pytest.raises(RangeTooLargeError):
        check_date_range(MONDAY, MONDAY + timedelta(days=91))
    with pytest.raises(InvalidDateRangeError):
        check_date_range(MONDAY, MONDAY - timedelta(days=1))


def test_single_day_range():
    days = resolve_timeline(RESOURCE, default_weekly_pattern(), [], MONDAY, MONDAY)
    assert len(days) == 1


def test_to_dict_wire_format():
    days = resolve_timeline(
        RESOURCE, default_weekly_pattern(), [holiday(MONDAY, notes="Closed")], MONDAY, MONDAY + timedelta(days=1)
    )
    assert days[0].to_dict() == {
        "date": "2024-01-01",
        "hoursAvailable": 0.0,
        "hourlyRate": 20.0,
        "currency": "USD",
        "isWorkingDay": False,
        "source": "exception",
        "dayOfWeek": 0,
        "cost": 0.0,
        "notes": "Closed",
    }
    assert "notes" not in days[1].to_dict()


class TestTimelineService:
    def setup_method(self):
        self.source = FakeAvailabilitySource()
        self.source.add(RESOURCE)

    def test_missing_pattern_falls_back_to_default_week(self):
        days = TimelineService(self.source, fallback_to_default_pattern=True).resolve_timeline(
            1, "2024-01-01", "2024-01-07"
        )
        assert [day.is_working_day for day in days] == [True] * 5 + [False] * 2

    def test_missing_pattern_without_fallback(self):
        with pytest.raises(PatternNotFoundError):
            TimelineService(self.source, fallback_to_default_pattern=False).resolve_timeline(
                1, "2024-01-01", "2024-01-07"
            )

    def test_unknown_resource(self):
        with pytest.raises(ResourceNotFoundError):
            TimelineService(self.source).resolve_timeline(99, "2024-01-01", "2024-01-07")

    def test_dates_are_validated_before_lookup(self):
        with pytest.raises(InvalidDateFormatError):
            TimelineService(self.source).resolve_timeline(99, "2024-1-1", "2024-01-07")
        with pytest.raises(RangeTooLargeError):
            TimelineService(self.source).resolve_timeline(99, "2024-01-01", "2024-06-01")

    def test_uses_stored_pattern_and_exceptions(self):
        entries = [
            {"day_of_week": day, "is_active": day.weekday == 0, "start_time": "10:00", "end_time": "14:00"}
            for day in DAYS_OF_WEEK
        ]
        self.source.patterns[1] = validate_weekly_pattern(entries)
        self.source.exceptions.append(holiday(date(2024, 1, 8)))

        summary = TimelineService(self.source).summarize(1, "2024-01-01", "2024-01-14")
        assert summary.total_days == 14
        assert summary.working_days == 1
        assert summary.exception_days == 1
        assert summary.total_hours == Decimal("4.00")
        assert summary.total_cost == Decimal("80.00")
