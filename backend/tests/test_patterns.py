from decimal import Decimal

import pytest

from resource_planner.core.exceptions import (
    IncompleteWeekError,
    InvalidCurrencyError,
    InvalidFormatError,
    InvalidRangeError,
    NoActiveDaysError,
    PrecisionError,
    ValidationError,
)
from resource_planner.services.patterns import (
    DAYS_OF_WEEK,
    DailyPattern,
    DayOfWeek,
    default_weekly_pattern,
    validate_weekly_pattern,
)


def week(active=("monday", "tuesday", "wednesday", "thursday", "friday"), start="09:00", end="17:00", **overrides):
    days = []
    for day in DAYS_OF_WEEK:
        entry = {
            "day_of_week": day.value,
            "is_active": day.value in active,
            "start_time": start,
            "end_time": end,
        }
        entry.update(overrides.get(day.value, {}))
        days.append(entry)
    return days


def test_day_of_week_index_matches_date_weekday():
    assert DayOfWeek.MONDAY.weekday == 0
    assert DayOfWeek.SUNDAY.weekday == 6
    assert DayOfWeek.from_weekday(2) is DayOfWeek.WEDNESDAY


def test_validate_weekly_pattern_returns_all_seven_days():
    pattern = validate_weekly_pattern(week(), "EUR")
    assert len(pattern.days) == 7
    assert pattern.currency == "EUR"
    assert pattern.active_days == [
        DayOfWeek.MONDAY, DayOfWeek.TUESDAY, DayOfWeek.WEDNESDAY, DayOfWeek.THURSDAY, DayOfWeek.FRIDAY,
    ]
    assert pattern.for_weekday(0).hours == 8
    assert pattern.for_weekday(6).hours == 0


def test_validate_weekly_pattern_accepts_any_order():
    days = list(reversed(week()))
    pattern = validate_weekly_pattern(days)
    assert pattern.for_weekday(0).day_of_week == DayOfWeek.MONDAY


def test_validate_weekly_pattern_accepts_daily_pattern_objects():
    days = [DailyPattern(day, day == DayOfWeek.MONDAY, "08:00", "10:00") for day in DAYS_OF_WEEK]
    pattern = validate_weekly_pattern(days)
    assert pattern.active_days == [DayOfWeek.MONDAY]


def test_missing_day_is_incomplete_week():
    days = week()[:6]
    with pytest.raises(IncompleteWeekError) as exc:
        validate_weekly_pattern(days)
    assert exc.value.details["missing"] == ["sunday"]


def test_duplicated_day_is_incomplete_week():
    days = week()
    days[6] = dict(days[0])
    with pytest.raises(IncompleteWeekError) as exc:
        validate_weekly_pattern(days)
    assert exc.value.details["duplicated"] == ["monday"]
    assert exc.value.details["missing"] == ["sunday"]


def test_unknown_day_label():
    days = week()
    days[0]["day_of_week"] = "mon"
    with pytest.raises(IncompleteWeekError):
        validate_weekly_pattern(days)


def test_eight_days_is_incomplete_week():
    days = week() + [week()[0]]
    with pytest.raises(IncompleteWeekError):
        validate_weekly_pattern(days)


def test_all_inactive_week_is_rejected():
    with pytest.raises(NoActiveDaysError):
        validate_weekly_pattern(week(active=()))


def test_only_monday_active_is_valid():
    pattern = validate_weekly_pattern(week(active=("monday",)))
    assert pattern.active_days == [DayOfWeek.MONDAY]


def test_active_day_needs_end_after_start():
    days = week(tuesday={"start_time": "17:00", "end_time": "09:00"})
    with pytest.raises(InvalidRangeError) as exc:
        validate_weekly_pattern(days)
    assert exc.value.field == "tuesday.end_time"


def test_inactive_day_skips_range_check_but_not_format():
    # 00:00-00:00 is fine on a day off
    validate_weekly_pattern(week(saturday={"start_time": "00:00", "end_time": "00:00"}))

    with pytest.raises(InvalidFormatError) as exc:
        validate_weekly_pattern(week(sunday={"start_time": "7:00"}))
    assert exc.value.field == "sunday.start_time"


def test_rate_override_precision_and_sign():
    pattern = validate_weekly_pattern(week(friday={"hourly_rate": "25.50"}))
    assert pattern.for_weekday(4).hourly_rate == Decimal("25.50")

    with pytest.raises(PrecisionError):
        validate_weekly_pattern(week(friday={"hourly_rate": "25.505"}))
    with pytest.raises(ValidationError):
        validate_weekly_pattern(week(friday={"hourly_rate": "-1"}))


def test_invalid_currency():
    with pytest.raises(InvalidCurrencyError):
        validate_weekly_pattern(week(), "usd")


def test_default_weekly_pattern():
    pattern = default_weekly_pattern()
    assert pattern.currency == "USD"
    for day in pattern.days:
        if day.day_of_week in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY):
            assert not day.is_active
            assert day.hours == 0
        else:
            assert day.is_active
            assert (day.start_time, day.end_time) == ("09:00", "17:00")
            assert day.hourly_rate is None
    # The default week is itself a valid pattern
    validate_weekly_pattern(pattern.days, pattern.currency)
