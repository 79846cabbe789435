"""
Time & Numeric Validators

Pure checks shared by the pattern validator, the timeline resolver and the
request handlers:
- HH:MM wall-clock times and same-day durations
- decimal precision for rates and hours
- currency code shape and ISO dates
"""

import re
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from fractions import Fraction
from typing import Optional, Union

from resource_planner.core.exceptions import (
    InvalidCurrencyError,
    InvalidDateFormatError,
    InvalidFormatError,
    InvalidRangeError,
    PrecisionError,
    ValidationError,
)

TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):([0-5][0-9])$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def parse_time_of_day(value: str, field: str = "time") -> time:
    """Parse a zero-padded 24h ``HH:MM`` string."""
    if not isinstance(value, str):
        raise InvalidFormatError(f"{field} must be a string in HH:MM format", field=field)
    match = TIME_PATTERN.match(value)
    if not match:
        raise InvalidFormatError(f"Invalid time '{value}' for {field}. Use HH:MM (24-hour)", field=field)
    return time(int(match.group(1)), int(match.group(2)))


def format_time_of_day(value: time) -> str:
    return value.strftime("%H:%M")


def duration_hours(start: Union[str, time], end: Union[str, time], field: str = "end_time") -> Fraction:
    """
    Exact number of hours between two same-day times.

    Raises InvalidRangeError unless ``end`` is strictly after ``start``;
    overnight spans are not supported.
    """
    if isinstance(start, str):
        start = parse_time_of_day(start, "start_time")
    if isinstance(end, str):
        end = parse_time_of_day(end, "end_time")

    start_minutes = start.hour * 60 + start.minute
    end_minutes = end.hour * 60 + end.minute
    if end_minutes <= start_minutes:
        raise InvalidRangeError(
            f"End time {format_time_of_day(end)} must be after start time {format_time_of_day(start)}",
            field=field,
        )
    return Fraction(end_minutes - start_minutes, 60)


def to_decimal(value: Number, field: str = "value") -> Decimal:
    """Convert to Decimal without going through binary float arithmetic."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field=field)
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        # repr of a float is the shortest string that round-trips, so 8.005 stays 8.005
        result = Decimal(repr(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"{field} must be a number", field=field)
    if not result.is_finite():
        raise ValidationError(f"{field} must be a finite number", field=field)
    return result


def validate_decimal_precision(value: Number, max_fractional_digits: int = 2, field: str = "value") -> Decimal:
    """
    Require ``value`` to be exactly representable with the given number of
    fractional digits. 8.00 and 8.01 pass, 8.005 fails.
    """
    amount = to_decimal(value, field)
    step = Decimal(1).scaleb(-max_fractional_digits)
    if amount.quantize(step, rounding=ROUND_HALF_UP) != amount:
        raise PrecisionError(
            f"{field} can have at most {max_fractional_digits} decimal places (got {value})",
            field=field,
        )
    return amount


def validate_amount(
    value: Number,
    field: str,
    minimum: Decimal = Decimal("0"),
    maximum: Optional[Decimal] = None,
    allow_minimum: bool = True,
) -> Decimal:
    """Precision check plus bounds, used for rates and hours."""
    amount = validate_decimal_precision(value, 2, field)
    if amount < minimum or (amount == minimum and not allow_minimum):
        qualifier = "at least" if allow_minimum else "greater than"
        raise ValidationError(f"{field} must be {qualifier} {minimum}", field=field)
    if maximum is not None and amount > maximum:
        raise ValidationError(f"{field} cannot exceed {maximum}", field=field)
    return amount


def validate_currency_code(value: str, field: str = "currency") -> str:
    """Exactly three uppercase ASCII letters. Format only, no ISO-4217 lookup."""
    if not isinstance(value, str) or not CURRENCY_PATTERN.match(value):
        raise InvalidCurrencyError(
            f"Currency must be an uppercase 3-letter code (e.g., USD, EUR, GBP), got '{value}'",
            field=field,
        )
    return value


def parse_iso_date(value: Union[str, date], field: str = "date") -> date:
    """Parse a strict ``YYYY-MM-DD`` string."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise InvalidDateFormatError(f"{field} must be a valid date in YYYY-MM-DD format", field=field)
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateFormatError(f"{field} '{value}' is not a valid calendar date", field=field)


def round_money(value: Union[Decimal, Fraction, int]) -> Decimal:
    """Round half-up to cents. Accepts exact Fractions so no drift is introduced before rounding."""
    with localcontext() as ctx:
        ctx.prec = 40
        if isinstance(value, Fraction):
            value = Decimal(value.numerator) / Decimal(value.denominator)
        return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
