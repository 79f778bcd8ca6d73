"""Shared validation utilities"""

import math
import re
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from .errors import InvalidRate, InvalidTimeFormat

TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3])(?::([0-5]\d))?$")
DATE_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$")
RATE_PATTERN = re.compile(r"^(\d+(\.\d*)?|\.\d+)$")

# Outward code (area + district) and optional inward code
POSTCODE_PATTERN = re.compile(r"^([A-Z]{1,2}\d[A-Z\d]?)(\d[A-Z]{2})?$")

RateInput = Union[str, int, float, Decimal, None]


def parse_time_of_day(value: Union[str, time]) -> time:
    """
    Parse a 24-hour time of day.

    Args:
        value: "HH:MM" or "HH" string, or a datetime.time

    Returns:
        datetime.time (seconds are dropped)

    Raises:
        InvalidTimeFormat: If the value is not a valid time of day
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        raise InvalidTimeFormat(value)

    match = TIME_PATTERN.match(value.strip())
    if not match:
        raise InvalidTimeFormat(value)

    hour = int(match.group(1))
    minute = int(match.group(2) or 0)
    return time(hour, minute)


def minutes_since_midnight(value: Union[str, time]) -> int:
    t = parse_time_of_day(value)
    return t.hour * 60 + t.minute


def parse_iso_date(value: Union[str, date]) -> date:
    """
    Parse an ISO-8601 calendar date.

    Full timestamps ("2025-03-01T09:00:00Z") are accepted and truncated to
    their date part, since the marketplace API returns both shapes.

    Raises:
        ValueError: If the value is not an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")

    match = DATE_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD")
    try:
        return date.fromisoformat(match.group(1))
    except ValueError as e:
        raise ValueError(f"Invalid date {value!r}: {e}") from e


def parse_rate(value: RateInput) -> Optional[Decimal]:
    """
    Coerce an hourly rate to Decimal.

    Args:
        value: Number, Decimal, decimal string, or None

    Returns:
        Non-negative Decimal, or None when the rate is missing

    Raises:
        InvalidRate: If the value is malformed, negative or not finite.
            An empty string is malformed, not missing.
    """
    if value is None:
        return None

    # bool is an int subclass; "True" is never a rate
    if isinstance(value, bool):
        raise InvalidRate(value)

    if isinstance(value, str):
        text = value.strip()
        if not RATE_PATTERN.match(text):
            raise InvalidRate(value)
        try:
            return Decimal(text)
        except InvalidOperation as e:
            raise InvalidRate(value) from e

    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidRate(value)
        rate = Decimal(str(value))
    elif isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidRate(value)
        rate = value
    elif isinstance(value, int):
        rate = Decimal(value)
    else:
        raise InvalidRate(value)

    if rate < 0:
        raise InvalidRate(value, f"Hourly rate must not be negative, got {value!r}")
    return rate


def validate_uk_postcode(postcode: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a UK postcode.

    Args:
        postcode: Full postcode ("sw1a1aa", "SW1A 1AA") or outward code ("SW1A")

    Returns:
        Upper-case postcode with a single space before the inward code

    Raises:
        ValueError: If the postcode format is invalid
    """
    if not postcode:
        return postcode

    compact = re.sub(r"\s+", "", postcode).upper()
    match = POSTCODE_PATTERN.match(compact)
    if not match:
        raise ValueError(f"Invalid UK postcode {postcode!r}")

    outward, inward = match.group(1), match.group(2)
    return f"{outward} {inward}" if inward else outward


def postcode_area(postcode: str) -> str:
    """Leading letters of a postcode ("SW1A 1AA" -> "SW", "M1" -> "M")"""
    normalized = validate_uk_postcode(postcode)
    if not normalized:
        raise ValueError("Postcode is required")
    return re.match(r"^[A-Z]+", normalized).group(0)
