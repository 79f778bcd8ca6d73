"""
Shift duration and earnings arithmetic.

Durations are computed from minutes since midnight. An end time at or before
the start time means the shift runs past midnight; a shift never wraps more
than once, so every duration is within [0, 24] hours.

Money is handled as Decimal. Totals are rounded half-up to pence for display,
while the unrounded product stays available for aggregating several shifts.
"""

import logging
import math
from dataclasses import dataclass
from datetime import time
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional, Union

from ... import config
from ...shared.errors import InvalidTimeFormat
from ...shared.validators import RateInput, minutes_since_midnight, parse_rate

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60
PENNY = Decimal("0.01")

TimeInput = Union[str, time]
HoursInput = Union[int, float, Decimal]


class ZeroLengthPolicy(str, Enum):
    """How a shift whose start equals its end is measured"""

    FULL_DAY = "full_day"
    ZERO = "zero"
    REJECT = "reject"


def resolve_zero_length_policy(policy: Optional[Union[str, ZeroLengthPolicy]]) -> ZeroLengthPolicy:
    return ZeroLengthPolicy(policy or config.ZERO_LENGTH_SHIFT_POLICY)


def compute_duration_minutes(
    start_time: TimeInput,
    end_time: TimeInput,
    zero_length_policy: Optional[Union[str, ZeroLengthPolicy]] = None,
) -> int:
    """
    Shift length in whole minutes.

    Raises:
        InvalidTimeFormat: If either time is malformed, or the shift is
            zero-length under the "reject" policy
    """
    start = minutes_since_midnight(start_time)
    end = minutes_since_midnight(end_time)

    if end == start:
        policy = resolve_zero_length_policy(zero_length_policy)
        if policy is ZeroLengthPolicy.ZERO:
            return 0
        if policy is ZeroLengthPolicy.REJECT:
            raise InvalidTimeFormat(end_time, "Shift start and end times must differ")
        return MINUTES_PER_DAY

    if end < start:
        return MINUTES_PER_DAY - start + end
    return end - start


def compute_duration_hours(
    start_time: TimeInput,
    end_time: TimeInput,
    zero_length_policy: Optional[Union[str, ZeroLengthPolicy]] = None,
) -> float:
    """Shift length in hours, handling overnight wraparound"""
    return compute_duration_minutes(start_time, end_time, zero_length_policy) / 60


def round2(value: Decimal) -> Decimal:
    """Half-up rounding to pence"""
    return value.quantize(PENNY, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Earnings:
    hourly: Decimal
    total: Decimal
    total_exact: Decimal


def _hours_to_decimal(duration_hours: HoursInput) -> Decimal:
    if isinstance(duration_hours, bool):
        raise ValueError(f"Invalid duration {duration_hours!r}")
    if isinstance(duration_hours, float):
        if not math.isfinite(duration_hours):
            raise ValueError(f"Invalid duration {duration_hours!r}")
        hours = Decimal(str(duration_hours))
    elif isinstance(duration_hours, (int, Decimal)):
        hours = Decimal(duration_hours)
        if not hours.is_finite():
            raise ValueError(f"Invalid duration {duration_hours!r}")
    else:
        raise ValueError(f"Invalid duration {duration_hours!r}")

    if hours < 0:
        raise ValueError(f"Duration must not be negative, got {duration_hours!r}")
    return hours


def compute_earnings(duration_hours: HoursInput, hourly_rate: RateInput) -> Earnings:
    """
    Hourly and total pay for a shift.

    A missing rate (None) pays nothing. A malformed rate, including an empty
    string, raises InvalidRate so it is never mistaken for a genuine zero.
    """
    hours = _hours_to_decimal(duration_hours)
    rate = parse_rate(hourly_rate)

    if rate is None:
        logger.debug("No hourly rate given, earnings are zero")
        zero = Decimal("0")
        return Earnings(hourly=zero, total=round2(zero), total_exact=zero)

    exact = rate * hours
    return Earnings(hourly=rate, total=round2(exact), total_exact=exact)
