"""Shift service - duration, pay, overtime and cancellation rules for shifts"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, time
from decimal import Decimal
from typing import Optional, Union

from ... import config
from .calculator import (
    Earnings,
    ZeroLengthPolicy,
    compute_duration_minutes,
    compute_earnings,
    round2,
)
from .schemas import ShiftRecord

logger = logging.getLogger(__name__)

CANCELLABLE_STATUSES = ("booked", "accepted", "assigned", "confirmed")

Policy = Optional[Union[str, ZeroLengthPolicy]]


@dataclass(frozen=True)
class ShiftComputation:
    record: ShiftRecord
    duration_minutes: int
    earnings: Earnings
    shift_type: str
    overnight: bool

    @property
    def duration_hours(self) -> float:
        return self.duration_minutes / 60


@dataclass(frozen=True)
class ShiftSummary:
    shift_count: int
    total_minutes: int
    total_pay_exact: Decimal
    overtime_minutes: int
    weekly_minutes: dict[str, int] = field(default_factory=dict)

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60

    @property
    def total_pay(self) -> Decimal:
        return round2(self.total_pay_exact)

    @property
    def overtime_hours(self) -> float:
        return self.overtime_minutes / 60

    @property
    def weekly_hours(self) -> dict[str, float]:
        return {week: minutes / 60 for week, minutes in self.weekly_minutes.items()}


def classify_shift_type(start_time: time, end_time: time) -> str:
    """Night if it starts from 22:00 or ends by 06:00, Evening from 17:00, else Day"""
    if start_time.hour >= 22 or end_time.hour <= 6:
        return "Night"
    if start_time.hour >= 17:
        return "Evening"
    return "Day"


def compute_shift(record: ShiftRecord, zero_length_policy: Policy = None) -> ShiftComputation:
    """Derive duration, earnings and shift type for a normalized shift"""
    minutes = compute_duration_minutes(record.start_time, record.end_time, zero_length_policy)
    earnings = compute_earnings(Decimal(minutes) / 60, record.hourly_rate)

    overnight = minutes > 0 and record.end_time <= record.start_time

    logger.debug(f"Shift {record.id}: {minutes} min, total £{earnings.total}")
    return ShiftComputation(
        record=record,
        duration_minutes=minutes,
        earnings=earnings,
        shift_type=classify_shift_type(record.start_time, record.end_time),
        overnight=overnight,
    )


def iso_week_key(record: ShiftRecord) -> str:
    year, week, _ = record.date.isocalendar()
    return f"{year}-W{week:02d}"


def summarize_shifts(
    records: Iterable[ShiftRecord],
    overtime_threshold: Optional[int] = None,
    zero_length_policy: Policy = None,
) -> ShiftSummary:
    """
    Aggregate hours and pay over several shifts.

    Pay is summed from the unrounded per-shift totals and rounded once.
    Overtime is counted per ISO week (of the shift start date) above the
    weekly threshold.
    """
    threshold = config.OVERTIME_WEEKLY_THRESHOLD_HOURS if overtime_threshold is None else overtime_threshold

    count = 0
    total_minutes = 0
    total_pay = Decimal("0")
    weekly: dict[str, int] = defaultdict(int)

    for record in records:
        computation = compute_shift(record, zero_length_policy)
        count += 1
        total_minutes += computation.duration_minutes
        total_pay += computation.earnings.total_exact
        weekly[iso_week_key(record)] += computation.duration_minutes

    overtime = sum(max(0, minutes - threshold * 60) for minutes in weekly.values())

    return ShiftSummary(
        shift_count=count,
        total_minutes=total_minutes,
        total_pay_exact=total_pay,
        overtime_minutes=overtime,
        weekly_minutes=dict(sorted(weekly.items())),
    )


def can_cancel(record: ShiftRecord, now: Optional[datetime] = None) -> bool:
    """
    A booked shift can be cancelled until it starts.

    Shift dates and times are local wall-clock values; an aware `now` is
    converted to local time before comparing.
    """
    if not record.status or record.status.lower() not in CANCELLABLE_STATUSES:
        return False

    now = now or datetime.now()
    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)

    starts_at = datetime.combine(record.date, record.start_time)
    return starts_at > now
