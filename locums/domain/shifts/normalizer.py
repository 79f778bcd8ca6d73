"""
Shift record normalizer.

Single entry point for raw shift data coming from the marketplace API. Every
date, time and rate is parsed here once, so the calculators only ever see a
typed ShiftRecord and malformed input is reported per field instead of
surfacing later as NaN or a silent zero.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from ...shared.errors import InvalidRate, InvalidTimeFormat, ValidationError
from ...shared.validators import parse_iso_date, parse_rate, parse_time_of_day
from .calculator import ZeroLengthPolicy, resolve_zero_length_policy
from .schemas import ShiftRecord

logger = logging.getLogger(__name__)

# UI field name -> accepted keys, camelCase first
FIELD_KEYS = {
    "date": ("date", "shift_date"),
    "startTime": ("startTime", "start_time"),
    "endTime": ("endTime", "end_time"),
    "hourlyRate": ("hourlyRate", "hourly_rate"),
    "id": ("id",),
    "role": ("role",),
    "status": ("status",),
    "practicePostcode": ("practicePostcode", "practice_postcode", "careHomePostcode"),
}

_MISSING = object()

Policy = Optional[Union[str, ZeroLengthPolicy]]


def _pick(raw: Mapping, field: str) -> Any:
    for key in FIELD_KEYS[field]:
        if key in raw:
            return raw[key]
    return _MISSING


def _is_blank(value: Any) -> bool:
    return value is _MISSING or value is None or (isinstance(value, str) and not value.strip())


def _optional_text(raw: Mapping, field: str):
    value = _pick(raw, field)
    if _is_blank(value):
        return None
    return str(value).strip()


def normalize_shift(raw: Any, zero_length_policy: Policy = None) -> ShiftRecord:
    """
    Validate a raw shift mapping and build a ShiftRecord.

    Raises:
        ValidationError: With one message per invalid field
    """
    if not isinstance(raw, Mapping):
        raise ValidationError({"shift": "Shift must be an object"})

    errors: dict[str, str] = {}

    shift_date = None
    value = _pick(raw, "date")
    if _is_blank(value):
        errors["date"] = "Date is required"
    else:
        try:
            shift_date = parse_iso_date(value)
        except ValueError as e:
            errors["date"] = str(e)

    times = {}
    for field, label in (("startTime", "Start time"), ("endTime", "End time")):
        value = _pick(raw, field)
        if _is_blank(value):
            errors[field] = f"{label} is required"
            continue
        try:
            times[field] = parse_time_of_day(value)
        except InvalidTimeFormat as e:
            errors[field] = str(e)

    if (
        len(times) == 2
        and times["startTime"] == times["endTime"]
        and resolve_zero_length_policy(zero_length_policy) is ZeroLengthPolicy.REJECT
    ):
        errors["endTime"] = "Shift start and end times must differ"

    hourly_rate = None
    value = _pick(raw, "hourlyRate")
    if value is not _MISSING:
        try:
            hourly_rate = parse_rate(value)
        except InvalidRate as e:
            errors["hourlyRate"] = str(e)

    if errors:
        logger.warning(f"Rejected shift {raw.get('id', '<no id>')}: {errors}")
        raise ValidationError(errors)

    return ShiftRecord(
        date=shift_date,
        start_time=times["startTime"],
        end_time=times["endTime"],
        hourly_rate=hourly_rate,
        id=_optional_text(raw, "id"),
        role=_optional_text(raw, "role"),
        status=_optional_text(raw, "status"),
        practice_postcode=_optional_text(raw, "practicePostcode"),
    )


def normalize_shifts(raws: Iterable[Any], zero_length_policy: Policy = None) -> list[ShiftRecord]:
    """
    Normalize a batch of shifts.

    Raises:
        ValidationError: Keys are "<index>.<field>" for every failing shift
    """
    records = []
    errors: dict[str, str] = {}
    for index, raw in enumerate(raws):
        try:
            records.append(normalize_shift(raw, zero_length_policy))
        except ValidationError as e:
            for field, message in e.errors.items():
                errors[f"{index}.{field}"] = message

    if errors:
        raise ValidationError(errors)
    return records
