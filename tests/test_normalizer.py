from datetime import date, time
from decimal import Decimal

import pytest

from locums.domain.shifts.normalizer import normalize_shift, normalize_shifts
from locums.shared.errors import ValidationError


def test_normalizes_camel_case(night_shift):
    record = normalize_shift(night_shift)
    assert record.date == date(2025, 3, 1)
    assert record.start_time == time(22, 0)
    assert record.end_time == time(6, 0)
    assert record.hourly_rate == Decimal("28.50")
    assert record.id == "SH-1001"
    assert record.practice_postcode == "M1 1AA"


def test_accepts_snake_case_and_timestamps():
    record = normalize_shift(
        {"date": "2025-03-01T00:00:00.000Z", "start_time": "7", "end_time": "19:30", "hourly_rate": 30}
    )
    assert record.date == date(2025, 3, 1)
    assert record.start_time == time(7, 0)
    assert record.end_time == time(19, 30)
    assert record.hourly_rate == Decimal(30)


def test_missing_rate_is_allowed():
    record = normalize_shift({"date": "2025-03-01", "startTime": "09:00", "endTime": "17:00"})
    assert record.hourly_rate is None


def test_record_is_read_only(night_shift):
    record = normalize_shift(night_shift)
    with pytest.raises(Exception):
        record.hourly_rate = Decimal("1")


def test_reports_every_missing_field():
    with pytest.raises(ValidationError) as exc_info:
        normalize_shift({})
    assert set(exc_info.value.errors) == {"date", "startTime", "endTime"}


def test_empty_rate_is_an_error(night_shift):
    night_shift["hourlyRate"] = ""
    with pytest.raises(ValidationError) as exc_info:
        normalize_shift(night_shift)
    assert set(exc_info.value.errors) == {"hourlyRate"}


def test_malformed_values(night_shift):
    night_shift.update(date="2025-02-30", startTime="25:00", hourlyRate="-3")
    with pytest.raises(ValidationError) as exc_info:
        normalize_shift(night_shift)
    assert set(exc_info.value.errors) == {"date", "startTime", "hourlyRate"}


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        normalize_shift({"date": "tomorrow"})


@pytest.mark.parametrize("raw", [None, "2025-03-01", ["09:00", "17:00"], 42])
def test_rejects_non_mappings(raw):
    with pytest.raises(ValidationError) as exc_info:
        normalize_shift(raw)
    assert "shift" in exc_info.value.errors


def test_batch_reports_by_index(night_shift):
    with pytest.raises(ValidationError) as exc_info:
        normalize_shifts([night_shift, {**night_shift, "endTime": "6pm"}, night_shift])
    assert exc_info.value.errors.keys() == {"1.endTime"}


def test_batch_keeps_order(night_shift):
    records = normalize_shifts([night_shift, {**night_shift, "id": 7, "date": "2025-03-02"}])
    assert [r.id for r in records] == ["SH-1001", "7"]


def test_boolean_rate_is_a_field_error(night_shift):
    with pytest.raises(ValidationError) as excinfo:
        normalize_shift({**night_shift, "hourlyRate": True})
    assert set(excinfo.value.errors) == {"hourlyRate"}


def test_zero_length_rejected_per_field(night_shift):
    shift = {**night_shift, "startTime": "08:00", "endTime": "08:00"}
    with pytest.raises(ValidationError) as excinfo:
        normalize_shifts([night_shift, shift], zero_length_policy="reject")
    assert excinfo.value.errors == {"1.endTime": "Shift start and end times must differ"}


def test_zero_length_allowed_by_other_policies(night_shift):
    shift = {**night_shift, "startTime": "08:00", "endTime": "08:00"}
    assert normalize_shift(shift, zero_length_policy="full_day").end_time == time(8)
    assert normalize_shift(shift, zero_length_policy="zero").start_time == time(8)
