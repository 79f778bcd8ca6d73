from decimal import Decimal

import pytest

from locums import config
from locums.domain.shifts.calculator import (
    ZeroLengthPolicy,
    compute_duration_hours,
    compute_duration_minutes,
    compute_earnings,
    round2,
)
from locums.shared.errors import InvalidRate, InvalidTimeFormat


class TestDuration:
    @pytest.mark.parametrize(
        "start,end,hours",
        [
            ("09:00", "17:00", 8.0),
            ("08:30", "12:45", 4.25),
            ("00:00", "23:59", 1439 / 60),
            ("9", "17", 8.0),
        ],
    )
    def test_same_day(self, start, end, hours):
        assert compute_duration_hours(start, end) == hours

    def test_same_day_is_exact_difference(self):
        for start_min in range(0, 1440, 97):
            for end_min in range(start_min + 1, 1440, 131):
                start = f"{start_min // 60:02d}:{start_min % 60:02d}"
                end = f"{end_min // 60:02d}:{end_min % 60:02d}"
                assert compute_duration_hours(start, end) == (end_min - start_min) / 60

    @pytest.mark.parametrize(
        "start,end,hours",
        [
            ("22:00", "06:00", 8.0),
            ("23:30", "00:15", 0.75),
            ("20:00", "08:00", 12.0),
            ("22:00", "00:00", 2.0),
        ],
    )
    def test_overnight_wraps_midnight(self, start, end, hours):
        assert compute_duration_hours(start, end) == hours

    def test_overnight_always_within_a_day(self):
        for start_min in range(0, 1440, 89):
            for end_min in range(0, start_min + 1, 113):
                start = f"{start_min // 60:02d}:{start_min % 60:02d}"
                end = f"{end_min // 60:02d}:{end_min % 60:02d}"
                hours = compute_duration_hours(start, end)
                assert 0 < hours <= 24
                assert hours == (1440 - start_min + end_min) / 60

    @pytest.mark.parametrize("bad", ["24:00", "9:60", "abc", "", "09-00", "09:00:00", None, 900])
    def test_invalid_time(self, bad):
        with pytest.raises(InvalidTimeFormat):
            compute_duration_hours(bad, "17:00")
        with pytest.raises(InvalidTimeFormat):
            compute_duration_hours("09:00", bad)

    def test_zero_length_defaults_to_full_day(self):
        assert compute_duration_hours("08:00", "08:00") == 24.0

    def test_zero_length_policies(self):
        assert compute_duration_hours("08:00", "08:00", ZeroLengthPolicy.ZERO) == 0.0
        assert compute_duration_minutes("08:00", "08:00", "full_day") == 1440
        with pytest.raises(InvalidTimeFormat):
            compute_duration_hours("08:00", "08:00", ZeroLengthPolicy.REJECT)

    def test_zero_length_policy_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "ZERO_LENGTH_SHIFT_POLICY", "zero")
        assert compute_duration_hours("08:00", "08:00") == 0.0


class TestEarnings:
    def test_night_shift_total(self):
        earnings = compute_earnings(8, "28.50")
        assert earnings.hourly == Decimal("28.50")
        assert earnings.total == Decimal("228.00")

    @pytest.mark.parametrize("rate", ["0", "28.50", 15, 42.75, Decimal("99.99")])
    def test_zero_duration(self, rate):
        earnings = compute_earnings(0, rate)
        assert earnings.hourly == Decimal(str(rate))
        assert earnings.total == 0

    @pytest.mark.parametrize("bad", ["invalid", "", "  ", "-5", "£28.50", "1e3", -5, float("nan"), float("inf"), True])
    def test_invalid_rate(self, bad):
        with pytest.raises(InvalidRate):
            compute_earnings(8, bad)

    def test_missing_rate_is_zero(self):
        earnings = compute_earnings(8, None)
        assert earnings.total == 0
        assert earnings.hourly == 0

    def test_rounds_half_up(self):
        assert compute_earnings(1, "10.005").total == Decimal("10.01")
        assert round2(Decimal("2.345")) == Decimal("2.35")

    def test_exact_total_kept(self):
        earnings = compute_earnings(Decimal(20) / 60, "10")
        assert earnings.total == Decimal("3.33")
        assert earnings.total_exact != earnings.total
        assert round2(earnings.total_exact * 3) == Decimal("10.00")

    def test_rate_with_whitespace(self):
        assert compute_earnings(2, " 30 ").total == Decimal("60.00")

    def test_negative_duration_rejected(self):
        with pytest.raises(ValueError):
            compute_earnings(-1, "20")
