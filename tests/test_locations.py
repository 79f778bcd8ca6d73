import pytest

from locums.domain.locations import estimate_distance_miles, format_distance, postcode_to_city, within_radius
from locums.shared.validators import postcode_area, validate_uk_postcode


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("sw1a1aa", "SW1A 1AA"),
        ("SW1A 1AA", "SW1A 1AA"),
        (" m1  1aa ", "M1 1AA"),
        ("EH1", "EH1"),
    ],
)
def test_postcode_normalization(raw, expected):
    assert validate_uk_postcode(raw) == expected


@pytest.mark.parametrize("raw", ["12345", "SW1A 1A", "not a postcode"])
def test_invalid_postcodes(raw):
    with pytest.raises(ValueError):
        validate_uk_postcode(raw)


def test_postcode_area():
    assert postcode_area("SW1A 1AA") == "SW"
    assert postcode_area("m1 1aa") == "M"
    with pytest.raises(ValueError):
        postcode_area("")


def test_same_area_is_zero_miles():
    assert estimate_distance_miles("M1 1AA", "M20 2LN") == 0.0


def test_london_to_manchester():
    miles = estimate_distance_miles("SW1A 1AA", "M1 1AA")
    assert 150 < miles < 180
    assert miles == pytest.approx(estimate_distance_miles("M1 1AA", "SW1A 1AA"))


def test_unknown_area_has_no_distance():
    assert estimate_distance_miles("ZE1 0AA", "M1 1AA") is None
    assert postcode_to_city("ZE1 0AA") is None
    assert postcode_to_city("M1 1AA") == "Manchester"


def test_format_distance():
    assert format_distance(0.0) == "<1 mile"
    assert format_distance(0.99) == "<1 mile"
    assert format_distance(12.345) == "12.3 miles"


def test_within_radius():
    assert within_radius("M1 1AA", "M14 5RB", 5) is True
    assert within_radius("SW1A 1AA", "M1 1AA", 50) is False
    assert within_radius("ZE1 0AA", "ZE2 9AA", 1000) is False
