"""
Test distance and timestamp helpers
"""

from datetime import datetime, timezone

import pytest

from app.utils.location import haversine_miles, miles_to_km, parse_timestamp


def test_distance_to_self_is_zero():
    for lat, lon in [(0, 0), (45.5, -73.6), (-33.9, 151.2), (90, 0)]:
        assert haversine_miles(lat, lon, lat, lon) == 0


def test_distance_is_symmetric():
    a = (40.7128, -74.0060)
    b = (48.8566, 2.3522)
    assert haversine_miles(*a, *b) == pytest.approx(haversine_miles(*b, *a))


def test_known_distance_new_york_to_paris():
    distance = haversine_miles(40.7128, -74.0060, 48.8566, 2.3522)
    assert distance == pytest.approx(3627, abs=20)


def test_antipodal_points_do_not_raise():
    distance = haversine_miles(0, 0, 0, 180)
    # Half the circumference
    assert distance == pytest.approx(3958.8 * 3.141592653589793, rel=1e-9)


def test_one_degree_of_longitude_at_equator():
    assert haversine_miles(0, 0, 0, 0.36) == pytest.approx(24.87, abs=0.01)


def test_miles_to_km():
    assert miles_to_km(25) == pytest.approx(40.2335)


def test_parse_iso_with_z():
    assert parse_timestamp("2024-01-01T12:00:00Z") == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)


def test_parse_converts_offsets_to_utc():
    parsed = parse_timestamp("2024-01-01T13:00:00+01:00")
    assert parsed == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
    assert parsed.tzinfo == timezone.utc


def test_parse_naive_is_utc():
    assert parse_timestamp("2024-01-01 12:00:00") == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)


def test_parse_epoch_milliseconds():
    assert parse_timestamp(1704110400000) == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", [None, "", "not a date", "2024-13-45T99:00:00Z", True])
def test_parse_invalid_returns_none(value):
    assert parse_timestamp(value) is None


@pytest.mark.parametrize("value", ["12:00", "Monday", "5", "March", "March 5", "10:30 PM"])
def test_parse_rejects_strings_without_a_full_date(value):
    assert parse_timestamp(value) is None


def test_parse_loose_string_with_full_date():
    assert parse_timestamp("Mon, 01 Jan 2024 12:00:00 GMT") == (
        datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
    )
