"""
Test reference time, freshness window and connectivity staleness
"""

from datetime import datetime, timedelta, timezone

from app.context import FixedClock
from app.services.freshness import classify_stale, dataset_reference_time, filter_fresh
from tests.conftest import REFERENCE_TIME, ago, make_kiosk


def test_reference_time_is_newest_timestamp():
    kiosks = [
        make_kiosk("A", timestamp=ago(hours=2)),
        make_kiosk("B", timestamp=ago(minutes=0)),
        make_kiosk("C", timestamp="garbage"),
        make_kiosk("D", timestamp=None),
    ]
    clock = FixedClock(datetime(2030, 1, 1, tzinfo=timezone.utc))

    assert dataset_reference_time(kiosks, clock) == REFERENCE_TIME


def test_reference_time_falls_back_to_clock():
    wall_clock = datetime(2025, 6, 1, 8, 30, tzinfo=timezone.utc)
    kiosks = [make_kiosk("A", timestamp=None), make_kiosk("B", timestamp="??")]

    assert dataset_reference_time(kiosks, FixedClock(wall_clock)) == wall_clock
    assert dataset_reference_time([], FixedClock(wall_clock)) == wall_clock


def test_filter_fresh_keeps_last_ten_days():
    a = make_kiosk("A", timestamp=ago(days=0))
    b = make_kiosk("B", timestamp=ago(days=9))
    c = make_kiosk("C", timestamp=ago(days=11))

    fresh = filter_fresh([a, b, c], REFERENCE_TIME)

    assert [k.id for k in fresh] == ["A", "B"]


def test_filter_fresh_excludes_exactly_ten_days_old():
    edge = make_kiosk("edge", timestamp=ago(days=10))
    just_inside = make_kiosk("inside", timestamp=ago(days=9, hours=23, minutes=59, seconds=59))

    fresh = filter_fresh([edge, just_inside], REFERENCE_TIME)

    assert [k.id for k in fresh] == ["inside"]


def test_filter_fresh_drops_missing_and_malformed_timestamps():
    kiosks = [
        make_kiosk("none", timestamp=None),
        make_kiosk("empty", timestamp=""),
        make_kiosk("junk", timestamp="yesterday-ish"),
        make_kiosk("ok", timestamp=ago(hours=1)),
    ]

    assert [k.id for k in filter_fresh(kiosks, REFERENCE_TIME)] == ["ok"]


def test_filter_fresh_preserves_order_and_identity():
    kiosks = [make_kiosk(str(i), timestamp=ago(days=i)) for i in range(5)]

    fresh = filter_fresh(kiosks, REFERENCE_TIME)

    assert fresh == kiosks
    assert all(a is b for a, b in zip(fresh, kiosks))


def test_filter_fresh_custom_window():
    kiosks = [make_kiosk("A", timestamp=ago(days=2)), make_kiosk("B", timestamp=ago(days=4))]

    fresh = filter_fresh(kiosks, REFERENCE_TIME, window=timedelta(days=3))

    assert [k.id for k in fresh] == ["A"]


def test_stale_after_eleven_minutes():
    kiosk = make_kiosk("K", timestamp="2024-01-01T11:49:00Z")
    assert classify_stale(kiosk, REFERENCE_TIME) is True


def test_not_stale_after_five_minutes():
    kiosk = make_kiosk("K", timestamp="2024-01-01T11:55:00Z")
    assert classify_stale(kiosk, REFERENCE_TIME) is False


def test_exactly_ten_minutes_is_not_stale():
    kiosk = make_kiosk("K", timestamp="2024-01-01T11:50:00Z")
    assert classify_stale(kiosk, REFERENCE_TIME) is False


def test_missing_or_unparseable_timestamp_is_stale():
    assert classify_stale(make_kiosk("K", timestamp=None), REFERENCE_TIME) is True
    assert classify_stale(make_kiosk("K", timestamp="soon"), REFERENCE_TIME) is True


def test_time_only_timestamp_does_not_move_reference_time():
    kiosks = [
        make_kiosk("A", timestamp=ago(minutes=1)),
        make_kiosk("B", timestamp=ago(days=2)),
        make_kiosk("junk", timestamp="12:00"),
    ]
    clock = FixedClock(datetime(2030, 1, 1, tzinfo=timezone.utc))

    reference_time = dataset_reference_time(kiosks, clock)

    assert reference_time == REFERENCE_TIME - timedelta(minutes=1)
    assert [k.id for k in filter_fresh(kiosks, reference_time)] == ["A", "B"]
