"""
Test proximity ranking and direct-link selection
"""

from app.services.proximity import filter_by_ids, rank_by_proximity
from tests.conftest import REFERENCE_TIME, ago, make_kiosk


def test_radius_boundary_at_25_miles():
    inside = make_kiosk("inside", lat=0, lon=0.36)
    outside = make_kiosk("outside", lat=0, lon=0.37)

    ranked = rank_by_proximity([inside, outside], 0, 0, REFERENCE_TIME, radius_miles=25)

    assert [r.kiosk.id for r in ranked] == ["inside"]
    assert ranked[0].distance_from_query <= 25


def test_sorted_nearest_first():
    kiosks = [
        make_kiosk("far", lat=0, lon=0.3),
        make_kiosk("near", lat=0, lon=0.01),
        make_kiosk("mid", lat=0.1, lon=0.1),
    ]

    ranked = rank_by_proximity(kiosks, 0, 0, REFERENCE_TIME)

    assert [r.kiosk.id for r in ranked] == ["near", "mid", "far"]
    distances = [r.distance_from_query for r in ranked]
    assert distances == sorted(distances)
    assert all(d <= 25 for d in distances)


def test_ties_keep_dataset_order():
    kiosks = [
        make_kiosk("east", lat=0, lon=0.1),
        make_kiosk("north", lat=0.1, lon=0),
        make_kiosk("west", lat=0, lon=-0.1),
    ]

    ranked = rank_by_proximity(kiosks, 0, 0, REFERENCE_TIME)

    # all three are exactly 0.1 degrees of arc from the origin
    assert len({r.distance_from_query for r in ranked}) == 1
    assert [r.kiosk.id for r in ranked] == ["east", "north", "west"]


def test_stale_kiosks_report_zero_chargers_but_real_slots():
    kiosks = [
        make_kiosk("fresh", lon=0.01, timestamp=ago(minutes=5), chargers=4, slots=2),
        make_kiosk("stale", lon=0.02, timestamp=ago(minutes=11), chargers=4, slots=2),
    ]

    fresh, stale = rank_by_proximity(kiosks, 0, 0, REFERENCE_TIME)

    assert fresh.is_connectivity_stale is False
    assert fresh.reported_chargers == 4
    assert stale.is_connectivity_stale is True
    assert stale.reported_chargers == 0
    assert stale.reported_slots == 2
    # the record itself is untouched
    assert stale.kiosk.available_chargers == 4


def test_ranking_does_not_change_kiosks():
    kiosk = make_kiosk("K", lat=0.05, lon=0.05)

    ranked = rank_by_proximity([kiosk], 0, 0, REFERENCE_TIME)

    assert ranked[0].kiosk is kiosk
    assert not hasattr(kiosk, "distance_from_query")


def test_nothing_in_range_is_empty_list():
    kiosks = [make_kiosk("paris", lat=48.8566, lon=2.3522)]

    assert rank_by_proximity(kiosks, 40.7128, -74.0060, REFERENCE_TIME) == []


def test_direct_link_preserves_dataset_order():
    kiosks = [make_kiosk("K1"), make_kiosk("K2"), make_kiosk("K3")]

    selected = filter_by_ids(kiosks, ["K3", "K1"], REFERENCE_TIME)

    assert [r.kiosk.id for r in selected] == ["K1", "K3"]
    assert all(r.distance_from_query is None for r in selected)


def test_direct_link_classifies_staleness():
    kiosks = [
        make_kiosk("K1", timestamp=ago(minutes=30), chargers=6),
        make_kiosk("K2", timestamp=ago(minutes=1), chargers=6),
    ]

    stale, fresh = filter_by_ids(kiosks, {"K1", "K2"}, REFERENCE_TIME)

    assert stale.is_connectivity_stale and stale.reported_chargers == 0
    assert not fresh.is_connectivity_stale and fresh.reported_chargers == 6


def test_direct_link_unknown_ids():
    assert filter_by_ids([make_kiosk("K1")], {"nope"}, REFERENCE_TIME) == []
