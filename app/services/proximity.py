"""
Proximity Ranking
Distance filtering for location searches and identifier filtering for
direct links.
"""

import logging
from datetime import datetime, timedelta
from typing import Collection, Iterable, List

from app.models.kiosk import Kiosk, RankedKiosk
from app.services.freshness import CONNECTIVITY_STALE_AFTER, classify_stale
from app.utils.location import haversine_miles

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_MILES = 25.0


def rank_by_proximity(
    kiosks: Iterable[Kiosk],
    origin_lat: float,
    origin_lon: float,
    reference_time: datetime,
    radius_miles: float = DEFAULT_RADIUS_MILES,
    stale_after: timedelta = CONNECTIVITY_STALE_AFTER
) -> List[RankedKiosk]:
    """
    Rank kiosks within a radius of the origin, nearest first.

    Args:
        kiosks: Freshness-filtered kiosks
        origin_lat, origin_lon: Search origin
        reference_time: Dataset reference time, for staleness
        radius_miles: Inclusive search radius
        stale_after: Age past which charger counts are not trusted

    Returns:
        Kiosks within the radius sorted by distance. Ties keep dataset
        order. An empty list means nothing is in range.
    """
    nearby = []
    for kiosk in kiosks:
        distance = haversine_miles(origin_lat, origin_lon, kiosk.lat, kiosk.lon)
        if distance > radius_miles:
            continue
        nearby.append(RankedKiosk(
            kiosk=kiosk,
            distance_from_query=distance,
            is_connectivity_stale=classify_stale(kiosk, reference_time, stale_after)
        ))

    # list.sort is stable
    nearby.sort(key=lambda ranked: ranked.distance_from_query)

    logger.info(f"Found {len(nearby)} kiosks in {radius_miles}mi radius")

    return nearby


def filter_by_ids(
    kiosks: Iterable[Kiosk],
    ids: Collection[str],
    reference_time: datetime,
    stale_after: timedelta = CONNECTIVITY_STALE_AFTER
) -> List[RankedKiosk]:
    """
    Select kiosks by identifier, in dataset order.

    The order of `ids` is ignored. No distance is attached.
    """
    wanted = set(ids)
    return [
        RankedKiosk(
            kiosk=kiosk,
            is_connectivity_stale=classify_stale(kiosk, reference_time, stale_after)
        )
        for kiosk in kiosks
        if kiosk.id in wanted
    ]
