"""
Kiosk Freshness
Reference-time detection, the trailing freshness window and the
connectivity-staleness check.

The reference time is the newest timestamp reported anywhere in the dataset,
not the server clock, so a backend that stops ingesting does not make every
kiosk look stale at once.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List

from app.context import Clock
from app.models.kiosk import Kiosk
from app.utils.location import parse_timestamp

logger = logging.getLogger(__name__)

FRESHNESS_WINDOW = timedelta(days=10)
CONNECTIVITY_STALE_AFTER = timedelta(minutes=10)


def dataset_reference_time(kiosks: Iterable[Kiosk], clock: Clock) -> datetime:
    """
    Get the dataset's "now": the maximum valid kiosk timestamp.

    Falls back to the clock when no kiosk has a parseable timestamp.
    """
    timestamps = [
        ts for ts in (parse_timestamp(kiosk.timestamp) for kiosk in kiosks)
        if ts is not None
    ]

    if timestamps:
        return max(timestamps)

    logger.warning("No valid timestamps found in kiosk data. Falling back to local time.")
    return clock.now()


def filter_fresh(
    kiosks: Iterable[Kiosk],
    reference_time: datetime,
    window: timedelta = FRESHNESS_WINDOW
) -> List[Kiosk]:
    """
    Keep kiosks updated within the trailing window.

    A kiosk is kept iff its timestamp is strictly after
    `reference_time - window`. Missing or malformed timestamps are dropped.
    """
    cutoff = reference_time - window
    fresh = []
    for kiosk in kiosks:
        ts = parse_timestamp(kiosk.timestamp)
        if ts is not None and ts > cutoff:
            fresh.append(kiosk)
    return fresh


def classify_stale(
    kiosk: Kiosk,
    reference_time: datetime,
    threshold: timedelta = CONNECTIVITY_STALE_AFTER
) -> bool:
    """
    Check whether a kiosk's charger count should not be trusted.

    True when the timestamp is missing, unparseable, or older than
    `reference_time - threshold`.
    """
    ts = parse_timestamp(kiosk.timestamp)
    if ts is None:
        return True
    return ts < reference_time - threshold
