"""
Location Utility Functions
Helper functions for distance calculation and timestamp parsing
"""

import math
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from dateutil import parser

logger = logging.getLogger(__name__)

# Earth radius in miles
EARTH_RADIUS_MILES = 3958.8

KM_PER_MILE = 1.60934

# Two unrelated defaults; a loose string that parses differently under each
# took part of its date from the default rather than from the string
_SENTINEL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate distance between two coordinates using Haversine formula.

    Args:
        lat1, lon1: First coordinate
        lat2, lon2: Second coordinate

    Returns:
        Distance in miles
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = math.sin(delta_lat / 2) ** 2 + \
        math.cos(lat1_rad) * math.cos(lat2_rad) * \
        math.sin(delta_lon / 2) ** 2

    # Floating point can push `a` slightly outside [0, 1] near antipodes
    a = min(1.0, max(0.0, a))

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_MILES * c


def miles_to_km(miles: float) -> float:
    """Convert miles to kilometres."""
    return miles * KM_PER_MILE


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a kiosk timestamp into an aware UTC datetime.

    Accepts ISO 8601 strings (with or without 'Z'), looser strings that
    spell out a full calendar date, epoch milliseconds and datetime objects.
    Partial strings such as "12:00" or "Monday" are rejected. Naive values
    are taken as UTC.

    Returns:
        Parsed datetime, or None if the value is missing or unparseable
    """
    if value is None or value == "":
        return None

    try:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, bool):
            return None
        elif isinstance(value, (int, float)):
            parsed = datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        elif isinstance(value, str):
            try:
                parsed = parser.isoparse(value.strip())
            except ValueError:
                parsed = _parse_full_date(value)
        else:
            return None
    except (ValueError, OverflowError, OSError) as e:
        logger.debug(f"Unparseable timestamp {value!r}: {e}")
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed.astimezone(timezone.utc)


def _parse_full_date(value: str) -> datetime:
    """Parse a loose date string, refusing to fill in year, month or day."""
    first, second = (parser.parse(value, default=default) for default in _SENTINEL_DEFAULTS)
    if first != second:
        raise ValueError("timestamp is missing its year, month or day")
    return first
