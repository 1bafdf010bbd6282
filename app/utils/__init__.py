"""
Utility Functions
"""

from app.utils.location import (
    haversine_miles,
    miles_to_km,
    parse_timestamp
)

__all__ = [
    "haversine_miles",
    "miles_to_km",
    "parse_timestamp"
]
