"""
Postal Code Geocoding
Resolves (country, postal code) to coordinates through the upstream
geocode endpoint: GET <url>?country=<cc>&postal=<code> -> {"lat", "lon"}
"""

import asyncio
import logging

import requests
from pydantic import ValidationError

from app.errors import GeocodeInvalidInput, GeocodeUnavailable
from app.models.search import Coordinates

logger = logging.getLogger(__name__)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class PostalCodeGeocoder:
    """Single-shot postal code lookups, no retries"""

    def __init__(self, url: str, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    def geocode(self, country: str, postal_code: str) -> Coordinates:
        """
        Look up a postal code (blocking).

        Args:
            country: Lower-case country code
            postal_code: Sanitized postal code

        Returns:
            Coordinates of the postal code

        Raises:
            GeocodeInvalidInput: Service rejected the code (any non-2xx)
            GeocodeUnavailable: Transport failure or no numeric lat/lon
        """
        try:
            response = requests.get(
                self.url,
                params={"country": country, "postal": postal_code},
                timeout=self.timeout
            )
        except requests.Timeout:
            logger.warning(f"Geocode API timeout for {country}/{postal_code}")
            raise GeocodeUnavailable("Geocode API timeout")
        except requests.RequestException as e:
            logger.error(f"Geocode API request error: {e}")
            raise GeocodeUnavailable(f"Geocode API request error: {e}")

        if not response.ok:
            logger.info(
                f"Geocode API rejected {country}/{postal_code}: {response.status_code}"
            )
            raise GeocodeInvalidInput(f"Geocode API returned {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            raise GeocodeUnavailable("Geocode API returned invalid JSON")

        if not isinstance(data, dict) or not _is_number(data.get("lat")) \
                or not _is_number(data.get("lon")):
            logger.warning(f"Geocode API returned no coordinates for {country}/{postal_code}")
            raise GeocodeUnavailable("Geocode response missing numeric lat/lon")

        try:
            return Coordinates(lat=data["lat"], lon=data["lon"])
        except ValidationError:
            raise GeocodeUnavailable("Geocode response coordinates out of range")

    async def resolve(self, country: str, postal_code: str) -> Coordinates:
        """Look up a postal code without blocking the event loop"""
        return await asyncio.to_thread(self.geocode, country, postal_code)
