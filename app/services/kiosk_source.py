"""
Kiosk Data Source
Fetches the public kiosk list from the upstream locations API.

The upstream sometimes returns the array JSON-encoded as a string, so the
body may need to be decoded twice.
"""

import asyncio
import json
import logging
from typing import Any, List

import requests
from pydantic import ValidationError

from app.errors import DataLoadFailed
from app.models.kiosk import Kiosk

logger = logging.getLogger(__name__)


def parse_kiosk_payload(payload: Any) -> List[Kiosk]:
    """
    Turn a decoded response body into kiosk models.

    Args:
        payload: Decoded JSON, either a list or a string wrapping one

    Returns:
        Valid kiosks in upstream order; malformed records are skipped

    Raises:
        DataLoadFailed: If the payload is not a list of records
    """
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise DataLoadFailed(f"String-wrapped kiosk payload is not JSON: {e}")

    if not isinstance(payload, list):
        raise DataLoadFailed(f"Expected a list of kiosks, got {type(payload).__name__}")

    kiosks = []
    for record in payload:
        try:
            kiosks.append(Kiosk.model_validate(record))
        except ValidationError as e:
            logger.warning(f"Skipping malformed kiosk record: {e.error_count()} errors")

    return kiosks


class KioskSource:
    """Client for the upstream kiosk locations endpoint"""

    def __init__(self, url: str, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    def fetch(self) -> List[Kiosk]:
        """
        Fetch all kiosks (blocking).

        Raises:
            DataLoadFailed: On transport failure, non-2xx or undecodable body
        """
        try:
            response = requests.get(self.url, timeout=self.timeout)
        except requests.Timeout:
            logger.warning(f"Kiosk API timeout: {self.url}")
            raise DataLoadFailed("Kiosk API timeout")
        except requests.RequestException as e:
            logger.error(f"Kiosk API request error: {e}")
            raise DataLoadFailed(f"Kiosk API request error: {e}")

        if not response.ok:
            logger.warning(f"Kiosk API returned {response.status_code}")
            raise DataLoadFailed(f"Kiosk API returned {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Kiosk API returned invalid JSON: {e}")
            raise DataLoadFailed("Kiosk API returned invalid JSON")

        kiosks = parse_kiosk_payload(payload)
        logger.info(f"Loaded {len(kiosks)} kiosks from upstream")
        return kiosks

    async def fetch_async(self) -> List[Kiosk]:
        """Fetch all kiosks without blocking the event loop"""
        return await asyncio.to_thread(self.fetch)
