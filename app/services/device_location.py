"""
Device Location
Single-shot device position lookups with a fixed timeout, plus the provider
used when the client reports the position it got from its own device.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from app.errors import (
    LocationPermissionDenied,
    LocationTimeout,
    LocationUnsupported,
)
from app.models.search import Coordinates, DeviceLocationSearchRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0

PositionProvider = Callable[[], Awaitable[Coordinates]]

_DEVICE_ERRORS = {
    "permission_denied": LocationPermissionDenied,
    "unavailable": LocationPermissionDenied,
    "timeout": LocationTimeout,
    "unsupported": LocationUnsupported,
}


class DeviceLocationResolver:
    """Awaits one position from a provider, failing after the timeout"""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.timeout = timeout

    async def resolve(self, provider: Optional[PositionProvider]) -> Coordinates:
        """
        Get a single device position.

        Raises:
            LocationUnsupported: No provider is available
            LocationTimeout: Provider did not answer within the timeout
            LocationPermissionDenied: Provider refused or had no fix
        """
        if provider is None:
            raise LocationUnsupported("No device location capability")

        try:
            return await asyncio.wait_for(provider(), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Device location timed out after {self.timeout}s")
            raise LocationTimeout(f"No position within {self.timeout}s")


def reported_position(request: DeviceLocationSearchRequest) -> PositionProvider:
    """
    Build a provider from a position the client already obtained.

    A reported failure code is raised as the matching location error.
    """
    async def provide() -> Coordinates:
        if request.error is not None:
            logger.info(f"Client reported geolocation error: {request.error}")
            raise _DEVICE_ERRORS[request.error](request.error)
        return Coordinates(lat=request.latitude, lon=request.longitude)

    return provide
