"""
Location Resolution
One entry point for turning a search request into a search origin.
"""

import logging
from typing import Optional, Union

from app.errors import SearchFailed
from app.models.search import (
    Coordinates,
    DeviceLocationSearchRequest,
    PostalCodeSearchRequest,
)
from app.services.device_location import (
    DeviceLocationResolver,
    PositionProvider,
    reported_position,
)
from app.services.geocoding import PostalCodeGeocoder

logger = logging.getLogger(__name__)

LocationRequest = Union[PostalCodeSearchRequest, DeviceLocationSearchRequest]


class LocationResolver:
    """Dispatches postal code and device requests to their resolvers"""

    def __init__(
        self,
        geocoder: PostalCodeGeocoder,
        device: Optional[DeviceLocationResolver] = None
    ):
        self.geocoder = geocoder
        self.device = device or DeviceLocationResolver()

    async def resolve(
        self,
        request: LocationRequest,
        provider: Optional[PositionProvider] = None
    ) -> Coordinates:
        """
        Resolve a search request to coordinates.

        Device requests use `provider` when given, otherwise the position
        carried by the request itself.
        """
        if isinstance(request, PostalCodeSearchRequest):
            logger.info(f"Geocoding postal code {request.country}/{request.postal_code}")
            return await self.geocoder.resolve(request.country, request.postal_code)

        if isinstance(request, DeviceLocationSearchRequest):
            return await self.device.resolve(provider or reported_position(request))

        raise SearchFailed(f"Unsupported location request: {type(request).__name__}")
