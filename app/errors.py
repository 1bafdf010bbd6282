"""
Locator Errors
Error taxonomy for dataset loading, location resolution and searches.

Every error carries the message key of its localized user-facing text and the
HTTP status the API responds with. None of them is retried automatically.
"""

from fastapi import status


class LocatorError(Exception):
    """Base class for all user-visible locator failures"""

    code = "LOCATOR_ERROR"
    message_key = "error_searchFailed"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.code)
        self.detail = detail


class DataLoadFailed(LocatorError):
    """Kiosk dataset fetch failed, returned non-2xx, or was undecodable"""

    code = "DATA_LOAD_FAILED"
    message_key = "error_loadFailed"
    status_code = status.HTTP_502_BAD_GATEWAY


class GeocodeInvalidInput(LocatorError):
    """Geocoding service rejected the postal code"""

    code = "GEOCODE_INVALID_INPUT"
    message_key = "error_invalidPostalCode"
    status_code = status.HTTP_404_NOT_FOUND


class GeocodeUnavailable(LocatorError):
    """Geocoding service unreachable or returned no usable coordinates"""

    code = "GEOCODE_UNAVAILABLE"
    message_key = "error_postalCodeNotFound"
    status_code = status.HTTP_502_BAD_GATEWAY


class LocationPermissionDenied(LocatorError):
    code = "LOCATION_PERMISSION_DENIED"
    message_key = "error_gpsPermission"
    status_code = status.HTTP_403_FORBIDDEN


class LocationTimeout(LocatorError):
    code = "LOCATION_TIMEOUT"
    message_key = "error_gpsPermission"
    status_code = status.HTTP_408_REQUEST_TIMEOUT


class LocationUnsupported(LocatorError):
    code = "LOCATION_UNSUPPORTED"
    message_key = "error_geolocationNotSupported"
    status_code = status.HTTP_400_BAD_REQUEST


class SearchFailed(LocatorError):
    """Catch-all for unexpected failures during a search"""

    code = "SEARCH_FAILED"
    message_key = "error_searchFailed"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class SearchSuperseded(LocatorError):
    """A newer search started before this one finished"""

    code = "SEARCH_SUPERSEDED"
    message_key = "error_searchFailed"
    status_code = status.HTTP_409_CONFLICT
