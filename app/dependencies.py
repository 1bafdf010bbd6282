"""
Shared Dependencies
FastAPI dependencies for settings, upstream clients, locale and request context
"""

from datetime import timedelta
from typing import Optional
from fastapi import Depends, Header, Request
from app.config import Settings, get_settings
from app.context import Clock, PlatformInfo, RequestContext
from app.i18n import MessageBundle, get_bundle
from app.services.device_location import DeviceLocationResolver
from app.services.geocoding import PostalCodeGeocoder
from app.services.kiosk_source import KioskSource
from app.services.location_resolver import LocationResolver
from app.services.session import LocatorSession
import logging

logger = logging.getLogger(__name__)


def locale_from_request(request: Request, default: Optional[str] = None) -> str:
    """
    Pick the locale for a request.
    `lang` query parameter first, then the first Accept-Language entry.
    """
    lang = request.query_params.get("lang")
    if lang:
        return lang

    accept_language = request.headers.get("accept-language")
    if accept_language:
        return accept_language.split(",")[0].split(";")[0].strip()

    return default or get_settings().default_locale


def get_clock() -> Clock:
    return Clock()


def get_kiosk_source(settings: Settings = Depends(get_settings)) -> KioskSource:
    return KioskSource(settings.kiosk_api_url, timeout=settings.upstream_timeout_seconds)


def get_location_resolver(settings: Settings = Depends(get_settings)) -> LocationResolver:
    geocoder = PostalCodeGeocoder(
        settings.geocode_api_url,
        timeout=settings.upstream_timeout_seconds
    )
    device = DeviceLocationResolver(timeout=settings.device_location_timeout_seconds)
    return LocationResolver(geocoder, device)


def get_message_bundle(
    request: Request,
    settings: Settings = Depends(get_settings)
) -> MessageBundle:
    return get_bundle(locale_from_request(request, settings.default_locale))


def get_platform(user_agent: Optional[str] = Header(None)) -> PlatformInfo:
    return PlatformInfo.from_user_agent(user_agent)


def get_request_context(request: Request) -> RequestContext:
    return RequestContext.from_query(request.query_params)


async def get_session(
    source: KioskSource = Depends(get_kiosk_source),
    resolver: LocationResolver = Depends(get_location_resolver),
    clock: Clock = Depends(get_clock),
    bundle: MessageBundle = Depends(get_message_bundle),
    settings: Settings = Depends(get_settings)
) -> LocatorSession:
    """
    Get a locator session for this request.
    The session is not loaded yet; routes call `load()` themselves.
    """
    return LocatorSession(
        source,
        resolver,
        clock=clock,
        locale=bundle.locale,
        radius_miles=settings.search_radius_miles,
        freshness_window=timedelta(days=settings.freshness_window_days),
        stale_after=timedelta(minutes=settings.connectivity_stale_minutes)
    )
