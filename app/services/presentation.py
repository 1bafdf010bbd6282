"""
Kiosk Presentation
Turns ranked kiosks into localized cards and search responses.

Stale kiosks always show zero available chargers while their slot count is
shown as reported.
"""

from datetime import datetime
from typing import List, Optional

from app.context import PlatformInfo, RequestContext
from app.i18n import MessageBundle
from app.models.kiosk import DirectionLinks, KioskCard, RankedKiosk, SearchResponse
from app.models.search import Coordinates
from app.services.proximity import DEFAULT_RADIUS_MILES
from app.utils.location import miles_to_km


def direction_links(
    lat: float,
    lon: float,
    platform: PlatformInfo,
    show_driving: bool = True
) -> DirectionLinks:
    """
    Build walking (and optionally driving) links for the client's map app.

    iOS clients get Apple Maps, everyone else Google Maps.
    """
    if platform.is_ios:
        walking = f"http://maps.apple.com/?daddr={lat},{lon}&dirflg=w"
        driving = f"http://maps.apple.com/?daddr={lat},{lon}&dirflg=d"
    else:
        base = f"https://www.google.com/maps/dir/?api=1&destination={lat},{lon}"
        walking = f"{base}&travelmode=walking"
        driving = f"{base}&travelmode=driving"

    return DirectionLinks(walking=walking, driving=driving if show_driving else None)


def build_kiosk_card(
    ranked: RankedKiosk,
    bundle: MessageBundle,
    platform: PlatformInfo,
    show_driving: bool = True
) -> KioskCard:
    kiosk = ranked.kiosk

    distance = None
    distance_unit = None
    if ranked.distance_from_query is not None:
        miles = ranked.distance_from_query
        distance = round(miles_to_km(miles) if bundle.uses_km else miles, 1)
        distance_unit = bundle.distance_unit

    return KioskCard(
        id=kiosk.id,
        location_name=kiosk.location_name,
        place=kiosk.place or None,
        address=kiosk.address,
        zip=kiosk.zip,
        latitude=kiosk.lat,
        longitude=kiosk.lon,
        distance=distance,
        distance_unit=distance_unit,
        available_chargers=ranked.reported_chargers,
        available_slots=ranked.reported_slots,
        has_connectivity_warning=ranked.is_connectivity_stale,
        connectivity_warning=(
            bundle.text("warning_connectivity") if ranked.is_connectivity_stale else None
        ),
        directions=direction_links(kiosk.lat, kiosk.lon, platform, show_driving),
    )


def build_search_response(
    results: List[RankedKiosk],
    bundle: MessageBundle,
    platform: PlatformInfo,
    context: RequestContext,
    reference_time: datetime,
    radius_miles: Optional[float] = None,
    origin: Optional[Coordinates] = None
) -> SearchResponse:
    """
    Assemble the response for a proximity or direct-link search.

    An empty result carries the localized "nothing found" notice for the
    search mode.
    """
    direct_link = context.is_direct_link and origin is None

    notice = None
    if not results and direct_link:
        notice = bundle.text("error_noQrKiosksFound")
    elif not results:
        notice = bundle.no_kiosks_found(
            radius_miles if radius_miles is not None else DEFAULT_RADIUS_MILES
        )

    cards = [
        build_kiosk_card(ranked, bundle, platform, context.show_driving)
        for ranked in results
    ]

    return SearchResponse(
        mode="direct_link" if direct_link else "proximity",
        locale=bundle.locale,
        reference_time=reference_time,
        radius_miles=None if direct_link else radius_miles,
        origin=origin.model_dump() if origin is not None else None,
        count=len(cards),
        kiosks=cards,
        notice=notice,
        show_driving=context.show_driving,
        driving_param_present=context.driving_param_present,
    )
