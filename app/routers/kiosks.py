"""
Kiosk Search Router
Endpoints for postal code, device location and direct-link kiosk searches
"""

from fastapi import APIRouter, HTTPException, status, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from app.config import settings
from app.context import PlatformInfo, RequestContext
from app.dependencies import get_platform, get_request_context, get_session
from app.errors import LocatorError, SearchFailed
from app.models.kiosk import SearchResponse
from app.models.search import DeviceLocationSearchRequest, PostalCodeSearchRequest
from app.services.location_resolver import LocationRequest
from app.services.presentation import build_search_response
from app.services.session import LocatorSession
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/kiosks", tags=["Kiosks"])

# Rate limiter for search endpoints
limiter = Limiter(key_func=get_remote_address)

SEARCH_RATE_LIMIT = f"{settings.rate_limit_search_per_minute}/minute"


async def _run_search(
    payload: LocationRequest,
    session: LocatorSession,
    platform: PlatformInfo,
    context: RequestContext
) -> SearchResponse:
    """Load the dataset, resolve the location and rank nearby kiosks."""
    try:
        await session.load()
        results = await session.search(payload)

        return build_search_response(
            results,
            session.bundle,
            platform,
            context,
            session.snapshot.reference_time,
            radius_miles=session.radius_miles,
            origin=session.last_origin
        )

    except LocatorError:
        raise
    except Exception as e:
        logger.exception(f"Search failed: {e}")
        raise SearchFailed(str(e)) from e


@router.get("", response_model=SearchResponse)
async def get_linked_kiosks(
    session: LocatorSession = Depends(get_session),
    platform: PlatformInfo = Depends(get_platform),
    context: RequestContext = Depends(get_request_context)
):
    """
    Direct-link (QR) mode: kiosks named in `?kiosks=K1,K3`.

    Results keep dataset order. Optional `driving=0` hides driving
    directions.
    """
    if not context.is_direct_link:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide kiosk identifiers with ?kiosks=<id>,<id>"
        )

    try:
        await session.load()
        results = session.direct_link(context.kiosk_ids)

        logger.info(f"Direct link matched {len(results)}/{len(context.kiosk_ids)} kiosks")

        return build_search_response(
            results,
            session.bundle,
            platform,
            context,
            session.snapshot.reference_time
        )

    except LocatorError:
        raise
    except Exception as e:
        logger.exception(f"Direct link lookup failed: {e}")
        raise SearchFailed(str(e)) from e


@router.post("/search/postal", response_model=SearchResponse)
@limiter.limit(SEARCH_RATE_LIMIT)
async def search_by_postal_code(
    request: Request,
    payload: PostalCodeSearchRequest,
    session: LocatorSession = Depends(get_session),
    platform: PlatformInfo = Depends(get_platform),
    context: RequestContext = Depends(get_request_context)
):
    """
    Find kiosks near a postal code.

    Rate limited per IP.
    """
    return await _run_search(payload, session, platform, context)


@router.post("/search/device", response_model=SearchResponse)
@limiter.limit(SEARCH_RATE_LIMIT)
async def search_by_device_location(
    request: Request,
    payload: DeviceLocationSearchRequest,
    session: LocatorSession = Depends(get_session),
    platform: PlatformInfo = Depends(get_platform),
    context: RequestContext = Depends(get_request_context)
):
    """
    Find kiosks near the position reported by the client's device.

    A client whose geolocation failed sends the failure code instead, so
    the user gets the same localized message as any other search error.
    """
    return await _run_search(payload, session, platform, context)
