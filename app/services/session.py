"""
Locator Session
Holds one loaded kiosk snapshot and runs searches against it.

A session loads the dataset once (and again on locale change), then every
search recomputes its view from the snapshot. Searches are numbered; when a
newer search has started by the time an older one resolves its location,
the older result is discarded with SearchSuperseded.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Collection, List, Optional, Tuple

from app.context import Clock
from app.errors import (
    DataLoadFailed,
    LocatorError,
    SearchFailed,
    SearchSuperseded,
)
from app.i18n import MessageBundle, get_bundle
from app.models.kiosk import Kiosk, RankedKiosk
from app.models.search import Coordinates
from app.services.device_location import PositionProvider
from app.services.freshness import (
    CONNECTIVITY_STALE_AFTER,
    FRESHNESS_WINDOW,
    dataset_reference_time,
    filter_fresh,
)
from app.services.kiosk_source import KioskSource
from app.services.location_resolver import LocationRequest, LocationResolver
from app.services.proximity import (
    DEFAULT_RADIUS_MILES,
    filter_by_ids,
    rank_by_proximity,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KioskSnapshot:
    """Freshness-filtered kiosks and the dataset's reference time"""
    kiosks: Tuple[Kiosk, ...]
    reference_time: datetime
    total_count: int


class LocatorSession:
    """Owns the dataset snapshot and the current search view"""

    def __init__(
        self,
        source: KioskSource,
        resolver: LocationResolver,
        clock: Optional[Clock] = None,
        locale: str = "en",
        radius_miles: float = DEFAULT_RADIUS_MILES,
        freshness_window: timedelta = FRESHNESS_WINDOW,
        stale_after: timedelta = CONNECTIVITY_STALE_AFTER
    ):
        self.source = source
        self.resolver = resolver
        self.clock = clock or Clock()
        self.bundle: MessageBundle = get_bundle(locale)
        self.radius_miles = radius_miles
        self.freshness_window = freshness_window
        self.stale_after = stale_after

        self.snapshot: Optional[KioskSnapshot] = None
        self.current_view: List[RankedKiosk] = []
        self.last_origin: Optional[Coordinates] = None
        self._sequence = 0

    async def load(self) -> KioskSnapshot:
        """
        Fetch the dataset and keep the kiosks inside the freshness window.

        Raises:
            DataLoadFailed: Upstream fetch failed; the session has no snapshot
        """
        self.snapshot = None
        self.current_view = []

        try:
            raw = await self.source.fetch_async()
        except DataLoadFailed:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error loading kiosks: {e}")
            raise DataLoadFailed(str(e)) from e

        reference_time = dataset_reference_time(raw, self.clock)
        fresh = filter_fresh(raw, reference_time, self.freshness_window)

        self.snapshot = KioskSnapshot(
            kiosks=tuple(fresh),
            reference_time=reference_time,
            total_count=len(raw)
        )
        logger.info(
            f"Snapshot loaded: {len(fresh)}/{len(raw)} kiosks fresh "
            f"as of {reference_time.isoformat()}"
        )
        return self.snapshot

    def _require_snapshot(self) -> KioskSnapshot:
        if self.snapshot is None:
            raise DataLoadFailed("Kiosk data has not been loaded")
        return self.snapshot

    async def set_locale(self, locale: str) -> KioskSnapshot:
        """Switch locale; the dataset is reloaded with it"""
        self.bundle = get_bundle(locale)
        return await self.load()

    async def search(
        self,
        request: LocationRequest,
        provider: Optional[PositionProvider] = None
    ) -> List[RankedKiosk]:
        """
        Resolve the request's location and rank nearby kiosks.

        Returns:
            Kiosks within the session radius, nearest first (may be empty)

        Raises:
            DataLoadFailed: No snapshot is loaded
            SearchSuperseded: A newer search started meanwhile
            LocatorError: Location resolution failed
        """
        snapshot = self._require_snapshot()

        self._sequence += 1
        sequence = self._sequence

        try:
            origin = await self.resolver.resolve(request, provider)
        except LocatorError as e:
            if sequence != self._sequence:
                raise SearchSuperseded(f"Search {sequence} superseded") from e
            raise
        except Exception as e:
            logger.exception(f"Search error: {e}")
            raise SearchFailed(str(e)) from e

        if sequence != self._sequence:
            logger.debug(f"Discarding result of superseded search {sequence}")
            raise SearchSuperseded(f"Search {sequence} superseded")

        results = rank_by_proximity(
            snapshot.kiosks,
            origin.lat,
            origin.lon,
            snapshot.reference_time,
            self.radius_miles,
            self.stale_after
        )

        self.last_origin = origin
        self.current_view = results
        return results

    def direct_link(self, ids: Collection[str]) -> List[RankedKiosk]:
        """Select kiosks by identifier, bypassing location search"""
        snapshot = self._require_snapshot()

        results = filter_by_ids(
            snapshot.kiosks,
            ids,
            snapshot.reference_time,
            self.stale_after
        )

        self.last_origin = None
        self.current_view = results
        return results
