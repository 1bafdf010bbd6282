"""
Request Collaborators
Explicit stand-ins for the clock, the client platform and the query string,
so the filtering and ranking code never reads them implicitly.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import FrozenSet, Mapping, Optional

_IOS_PATTERN = re.compile(r"iPad|iPhone|iPod")


class Clock:
    """Wall-clock source, used only when a dataset has no valid timestamps"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FixedClock(Clock):
    """Clock pinned to a single instant"""
    instant: datetime

    def now(self) -> datetime:
        return self.instant


@dataclass(frozen=True)
class PlatformInfo:
    """What the client's user agent tells us about its map application"""
    is_ios: bool = False

    @classmethod
    def from_user_agent(cls, user_agent: Optional[str]) -> "PlatformInfo":
        return cls(is_ios=bool(user_agent and _IOS_PATTERN.search(user_agent)))


@dataclass(frozen=True)
class RequestContext:
    """
    Query-string options a client arrives with.

    kiosk_ids: explicit kiosk identifiers (direct-link / QR mode), empty otherwise
    kiosks_param_present: whether `kiosks` was given at all, even blank
    show_driving: whether driving directions are offered
    driving_param_present: whether `driving` was given at all
    """
    kiosk_ids: FrozenSet[str] = frozenset()
    show_driving: bool = True
    driving_param_present: bool = False
    kiosks_param_present: bool = False

    @property
    def is_direct_link(self) -> bool:
        return self.kiosks_param_present or bool(self.kiosk_ids)

    @classmethod
    def from_query(cls, params: Mapping[str, str]) -> "RequestContext":
        """
        Build the context from query parameters.

        Any `kiosks` value selects direct-link mode, even one naming no
        kiosk. `driving=0` hides driving directions, any other value (or
        none) shows them.
        """
        raw_ids = params.get("kiosks")
        kiosk_ids = frozenset(
            kiosk_id.strip()
            for kiosk_id in (raw_ids or "").split(",")
            if kiosk_id.strip()
        )

        kiosks_param_present = raw_ids is not None

        driving = params.get("driving")
        if driving is None:
            return cls(kiosk_ids=kiosk_ids, kiosks_param_present=kiosks_param_present)

        return cls(
            kiosk_ids=kiosk_ids,
            kiosks_param_present=kiosks_param_present,
            show_driving=driving != "0",
            driving_param_present=True,
        )
