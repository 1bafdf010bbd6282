"""
Kiosk Models
Pydantic models for upstream kiosk records and their derived views
"""

from datetime import datetime
from typing import Optional, List, Union
from pydantic import BaseModel, Field, field_validator


class Kiosk(BaseModel):
    """Kiosk record as reported by the upstream locations API"""
    id: str = Field(..., description="Opaque kiosk identifier")
    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lon: float = Field(..., ge=-180, le=180, description="Longitude")
    location_name: str = Field("", alias="locationName", description="Display name")
    place: Optional[str] = Field(None, description="Optional place label (mall, station, ...)")
    address: str = Field("", description="Street address")
    zip: str = Field("", description="Postal code")
    available_chargers: int = Field(0, alias="availableChargers")
    available_slots: int = Field(0, alias="availableSlots")
    timestamp: Optional[Union[str, int, float]] = Field(
        None,
        description="Last update reported by the kiosk"
    )

    @field_validator("id", "zip", mode="before")
    @classmethod
    def coerce_to_string(cls, v):
        if v is None:
            return ""
        return str(v)

    @field_validator("location_name", "address", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("available_chargers", "available_slots", mode="before")
    @classmethod
    def none_to_zero(cls, v):
        return 0 if v is None else v

    class Config:
        populate_by_name = True
        frozen = True


class RankedKiosk(BaseModel):
    """Kiosk plus annotations computed for a single search"""
    kiosk: Kiosk
    distance_from_query: Optional[float] = Field(
        None,
        ge=0,
        description="Distance from the search origin in miles (proximity searches only)"
    )
    is_connectivity_stale: bool = Field(
        ...,
        description="Kiosk has not reported recently enough to trust its charger count"
    )

    @property
    def reported_chargers(self) -> int:
        """Charger count to show; stale kiosks report none"""
        if self.is_connectivity_stale:
            return 0
        return self.kiosk.available_chargers

    @property
    def reported_slots(self) -> int:
        return self.kiosk.available_slots

    class Config:
        frozen = True


class DirectionLinks(BaseModel):
    """Deep links into the platform's map application"""
    walking: str
    driving: Optional[str] = None


class KioskCard(BaseModel):
    """Localized kiosk entry returned to clients"""
    id: str
    location_name: str
    place: Optional[str] = None
    address: str
    zip: str
    latitude: float
    longitude: float
    distance: Optional[float] = Field(None, description="Distance in the locale's unit, one decimal")
    distance_unit: Optional[str] = None
    available_chargers: int = Field(..., description="Zero when connectivity is stale")
    available_slots: int
    has_connectivity_warning: bool
    connectivity_warning: Optional[str] = None
    directions: DirectionLinks


class SearchResponse(BaseModel):
    """Response model for proximity and direct-link searches"""
    mode: str = Field(..., description="'proximity' or 'direct_link'")
    locale: str
    reference_time: datetime
    radius_miles: Optional[float] = None
    origin: Optional[dict] = None
    count: int
    kiosks: List[KioskCard]
    notice: Optional[str] = Field(None, description="Localized message when nothing was found")
    show_driving: bool = True
    driving_param_present: bool = False
