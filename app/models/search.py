"""
Search Models
Pydantic models for location resolution requests
"""

import re
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

SUPPORTED_COUNTRIES = ("us", "ca", "fr")

DEVICE_ERROR_CODES = ("permission_denied", "unsupported", "timeout", "unavailable")


class Coordinates(BaseModel):
    """Resolved search origin"""
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class PostalCodeSearchRequest(BaseModel):
    """Search by country and postal code"""
    country: str = Field("us", description="Country code: us, ca or fr")
    postal_code: str = Field(..., description="Postal or ZIP code")

    @field_validator("country")
    @classmethod
    def validate_country(cls, v):
        v = v.strip().lower()
        if v not in SUPPORTED_COUNTRIES:
            raise ValueError(f"Country must be one of: {', '.join(SUPPORTED_COUNTRIES)}")
        return v

    @field_validator("postal_code")
    @classmethod
    def sanitize_postal_code(cls, v):
        # "A1A 1A1" and "A1A1A1" are the same code
        cleaned = re.sub(r"\s", "", v)
        if not cleaned:
            raise ValueError("Postal code is required")
        return cleaned


class DeviceLocationSearchRequest(BaseModel):
    """
    Search by a position reported by the client's device.

    Either both coordinates are present, or `error` carries the failure the
    device geolocation produced.
    """
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    accuracy: Optional[float] = Field(None, ge=0, description="Accuracy in meters")
    error: Optional[str] = Field(None, description="Device failure code")

    @field_validator("error")
    @classmethod
    def validate_error(cls, v):
        if v is not None and v not in DEVICE_ERROR_CODES:
            raise ValueError(f"error must be one of: {', '.join(DEVICE_ERROR_CODES)}")
        return v

    @model_validator(mode="after")
    def check_position_or_error(self):
        has_position = self.latitude is not None and self.longitude is not None
        if self.error is None and not has_position:
            raise ValueError("Provide latitude and longitude, or an error code")
        return self
