"""Location lookup schemas."""

from pydantic import BaseModel, Field


class LocationRequest(BaseModel):
    # Range bounds also reject inf and nan
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class LocationResponse(BaseModel):
    neighborhood: str
    latitude: float
    longitude: float
    address: str
