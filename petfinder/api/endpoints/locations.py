"""
Location endpoints - neighborhood list and coordinate -> neighborhood lookup.
"""

from fastapi import APIRouter

from petfinder.schemas.location import LocationRequest, LocationResponse
from petfinder.services.geocoding import get_neighborhood_table

router = APIRouter()


@router.get("/neighborhoods", response_model=list[str])
async def list_neighborhoods():
    """Fixed table order, for selection widgets."""
    return get_neighborhood_table().names()


@router.post("/get-location", response_model=LocationResponse)
async def get_location(data: LocationRequest):
    """Nearest known neighborhood to a GPS fix. Coarse, not true reverse geocoding."""
    table = get_neighborhood_table()
    nearest = table.nearest(data.latitude, data.longitude)
    return LocationResponse(
        neighborhood=nearest.name,
        latitude=data.latitude,
        longitude=data.longitude,
        address=table.address_for(nearest.name),
    )
