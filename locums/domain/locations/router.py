"""Location router - postcode distance lookups for shift cards"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ...shared.validators import validate_uk_postcode
from .service import estimate_distance_miles, format_distance, postcode_to_city

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/locations", tags=["Locations"])


class DistanceResponse(BaseModel):
    origin: str
    destination: str
    originCity: Optional[str] = None
    destinationCity: Optional[str] = None
    distanceMiles: Optional[float] = None
    label: Optional[str] = None


@router.get("/distance", response_model=DistanceResponse)
async def get_distance(
    origin: str = Query(..., min_length=2),
    destination: str = Query(..., min_length=2),
):
    """Approximate distance between a locum's postcode and a practice postcode"""
    try:
        origin = validate_uk_postcode(origin)
        destination = validate_uk_postcode(destination)
    except ValueError as e:
        logger.warning(f"Distance lookup rejected: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e

    miles = estimate_distance_miles(origin, destination)
    return DistanceResponse(
        origin=origin,
        destination=destination,
        originCity=postcode_to_city(origin),
        destinationCity=postcode_to_city(destination),
        distanceMiles=round(miles, 1) if miles is not None else None,
        label=format_distance(miles) if miles is not None else None,
    )
