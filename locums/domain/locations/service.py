"""
Postcode distance estimation.

Distances are measured between postcode-area centroids, so two postcodes in
the same area are 0 miles apart. Unknown areas yield None rather than a
made-up distance.
"""

import logging
import math
from typing import Optional

from ...shared.validators import postcode_area
from .postcodes import POSTCODE_AREAS

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3958.8


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_MILES * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def area_location(postcode: str) -> Optional[tuple[float, float, str]]:
    """
    Centroid and post town for a postcode's area.

    Raises:
        ValueError: If the postcode is malformed
    """
    area = postcode_area(postcode)
    location = POSTCODE_AREAS.get(area)
    if location is None:
        logger.debug(f"Postcode area {area} not in lookup table")
    return location


def postcode_to_city(postcode: str) -> Optional[str]:
    location = area_location(postcode)
    return location[2] if location else None


def estimate_distance_miles(origin: str, destination: str) -> Optional[float]:
    """Approximate straight-line miles between two postcodes, or None if either area is unknown"""
    a = area_location(origin)
    b = area_location(destination)
    if a is None or b is None:
        return None
    return haversine_miles(a[0], a[1], b[0], b[1])


def format_distance(miles: float) -> str:
    if miles < 1:
        return "<1 mile"
    return f"{miles:.1f} miles"


def within_radius(origin: str, destination: str, radius_miles: float) -> bool:
    distance = estimate_distance_miles(origin, destination)
    return distance is not None and distance <= radius_miles
