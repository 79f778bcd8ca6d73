"""Locations domain - UK postcode distance estimates"""

from .router import router
from .service import estimate_distance_miles, format_distance, postcode_to_city, within_radius

__all__ = ["estimate_distance_miles", "format_distance", "postcode_to_city", "router", "within_radius"]
