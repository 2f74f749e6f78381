"""Great-circle distance between two coordinates."""

from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_METERS


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Distance in meters between two (latitude, longitude) pairs in degrees.

    Uses the haversine formula on a sphere of radius 6,371,000 m. Coordinates
    are assumed to be validated by the caller.
    """
    phi1 = math.radians(float(lat1))
    phi2 = math.radians(float(lat2))
    dphi = math.radians(float(lat2) - float(lat1))
    dlambda = math.radians(float(lng2) - float(lng1))

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Guard against a > 1 from floating point drift near antipodes.
    c = 2 * math.asin(math.sqrt(min(1.0, a)))
    return EARTH_RADIUS_METERS * c


def is_within_radius(lat: float, lng: float, center_lat: float, center_lng: float, radius_m: float) -> bool:
    return haversine_distance(lat, lng, center_lat, center_lng) <= radius_m
