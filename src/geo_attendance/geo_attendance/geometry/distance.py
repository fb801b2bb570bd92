"""Great-circle distance on a spherical earth.

Uses the haversine formula with the mean earth radius. The haversine term is
clamped into [0, 1] so rounding near antipodal points cannot push ``asin`` out
of its domain.
"""

from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_M
from .model import Coordinate


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def distance(a: Coordinate, b: Coordinate) -> float:
    """Distance in meters between two coordinates."""
    if a == b:
        return 0.0
    # Sort the endpoints so the result is bit-for-bit symmetric.
    p, q = sorted(((a.latitude, a.longitude), (b.latitude, b.longitude)))
    return haversine_m(p[0], p[1], q[0], q[1])


def is_within_radius(point: Coordinate, center: Coordinate, radius_m: float) -> bool:
    return distance(point, center) <= float(radius_m)
