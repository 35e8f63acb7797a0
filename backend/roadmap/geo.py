# backend/roadmap/geo.py
"""
Great-circle helpers over (lon, lat) pairs in degrees.

  - distance(): haversine distance in miles
  - bearing():  initial bearing in degrees, range (-180, 180]

Bearings are not normalized to compass [0, 360); callers that need a
compass heading use compass_bearing().
"""

import math
from typing import Tuple

from .config import EARTH_RADIUS_MILES

Coord = Tuple[float, float]  # (lon, lat)


def distance(lon_a: float, lat_a: float, lon_b: float, lat_b: float) -> float:
    """Great-circle distance in miles between A and B."""
    phi1 = math.radians(lat_a)
    phi2 = math.radians(lat_b)
    dphi = math.radians(lat_b - lat_a)
    dlambda = math.radians(lon_b - lon_a)

    a = math.sin(dphi / 2.0) ** 2
    a += math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    # rounding can push a past 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def bearing(lon_a: float, lat_a: float, lon_b: float, lat_b: float) -> float:
    """Initial bearing in degrees when travelling the great circle from A to B."""
    phi1 = math.radians(lat_a)
    phi2 = math.radians(lat_b)
    lambda1 = math.radians(lon_a)
    lambda2 = math.radians(lon_b)

    y = math.sin(lambda2 - lambda1) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2)
    x -= math.sin(phi1) * math.cos(phi2) * math.cos(lambda2 - lambda1)
    return math.degrees(math.atan2(y, x))


def compass_bearing(lon_a: float, lat_a: float, lon_b: float, lat_b: float) -> float:
    """bearing() folded into [0, 360)."""
    return bearing(lon_a, lat_a, lon_b, lat_b) % 360.0


def coord_distance(a: Coord, b: Coord) -> float:
    return distance(a[0], a[1], b[0], b[1])
