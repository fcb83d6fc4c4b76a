"""Great-circle helpers used when the live router is unavailable."""
from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt
from typing import Tuple

from fare_compare.contracts.geo_contract import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in kilometres on a spherical earth."""
    lat1r, lon1r, lat2r, lon2r = map(
        radians, [a.latitude, a.longitude, b.latitude, b.longitude]
    )
    dlat = lat2r - lat1r
    dlon = lon2r - lon1r
    h = sin(dlat / 2) ** 2 + cos(lat1r) * cos(lat2r) * sin(dlon / 2) ** 2
    # Rounding can push h just past 1.0 for near-antipodal points
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_KM * 2 * atan2(sqrt(h), sqrt(1 - h))


def straight_line(a: Coordinate, b: Coordinate) -> Tuple[Coordinate, Coordinate]:
    return (a, b)
