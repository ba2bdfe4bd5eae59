"""Great-circle distance on a spherical Earth."""

from __future__ import annotations

import math
from collections.abc import Sequence

from route_scout.geo.models import GeoPoint

EARTH_RADIUS_KM = 6371.0


def haversine_km(p1: GeoPoint, p2: GeoPoint) -> float:
    """Return the haversine distance between *p1* and *p2* in kilometres.

    Identical points return exactly ``0.0`` rather than the rounding noise
    of ``atan2(sqrt(~0), ...)``.
    """
    if p1.latitude == p2.latitude and p1.longitude == p2.longitude:
        return 0.0

    lat1 = math.radians(p1.latitude)
    lat2 = math.radians(p2.latitude)
    dlat = lat2 - lat1
    dlng = math.radians(p2.longitude - p1.longitude)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def path_length_km(points: Sequence[GeoPoint]) -> float:
    """Sum of consecutive pairwise distances; ``0.0`` for fewer than two points."""
    if len(points) < 2:
        return 0.0
    return sum(haversine_km(a, b) for a, b in zip(points, points[1:]))
