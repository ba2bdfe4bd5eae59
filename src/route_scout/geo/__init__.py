"""Geographic primitives: points, boxes, distances and polyline decoding."""

from route_scout.geo.distance import EARTH_RADIUS_KM, haversine_km, path_length_km
from route_scout.geo.models import BoundingBox, GeoPoint
from route_scout.geo.polyline import decode_polyline

__all__ = [
    "EARTH_RADIUS_KM",
    "BoundingBox",
    "GeoPoint",
    "decode_polyline",
    "haversine_km",
    "path_length_km",
]
