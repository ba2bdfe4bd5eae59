"""Coverage estimation — what area do the recorded tracks already cover?

The explored area is approximated by the bounding box of every recorded
point.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from route_scout.geo.models import BoundingBox, GeoPoint
from route_scout.tracks.models import Track

NEAR_PADDING = 0.5
"""Fraction of the box span added on every side for the proximity check."""

NEAR_MIN_SHARE = 0.5
"""Share of route points that must fall inside the padded box."""


def bounds(tracks: Iterable[Track]) -> BoundingBox | None:
    """Return the minimal box covering every track point, or None without points."""
    min_lat = min_lng = float("inf")
    max_lat = max_lng = float("-inf")
    seen = False
    for track in tracks:
        for p in track.points:
            seen = True
            min_lat = min(min_lat, p.latitude)
            max_lat = max(max_lat, p.latitude)
            min_lng = min(min_lng, p.longitude)
            max_lng = max(max_lng, p.longitude)
    if not seen:
        return None
    return BoundingBox(min_lat=min_lat, max_lat=max_lat, min_lng=min_lng, max_lng=max_lng)


def center(box: BoundingBox) -> GeoPoint:
    return box.center


def points_centroid(tracks: Iterable[Track]) -> GeoPoint | None:
    """Arithmetic mean of every track point, or None without points."""
    lat_sum = lng_sum = 0.0
    count = 0
    for track in tracks:
        for p in track.points:
            lat_sum += p.latitude
            lng_sum += p.longitude
            count += 1
    if count == 0:
        return None
    return GeoPoint(lat_sum / count, lng_sum / count)


def is_near_existing(
    points: Sequence[GeoPoint],
    box: BoundingBox,
    padding: float = NEAR_PADDING,
    min_share: float = NEAR_MIN_SHARE,
) -> bool:
    """True when at least *min_share* of *points* lie in *box* padded by *padding*."""
    if not points:
        return False
    padded = box.expanded(padding)
    inside = sum(1 for p in points if padded.contains(p))
    return inside / len(points) >= min_share
