"""Candidate shapes and distance-matching transforms.

All shapes work in plain lat/lng degree space; no projection is applied.
Closed shapes repeat their first point at the end.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

from route_scout.geo.models import BoundingBox, GeoPoint

JITTER_FRACTION = 0.05
"""Maximum perimeter corner offset as a fraction of the box span."""

ZIGZAG_OFFSET_DEG = 0.01
"""Perpendicular zigzag amplitude (≈ 1.1 km of latitude)."""

KM_PER_DEG = 111.0


def centroid(points: Sequence[GeoPoint]) -> GeoPoint:
    """Arithmetic mean of *points* (a closing duplicate is counted twice)."""
    n = len(points)
    return GeoPoint(
        sum(p.latitude for p in points) / n,
        sum(p.longitude for p in points) / n,
    )


def perimeter(box: BoundingBox, rng: random.Random) -> list[GeoPoint]:
    """Return the closed four-corner loop of *box* with jittered corners.

    Every corner coordinate moves independently by up to ±5 % of the box
    span on its axis, so repeated calls on unchanged history differ.
    """
    lat_span = box.lat_span
    lng_span = box.lng_span

    def jitter(lat: float, lng: float) -> GeoPoint:
        return GeoPoint(
            lat + rng.uniform(-JITTER_FRACTION, JITTER_FRACTION) * lat_span,
            lng + rng.uniform(-JITTER_FRACTION, JITTER_FRACTION) * lng_span,
        )

    corners = [
        jitter(box.min_lat, box.min_lng),
        jitter(box.min_lat, box.max_lng),
        jitter(box.max_lat, box.max_lng),
        jitter(box.max_lat, box.min_lng),
    ]
    return corners + [corners[0]]


def scale_toward_centroid(points: Sequence[GeoPoint], factor: float) -> list[GeoPoint]:
    """Multiply every point's offset from the centroid by *factor*.

    ``0 < factor < 1`` shrinks the shape.  Point count and loop closure are
    preserved.
    """
    if not points:
        return []
    c = centroid(points)
    return [
        GeoPoint(
            c.latitude + (p.latitude - c.latitude) * factor,
            c.longitude + (p.longitude - c.longitude) * factor,
        )
        for p in points
    ]


def zigzag_extend(points: Sequence[GeoPoint], factor: float) -> list[GeoPoint]:
    """Lengthen a route by inserting zigzag points between each pair.

    ``max(1, round(factor) - 1)`` points are inserted at every segment
    midpoint, alternating to either side of the segment by
    :data:`ZIGZAG_OFFSET_DEG`.  Inserted points are not on any street.
    ``factor <= 1`` returns the input unchanged.
    """
    if len(points) < 2 or factor <= 1.0:
        return list(points)

    count = max(1, round(factor) - 1)
    extended: list[GeoPoint] = []

    for p1, p2 in zip(points, points[1:]):
        extended.append(p1)
        d_lat = p2.latitude - p1.latitude
        d_lng = p2.longitude - p1.longitude
        length = math.hypot(d_lat, d_lng)
        if length == 0:
            continue

        mid_lat = (p1.latitude + p2.latitude) / 2
        mid_lng = (p1.longitude + p2.longitude) / 2
        perp_lat = -d_lng / length * ZIGZAG_OFFSET_DEG
        perp_lng = d_lat / length * ZIGZAG_OFFSET_DEG
        for j in range(count):
            side = 1.0 if j % 2 == 0 else -1.0
            extended.append(GeoPoint(mid_lat + perp_lat * side, mid_lng + perp_lng * side))

    extended.append(points[-1])
    return extended


def polygon(center: GeoPoint, radius_deg: float, vertex_count: int) -> list[GeoPoint]:
    """Closed regular polygon of *vertex_count* vertices around *center*."""
    if vertex_count < 3:
        raise ValueError("vertex_count must be >= 3")
    vertices = [
        GeoPoint(
            center.latitude + radius_deg * math.sin(2 * math.pi * i / vertex_count),
            center.longitude + radius_deg * math.cos(2 * math.pi * i / vertex_count),
        )
        for i in range(vertex_count)
    ]
    return vertices + [vertices[0]]


def square(center: GeoPoint, half_side_deg: float) -> list[GeoPoint]:
    """Closed axis-aligned square extending *half_side_deg* from *center*."""
    box = BoundingBox.around(center, half_side_deg)
    corners = [
        GeoPoint(box.min_lat, box.min_lng),
        GeoPoint(box.min_lat, box.max_lng),
        GeoPoint(box.max_lat, box.max_lng),
        GeoPoint(box.max_lat, box.min_lng),
    ]
    return corners + [corners[0]]


def diametric(center: GeoPoint, offset_deg: float) -> list[GeoPoint]:
    """Two points on opposite diagonal sides of *center*."""
    return [
        GeoPoint(center.latitude - offset_deg, center.longitude - offset_deg),
        GeoPoint(center.latitude + offset_deg, center.longitude + offset_deg),
    ]


def km_to_deg(km: float) -> float:
    """Rough conversion using 111 km per degree."""
    return km / KM_PER_DEG
