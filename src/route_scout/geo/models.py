"""Geographic value types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoPoint:
    """A WGS84 coordinate in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned lat/lng box.

    Recomputed per request from the current track collection; never persisted.
    """

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @classmethod
    def around(cls, center: GeoPoint, half_span_deg: float) -> BoundingBox:
        """Return a square box extending *half_span_deg* on every side of *center*."""
        return cls(
            min_lat=center.latitude - half_span_deg,
            max_lat=center.latitude + half_span_deg,
            min_lng=center.longitude - half_span_deg,
            max_lng=center.longitude + half_span_deg,
        )

    @property
    def lat_span(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lng_span(self) -> float:
        return self.max_lng - self.min_lng

    @property
    def center(self) -> GeoPoint:
        """Arithmetic midpoint of the box corners."""
        return GeoPoint(
            latitude=(self.min_lat + self.max_lat) / 2,
            longitude=(self.min_lng + self.max_lng) / 2,
        )

    def contains(self, point: GeoPoint) -> bool:
        """Inclusive containment test."""
        return (
            self.min_lat <= point.latitude <= self.max_lat
            and self.min_lng <= point.longitude <= self.max_lng
        )

    def expanded(self, fraction: float) -> BoundingBox:
        """Pad every side by *fraction* of the span along that axis."""
        lat_pad = self.lat_span * fraction
        lng_pad = self.lng_span * fraction
        return BoundingBox(
            min_lat=self.min_lat - lat_pad,
            max_lat=self.max_lat + lat_pad,
            min_lng=self.min_lng - lng_pad,
            max_lng=self.max_lng + lng_pad,
        )
