"""Track data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

from route_scout.geo.models import GeoPoint


@dataclass(frozen=True)
class Track:
    """One imported GPS recording.

    Created on import and read-only afterwards.
    """

    filename: str
    """Name of the source file (unique key in storage)."""

    points: tuple[GeoPoint, ...] = field(default_factory=tuple)
    """Ordered track points, all segments concatenated."""

    distance_km: float = 0.0
    """Haversine length of the recording."""

    duration_s: float = 0.0
    """Seconds between the first and last timestamp; 0 when untimed."""
