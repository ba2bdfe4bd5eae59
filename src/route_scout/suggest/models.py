"""Suggestion request/result data models."""

from __future__ import annotations

from dataclasses import dataclass, field

from route_scout.geo.models import GeoPoint


@dataclass(frozen=True)
class RouteRequest:
    """Distance window for a suggestion.

    ``0`` means the bound is unset.  When both bounds are set the caller
    guarantees ``min_distance_km <= max_distance_km``.
    """

    min_distance_km: float = 0.0
    max_distance_km: float = 0.0
    follow_streets: bool = True


@dataclass
class SuggestedRoute:
    """A candidate or final route.

    ``distance_km`` is always measured on ``points`` by this package, never
    copied from the routing service except as a last-resort fallback.
    """

    points: list[GeoPoint] = field(default_factory=list)
    distance_km: float = 0.0
    follows_streets: bool = False

    def to_dict(self) -> dict:
        """Return the JSON shape served by the web API."""
        return {
            "points": [{"lat": p.latitude, "lng": p.longitude} for p in self.points],
            "distance": self.distance_km,
            "followsStreets": self.follows_streets,
        }
