"""Route suggestion engine: coverage, candidate shapes, street conforming, fitting."""

from route_scout.suggest.conformer import ConformError, StreetConformer
from route_scout.suggest.controller import RouteSuggester
from route_scout.suggest.coverage import bounds, is_near_existing, points_centroid
from route_scout.suggest.models import RouteRequest, SuggestedRoute

__all__ = [
    "ConformError",
    "RouteRequest",
    "RouteSuggester",
    "StreetConformer",
    "SuggestedRoute",
    "bounds",
    "is_near_existing",
    "points_centroid",
]
