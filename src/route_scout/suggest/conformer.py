"""Street conformer — snaps candidate loops to the street network via OSRM.

Talks to the OSRM ``/route`` service with the walking profile and returns a
:class:`SuggestedRoute` whose distance is measured on the decoded geometry.
Every failure surfaces as :class:`ConformError`; callers decide whether to
try another seed or give up on street conforming.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

import requests

from route_scout.config import DEFAULT_OSRM_URL
from route_scout.geo.distance import haversine_km, path_length_km
from route_scout.geo.models import GeoPoint
from route_scout.geo.polyline import decode_polyline
from route_scout.suggest.models import SuggestedRoute

_logger = logging.getLogger(__name__)

MIN_PLAUSIBLE_KM = 0.1
"""Measured lengths below this are treated as unreliable."""


class ConformError(Exception):
    """The routing service could not conform a point sequence."""


def downsample(points: Sequence[GeoPoint], limit: int) -> list[GeoPoint]:
    """Return at most *limit* points picked at a uniform stride.

    The first and last points are always kept.
    """
    n = len(points)
    if n <= limit:
        return list(points)
    if limit < 2:
        raise ValueError("limit must be >= 2")
    step = (n - 1) / (limit - 1)
    return [points[round(i * step)] for i in range(limit)]


def format_coordinates(points: Sequence[GeoPoint]) -> str:
    """OSRM wants ``lon,lat;lon,lat;...``."""
    return ";".join(f"{p.longitude:.6f},{p.latitude:.6f}" for p in points)


def bbox_perimeter_km(points: Sequence[GeoPoint]) -> float:
    """Twice the width plus height of the points' bounding box."""
    min_lat = min(p.latitude for p in points)
    max_lat = max(p.latitude for p in points)
    min_lng = min(p.longitude for p in points)
    max_lng = max(p.longitude for p in points)
    width = haversine_km(GeoPoint(min_lat, min_lng), GeoPoint(min_lat, max_lng))
    height = haversine_km(GeoPoint(min_lat, min_lng), GeoPoint(max_lat, min_lng))
    return 2 * (width + height)


class StreetConformer:
    """OSRM ``/route`` client.

    Args:
        base_url: OSRM server root, e.g. ``"https://router.project-osrm.org"``.
        profile: Routing profile.
        timeout: Seconds to wait for each routing call.
        max_waypoints: Waypoint cap; OSRM rejects around 500, we stay well below.
        session: Optional :class:`requests.Session` (injected in tests).
    """

    DEFAULT_PROFILE = "walking"
    DEFAULT_MAX_WAYPOINTS = 100

    def __init__(
        self,
        base_url: str = DEFAULT_OSRM_URL,
        profile: str = DEFAULT_PROFILE,
        timeout: float = 10.0,
        max_waypoints: int = DEFAULT_MAX_WAYPOINTS,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._profile = profile
        self._timeout = timeout
        self._max_waypoints = max_waypoints
        self._session = session if session is not None else requests.Session()

    def conform(
        self,
        points: Sequence[GeoPoint],
        cancel: threading.Event | None = None,
    ) -> SuggestedRoute:
        """Route through *points* in order and return the street-following path.

        Raises:
            ConformError: On transport failure, timeout, cancellation, a
                non-200 status, a non-``Ok`` code, no routes, a payload of the
                wrong shape, or a geometry with fewer than two points.
        """
        if len(points) < 2:
            raise ConformError("At least two waypoints are required")
        if cancel is not None and cancel.is_set():
            raise ConformError("Request cancelled")

        waypoints = downsample(points, self._max_waypoints)
        if len(waypoints) < len(points):
            _logger.debug("Downsampled %d waypoints to %d", len(points), len(waypoints))

        url = f"{self._base_url}/route/v1/{self._profile}/{format_coordinates(waypoints)}"
        _logger.debug("OSRM request: %s", url)
        try:
            response = self._session.get(
                url,
                params={
                    "overview": "full",
                    "geometries": "polyline",
                    "alternatives": "false",
                    "steps": "false",
                },
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise ConformError(f"OSRM request failed: {exc}") from exc

        if response.status_code != 200:
            raise ConformError(f"OSRM returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise ConformError(f"OSRM returned invalid JSON: {exc}") from exc

        if not isinstance(data, dict):
            raise ConformError(f"OSRM returned a {type(data).__name__}, expected an object")
        routes = data.get("routes")
        if data.get("code") != "Ok" or not routes:
            raise ConformError(
                f"OSRM did not return a route: {data.get('code')} {data.get('message', '')}".strip()
            )
        if not isinstance(routes, list) or not isinstance(routes[0], dict):
            raise ConformError("OSRM routes are not a list of route objects")

        route = routes[0]
        geometry = route.get("geometry")
        if not isinstance(geometry, str):
            raise ConformError(f"OSRM geometry is {type(geometry).__name__}, expected a polyline string")
        conformed = [GeoPoint(lat, lng) for lat, lng in decode_polyline(geometry)]
        if len(conformed) < 2:
            raise ConformError(f"OSRM geometry decoded to {len(conformed)} point(s)")

        distance_km = self._measure(conformed, route.get("distance"))
        _logger.info(
            "Conformed %d waypoints to %d street points, %.3f km",
            len(waypoints),
            len(conformed),
            distance_km,
        )
        return SuggestedRoute(points=conformed, distance_km=distance_km, follows_streets=True)

    @staticmethod
    def _measure(points: list[GeoPoint], reported_m: object) -> float:
        """Measured length, with fallbacks when the measurement is implausibly small.

        A missing or non-numeric service distance counts as zero.
        """
        distance_km = path_length_km(points)
        if distance_km >= MIN_PLAUSIBLE_KM:
            return distance_km

        numeric = isinstance(reported_m, (int, float)) and not isinstance(reported_m, bool)
        reported_km = float(reported_m) / 1000.0 if numeric else 0.0
        if reported_km >= MIN_PLAUSIBLE_KM:
            _logger.warning(
                "Measured %.4f km on conformed path; using service distance %.3f km",
                distance_km,
                reported_km,
            )
            return reported_km

        estimate = bbox_perimeter_km(points)
        _logger.warning("Implausible route length; estimating %.3f km from bounding box", estimate)
        return estimate
