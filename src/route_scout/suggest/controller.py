"""RouteSuggester — fits a suggested loop to the requested distance window.

State machine::

    Seed ──► (ConformAttempt)* ──► Accepted | DegradedGeometry

1. Seed a jittered perimeter of the explored bounding box and fit its plain
   geometry to the window (shrink or zigzag).
2. Optionally conform it to streets.  When the conformed path misses the
   window, walk a short, fixed ladder of alternative seeds; the first seed
   whose conformed path fits wins.
3. When a ladder is exhausted, fall back to forcing the best conformed path
   into the window geometrically (no longer street-following).
4. Except when extending to reach a minimum, the street route must stay
   near the explored area, otherwise the plain candidate is returned.
"""

from __future__ import annotations

import logging
import math
import random
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from route_scout.config import DEFAULT_ANCHOR
from route_scout.geo.distance import path_length_km
from route_scout.geo.models import BoundingBox, GeoPoint
from route_scout.suggest import coverage, shaper
from route_scout.suggest.conformer import ConformError, StreetConformer
from route_scout.suggest.models import RouteRequest, SuggestedRoute
from route_scout.tracks.store import TrackStore

_logger = logging.getLogger(__name__)

DEFAULT_HALF_SPAN_DEG = 0.01
"""Half-width of the seed box when there is no (or degenerate) history."""

MAX_OVERSHOOT = 1.1
"""Street routes up to 10 % over the maximum are accepted by the shrink ladder."""

PENTAGON_VERTICES = 5


@dataclass
class LadderStep:
    """One fallback attempt: a seed shape to conform."""

    label: str
    seed: list[GeoPoint]


class RouteSuggester:
    """Produces one suggested route per request.

    Parameters
    ----------
    store:
        Shared track collection; read once per request.
    conformer:
        Street conformer.  Only used when a request asks to follow streets.
    rng:
        Random source for perimeter jitter.  Pass a seeded
        :class:`random.Random` for reproducible output.
    default_anchor:
        Centre of the seed box when no tracks exist.
    """

    def __init__(
        self,
        store: TrackStore,
        conformer: StreetConformer | None = None,
        rng: random.Random | None = None,
        default_anchor: GeoPoint = DEFAULT_ANCHOR,
    ) -> None:
        self._store = store
        self._conformer = conformer if conformer is not None else StreetConformer()
        self._rng = rng if rng is not None else random.Random()
        self._default_anchor = default_anchor

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def suggest(
        self,
        request: RouteRequest,
        cancel: threading.Event | None = None,
    ) -> SuggestedRoute | None:
        """Return one best-effort route for *request*, or None if degenerate."""
        _logger.info(
            "Suggesting route: min=%.3f km, max=%.3f km, follow_streets=%s",
            request.min_distance_km,
            request.max_distance_km,
            request.follow_streets,
        )

        # The store lock is held only inside all(); nothing below touches it.
        tracks = self._store.all()
        box = self._seed_box(coverage.bounds(tracks))
        anchor = coverage.points_centroid(tracks)

        candidate = self._fit_geometry(shaper.perimeter(box, self._rng), request)
        plain = SuggestedRoute(
            points=candidate,
            distance_km=path_length_km(candidate),
            follows_streets=False,
        )
        _logger.info("Plain candidate: %.3f km", plain.distance_km)

        if not request.follow_streets:
            return self._finish(plain)

        try:
            conformed = self._conformer.conform(candidate, cancel)
        except ConformError as exc:
            _logger.warning("Street conforming failed, using plain candidate: %s", exc)
            return self._finish(plain)

        max_km = request.max_distance_km
        min_km = request.min_distance_km

        if max_km > 0 and conformed.distance_km > max_km:
            result = self._shrink_ladder(candidate, conformed, max_km, cancel)
        elif min_km > 0 and conformed.distance_km < min_km:
            # Reaching the minimum may require leaving the explored area,
            # so the proximity check is skipped on this branch.
            result = self._extend_ladder(candidate, conformed, min_km, anchor, cancel)
            return self._finish(result)
        else:
            result = conformed

        if coverage.is_near_existing(result.points, box):
            return self._finish(result)

        _logger.info("Street route strays too far from explored area, using plain candidate")
        return self._finish(plain)

    # ------------------------------------------------------------------
    # Seeding and plain geometry
    # ------------------------------------------------------------------

    def _seed_box(self, box: BoundingBox | None) -> BoundingBox:
        """Explored box, or a default box when history is empty or flat."""
        if box is None:
            _logger.info(
                "No recorded tracks, anchoring on default location (%.4f, %.4f)",
                self._default_anchor.latitude,
                self._default_anchor.longitude,
            )
            return BoundingBox.around(self._default_anchor, DEFAULT_HALF_SPAN_DEG)

        if box.lat_span > 0 and box.lng_span > 0:
            return box

        c = box.center
        return BoundingBox(
            min_lat=box.min_lat if box.lat_span > 0 else c.latitude - DEFAULT_HALF_SPAN_DEG,
            max_lat=box.max_lat if box.lat_span > 0 else c.latitude + DEFAULT_HALF_SPAN_DEG,
            min_lng=box.min_lng if box.lng_span > 0 else c.longitude - DEFAULT_HALF_SPAN_DEG,
            max_lng=box.max_lng if box.lng_span > 0 else c.longitude + DEFAULT_HALF_SPAN_DEG,
        )

    @staticmethod
    def _fit_geometry(points: list[GeoPoint], request: RouteRequest) -> list[GeoPoint]:
        """Shrink or zigzag *points* toward the requested window."""
        length = path_length_km(points)
        if length <= 0:
            return points

        max_km = request.max_distance_km
        min_km = request.min_distance_km

        if max_km > 0 and length > max_km:
            _logger.info("Candidate %.3f km exceeds max, scaling by %.4f", length, max_km / length)
            return shaper.scale_toward_centroid(points, max_km / length)

        if min_km > 0 and length < min_km:
            _logger.info("Candidate %.3f km below min, zigzag factor %.2f", length, min_km / length)
            points = shaper.zigzag_extend(points, min_km / length)
            length = path_length_km(points)
            if max_km > 0 and length > max_km:
                _logger.info("Zigzag overshot max (%.3f km), scaling back", length)
                points = shaper.scale_toward_centroid(points, max_km / length)

        return points

    # ------------------------------------------------------------------
    # Fallback ladders
    # ------------------------------------------------------------------

    def _shrink_ladder(
        self,
        candidate: list[GeoPoint],
        conformed: SuggestedRoute,
        max_km: float,
        cancel: threading.Event | None,
    ) -> SuggestedRoute:
        """Find a street route no longer than ~*max_km*; scale the shortest one otherwise."""
        _logger.info("Street route %.3f km exceeds max %.3f km", conformed.distance_km, max_km)
        ratio = max_km / conformed.distance_km
        c = shaper.centroid(candidate)
        steps = [
            LadderStep("shrunk perimeter x0.8", shaper.scale_toward_centroid(candidate, 0.8 * ratio)),
            LadderStep("shrunk perimeter x0.5", shaper.scale_toward_centroid(candidate, 0.5 * ratio)),
            LadderStep("small square", shaper.square(c, shaper.km_to_deg(max_km / 10))),
        ]
        accepted, tried = self._climb(
            steps, lambda r: r.distance_km <= max_km * MAX_OVERSHOOT, cancel
        )
        if accepted is not None:
            return accepted

        best = min([conformed, *tried], key=lambda r: r.distance_km)
        _logger.warning(
            "Shrink ladder exhausted, scaling %.3f km street route to fit max", best.distance_km
        )
        points = shaper.scale_toward_centroid(best.points, max_km / best.distance_km)
        return SuggestedRoute(points=points, distance_km=path_length_km(points), follows_streets=False)

    def _extend_ladder(
        self,
        candidate: list[GeoPoint],
        conformed: SuggestedRoute,
        min_km: float,
        anchor: GeoPoint | None,
        cancel: threading.Event | None,
    ) -> SuggestedRoute:
        """Find a street route at least *min_km* long; zigzag the longest one otherwise."""
        _logger.info("Street route %.3f km below min %.3f km", conformed.distance_km, min_km)
        c = anchor if anchor is not None else shaper.centroid(candidate)
        radius = math.sqrt(min_km / 10) / shaper.KM_PER_DEG
        steps = [
            LadderStep("pentagon", shaper.polygon(c, radius, PENTAGON_VERTICES)),
            LadderStep("large pentagon", shaper.polygon(c, radius * 2, PENTAGON_VERTICES)),
            LadderStep(
                "diametric pair",
                shaper.diametric(c, math.sqrt(min_km / 2) / shaper.KM_PER_DEG),
            ),
            LadderStep(
                "wide diametric pair",
                shaper.diametric(c, math.sqrt(min_km) / shaper.KM_PER_DEG),
            ),
        ]
        accepted, tried = self._climb(steps, lambda r: r.distance_km >= min_km, cancel)
        if accepted is not None:
            return accepted

        best = max([conformed, *tried], key=lambda r: r.distance_km)
        if best.distance_km <= 0:
            return best
        _logger.warning(
            "Extend ladder exhausted, zigzagging %.3f km street route to reach min",
            best.distance_km,
        )
        points = shaper.zigzag_extend(best.points, min_km / best.distance_km)
        return SuggestedRoute(points=points, distance_km=path_length_km(points), follows_streets=False)

    def _climb(
        self,
        steps: Sequence[LadderStep],
        accept: Callable[[SuggestedRoute], bool],
        cancel: threading.Event | None,
    ) -> tuple[SuggestedRoute | None, list[SuggestedRoute]]:
        """Conform each step in order; stop at the first accepted route.

        Returns ``(accepted_or_None, every_successfully_conformed_route)``.
        """
        tried: list[SuggestedRoute] = []
        for step in steps:
            if cancel is not None and cancel.is_set():
                _logger.info("Request cancelled before ladder step %r", step.label)
                break
            try:
                route = self._conformer.conform(step.seed, cancel)
            except ConformError as exc:
                _logger.warning("Ladder step %r failed: %s", step.label, exc)
                continue
            tried.append(route)
            if accept(route):
                _logger.info("Ladder step %r accepted: %.3f km", step.label, route.distance_km)
                return route, tried
            _logger.info("Ladder step %r rejected: %.3f km", step.label, route.distance_km)
        return None, tried

    @staticmethod
    def _finish(route: SuggestedRoute) -> SuggestedRoute | None:
        if len(route.points) < 2:
            _logger.warning("Degenerate route with %d point(s), no suggestion", len(route.points))
            return None
        _logger.info(
            "Final route: %.3f km, %d points, follows_streets=%s",
            route.distance_km,
            len(route.points),
            route.follows_streets,
        )
        return route
