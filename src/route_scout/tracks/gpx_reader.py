"""GPX file reader — turns an uploaded ``.gpx`` file into a :class:`Track`."""

from __future__ import annotations

import gpxpy
import gpxpy.gpx

from route_scout.geo.distance import haversine_km
from route_scout.geo.models import GeoPoint
from route_scout.tracks.models import Track


class GPXReadError(ValueError):
    """Raised when a GPX document cannot be parsed."""


class GPXReader:
    """Parses GPX documents with :mod:`gpxpy`.

    Distance is summed per segment so that gaps between segments are not
    counted.  Duration is measured from the first point of the first
    segment to the last point of the last segment of the first track, when
    both carry timestamps.
    """

    def read(self, data: bytes | str, filename: str) -> Track:
        """Parse *data* and return a :class:`Track` named *filename*.

        Raises:
            GPXReadError: If *data* is not a valid GPX document.
        """
        if isinstance(data, bytes):
            data = data.decode("utf-8-sig", errors="replace")
        try:
            gpx = gpxpy.parse(data)
        except (gpxpy.gpx.GPXException, ValueError) as exc:
            raise GPXReadError(f"Unable to parse GPX file {filename!r}: {exc}") from exc

        points: list[GeoPoint] = []
        distance_km = 0.0
        for track in gpx.tracks:
            for segment in track.segments:
                seg_points = [GeoPoint(p.latitude, p.longitude) for p in segment.points]
                distance_km += sum(
                    haversine_km(a, b) for a, b in zip(seg_points, seg_points[1:])
                )
                points.extend(seg_points)

        return Track(
            filename=filename,
            points=tuple(points),
            distance_km=distance_km,
            duration_s=self._duration(gpx),
        )

    @staticmethod
    def _duration(gpx: gpxpy.gpx.GPX) -> float:
        if not gpx.tracks:
            return 0.0
        segments = [s for s in gpx.tracks[0].segments if s.points]
        if not segments:
            return 0.0
        first = segments[0].points[0]
        last = segments[-1].points[-1]
        if first is last or first.time is None or last.time is None:
            return 0.0
        return (last.time - first.time).total_seconds()
