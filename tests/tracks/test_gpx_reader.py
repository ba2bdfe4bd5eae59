"""Tests for GPXReader."""

from __future__ import annotations

import pytest

from route_scout.geo.distance import haversine_km
from route_scout.geo.models import GeoPoint
from route_scout.tracks.gpx_reader import GPXReader, GPXReadError

_TIMED_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Morning walk</name>
    <trkseg>
      <trkpt lat="52.5200" lon="13.4050"><time>2026-03-01T08:00:00Z</time></trkpt>
      <trkpt lat="52.5210" lon="13.4060"><time>2026-03-01T08:05:00Z</time></trkpt>
    </trkseg>
    <trkseg>
      <trkpt lat="52.5300" lon="13.4100"><time>2026-03-01T08:20:00Z</time></trkpt>
      <trkpt lat="52.5310" lon="13.4120"><time>2026-03-01T08:30:00Z</time></trkpt>
    </trkseg>
  </trk>
</gpx>
"""

_UNTIMED_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk><trkseg>
    <trkpt lat="40.0" lon="-74.0"/>
    <trkpt lat="40.001" lon="-74.0"/>
  </trkseg></trk>
</gpx>
"""


def test_read_collects_points_from_every_segment():
    track = GPXReader().read(_TIMED_GPX.encode(), "walk.gpx")
    assert track.filename == "walk.gpx"
    assert len(track.points) == 4
    assert track.points[0] == GeoPoint(52.52, 13.405)
    assert track.points[-1] == GeoPoint(52.531, 13.412)


def test_distance_excludes_gap_between_segments():
    track = GPXReader().read(_TIMED_GPX, "walk.gpx")
    expected = haversine_km(GeoPoint(52.52, 13.405), GeoPoint(52.521, 13.406)) + haversine_km(
        GeoPoint(52.53, 13.41), GeoPoint(52.531, 13.412)
    )
    assert track.distance_km == pytest.approx(expected)


def test_duration_spans_first_to_last_timestamp():
    track = GPXReader().read(_TIMED_GPX, "walk.gpx")
    assert track.duration_s == pytest.approx(30 * 60)


def test_untimed_track_has_zero_duration():
    track = GPXReader().read(_UNTIMED_GPX, "plain.gpx")
    assert track.duration_s == 0.0
    assert track.distance_km == pytest.approx(0.1112, rel=0.01)


def test_empty_gpx_yields_empty_track():
    doc = '<?xml version="1.0"?><gpx version="1.1" creator="t" xmlns="http://www.topografix.com/GPX/1/1"></gpx>'
    track = GPXReader().read(doc, "empty.gpx")
    assert track.points == ()
    assert track.distance_km == 0.0


def test_malformed_document_raises():
    with pytest.raises(GPXReadError):
        GPXReader().read(b"this is not xml <<<", "broken.gpx")
