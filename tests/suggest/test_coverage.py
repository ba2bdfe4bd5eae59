"""Tests for coverage estimation and the proximity check."""

from __future__ import annotations

import pytest

from route_scout.geo.models import BoundingBox, GeoPoint
from route_scout.suggest.coverage import bounds, center, is_near_existing, points_centroid
from route_scout.tracks.models import Track


def _track(*coords: tuple[float, float]) -> Track:
    return Track(filename="t.gpx", points=tuple(GeoPoint(lat, lng) for lat, lng in coords))


_BOX = BoundingBox(min_lat=52.50, max_lat=52.54, min_lng=13.38, max_lng=13.44)


# ---------------------------------------------------------------------------
# bounds / center / centroid
# ---------------------------------------------------------------------------


def test_bounds_covers_all_tracks():
    tracks = [_track((52.5, 13.4), (52.6, 13.3)), _track((52.4, 13.5))]
    box = bounds(tracks)
    assert box == BoundingBox(min_lat=52.4, max_lat=52.6, min_lng=13.3, max_lng=13.5)


def test_bounds_without_tracks_is_none():
    assert bounds([]) is None


def test_bounds_with_only_empty_tracks_is_none():
    assert bounds([Track(filename="empty.gpx")]) is None


def test_center_is_box_midpoint():
    c = center(_BOX)
    assert c.latitude == pytest.approx(52.52)
    assert c.longitude == pytest.approx(13.41)


def test_points_centroid_is_mean_not_box_center():
    tracks = [_track((0.0, 0.0), (0.0, 0.0), (3.0, 3.0))]
    c = points_centroid(tracks)
    assert c == GeoPoint(1.0, 1.0)


def test_points_centroid_without_points_is_none():
    assert points_centroid([]) is None


# ---------------------------------------------------------------------------
# is_near_existing
# ---------------------------------------------------------------------------


def test_points_fully_inside_are_near():
    points = [GeoPoint(52.51, 13.39), GeoPoint(52.52, 13.41), GeoPoint(52.53, 13.43)]
    assert is_near_existing(points, _BOX)


def test_points_far_outside_are_not_near():
    points = [GeoPoint(48.85, 2.35), GeoPoint(48.86, 2.36)]
    assert not is_near_existing(points, _BOX)


def test_padding_admits_points_just_outside_box():
    # 50 % padding adds 0.02 deg of latitude on each side.
    points = [GeoPoint(52.555, 13.41), GeoPoint(52.485, 13.41)]
    assert is_near_existing(points, _BOX)


def test_exactly_half_inside_is_near():
    points = [GeoPoint(52.52, 13.41), GeoPoint(60.0, 20.0)]
    assert is_near_existing(points, _BOX)


def test_less_than_half_inside_is_not_near():
    points = [GeoPoint(52.52, 13.41), GeoPoint(60.0, 20.0), GeoPoint(61.0, 20.0)]
    assert not is_near_existing(points, _BOX)


def test_empty_points_are_not_near():
    assert not is_near_existing([], _BOX)
