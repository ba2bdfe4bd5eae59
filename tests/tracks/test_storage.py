"""Tests for TrackStorage (SQLite)."""

from __future__ import annotations

import pytest

from route_scout.geo.models import GeoPoint
from route_scout.tracks.models import Track
from route_scout.tracks.storage import TrackStorage


@pytest.fixture
def storage():
    s = TrackStorage(":memory:")
    yield s
    s.close()


def _track(name: str = "walk.gpx", n: int = 5) -> Track:
    return Track(
        filename=name,
        points=tuple(GeoPoint(52.52 + i * 0.001, 13.405 - i * 0.0005) for i in range(n)),
        distance_km=0.5,
        duration_s=600.0,
    )


def test_save_and_load_preserves_fields_and_order(storage):
    track = _track()
    storage.save_track(track)
    loaded = storage.load_tracks()
    assert loaded == [track]


def test_load_empty_database(storage):
    assert storage.load_tracks() == []


def test_tracks_load_in_import_order(storage):
    storage.save_track(_track("b.gpx"))
    storage.save_track(_track("a.gpx"))
    assert [t.filename for t in storage.load_tracks()] == ["b.gpx", "a.gpx"]


def test_reimport_replaces_previous_record(storage):
    storage.save_track(_track("walk.gpx", n=5))
    storage.save_track(_track("walk.gpx", n=3))
    loaded = storage.load_tracks()
    assert len(loaded) == 1
    assert len(loaded[0].points) == 3


def test_track_without_points(storage):
    storage.save_track(Track(filename="empty.gpx"))
    loaded = storage.load_tracks()
    assert loaded[0].points == ()


def test_persists_across_connections(tmp_path):
    db = str(tmp_path / "tracks.db")
    first = TrackStorage(db)
    first.save_track(_track())
    first.close()

    second = TrackStorage(db)
    try:
        assert len(second.load_tracks()) == 1
    finally:
        second.close()
