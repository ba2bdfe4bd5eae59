"""Shared fixtures for web tests."""

from __future__ import annotations

import random
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from route_scout.config import Settings
from route_scout.suggest.conformer import ConformError
from route_scout.suggest.controller import RouteSuggester
from route_scout.tracks.store import TrackStore
from route_scout.web.app import create_app

WALK_GPX = b"""<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Morning walk</name>
    <trkseg>
      <trkpt lat="52.5000" lon="13.3800"><time>2026-05-01T08:00:00Z</time></trkpt>
      <trkpt lat="52.5100" lon="13.3900"><time>2026-05-01T08:10:00Z</time></trkpt>
      <trkpt lat="52.5200" lon="13.4100"><time>2026-05-01T08:25:00Z</time></trkpt>
    </trkseg>
  </trk>
</gpx>
"""


def upload(client: TestClient, filename: str = "walk.gpx", data: bytes = WALK_GPX):
    return client.post(
        "/api/tracks",
        files={"gpxfile": (filename, data, "application/gpx+xml")},
    )


@pytest.fixture
def settings(tmp_path):
    return Settings(db_path=str(tmp_path / "tracks.db"))


@pytest.fixture
def store():
    return TrackStore()


@pytest.fixture
def suggester(store):
    """Real suggester with an offline conformer, so routes stay plain."""
    conformer = MagicMock()
    conformer.conform.side_effect = ConformError("routing service offline")
    return RouteSuggester(store, conformer, rng=random.Random(0))


@pytest.fixture
def client(settings, store, suggester):
    """FastAPI test client backed by a temporary database."""
    app = create_app(settings, store=store, suggester=suggester)
    with TestClient(app) as c:
        yield c
