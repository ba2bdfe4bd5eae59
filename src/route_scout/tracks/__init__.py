"""Track ingestion, in-memory collection and persistence."""

from route_scout.tracks.gpx_reader import GPXReader, GPXReadError
from route_scout.tracks.models import Track
from route_scout.tracks.storage import TrackStorage
from route_scout.tracks.store import ReadWriteLock, TrackStore

__all__ = [
    "GPXReadError",
    "GPXReader",
    "ReadWriteLock",
    "Track",
    "TrackStorage",
    "TrackStore",
]
