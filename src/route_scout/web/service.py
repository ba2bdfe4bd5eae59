"""TrackService — ties the GPX reader, the in-memory store and SQLite storage together."""

from __future__ import annotations

import logging

from route_scout.tracks.gpx_reader import GPXReader
from route_scout.tracks.models import Track
from route_scout.tracks.storage import TrackStorage
from route_scout.tracks.store import TrackStore

_logger = logging.getLogger(__name__)


class TrackService:
    """Import and list tracks for the Web API.

    Parameters
    ----------
    db_path:
        Path to the SQLite database.  A connection is opened per operation.
    store:
        Shared in-memory collection read by the suggester.
    reader:
        Optional GPX reader for testing injection.
    """

    def __init__(
        self,
        db_path: str,
        store: TrackStore,
        reader: GPXReader | None = None,
    ) -> None:
        self._db_path = db_path
        self._store = store
        self._reader = reader if reader is not None else GPXReader()

    def load_existing(self) -> int:
        """Load every persisted track into the store; return how many were loaded."""
        storage = TrackStorage(self._db_path)
        try:
            tracks = storage.load_tracks()
        finally:
            storage.close()
        self._store.extend(tracks)
        _logger.info("Loaded %d existing tracks from %s", len(tracks), self._db_path)
        return len(tracks)

    def import_track(self, filename: str, data: bytes) -> Track:
        """Parse, persist and publish one uploaded GPX file.

        Raises
        ------
        GPXReadError
            If *data* is not a valid GPX document.
        """
        track = self._reader.read(data, filename)

        storage = TrackStorage(self._db_path)
        try:
            storage.save_track(track)
        finally:
            storage.close()

        self._store.add(track)
        _logger.info(
            "Imported %s: %d points, %.3f km", filename, len(track.points), track.distance_km
        )
        return track

    def list_tracks(self) -> list[Track]:
        return self._store.all()
