"""TrackStorage — persists imported tracks to SQLite.

Schema design notes:
  - ``tracks`` holds one row per imported file; ``filename`` is unique, so
    re-importing a file replaces the earlier record.
  - ``track_points`` is a separate table keyed by ``(track_id, seq)`` so the
    original point order survives the round trip.
"""

from __future__ import annotations

import sqlite3

from route_scout.geo.models import GeoPoint
from route_scout.tracks.models import Track

_DDL = """
PRAGMA journal_mode = WAL;
PRAGMA synchronous  = NORMAL;
PRAGMA foreign_keys = ON;

CREATE TABLE IF NOT EXISTS tracks (
    id          INTEGER PRIMARY KEY,
    filename    TEXT    NOT NULL UNIQUE,
    distance_km REAL    NOT NULL,
    duration_s  REAL    NOT NULL,
    imported_at TEXT    NOT NULL
                DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
);

CREATE TABLE IF NOT EXISTS track_points (
    track_id  INTEGER NOT NULL REFERENCES tracks (id) ON DELETE CASCADE,
    seq       INTEGER NOT NULL,
    latitude  REAL    NOT NULL,
    longitude REAL    NOT NULL,
    PRIMARY KEY (track_id, seq)
);
"""

_DELETE_TRACK = "DELETE FROM tracks WHERE filename = ?"

_INSERT_TRACK = """
INSERT INTO tracks (filename, distance_km, duration_s)
VALUES (?, ?, ?)
"""

_INSERT_POINT = """
INSERT INTO track_points (track_id, seq, latitude, longitude)
VALUES (?, ?, ?, ?)
"""

_SELECT_TRACKS = """
SELECT id, filename, distance_km, duration_s
FROM   tracks
ORDER  BY id
"""

_SELECT_POINTS = """
SELECT track_id, latitude, longitude
FROM   track_points
ORDER  BY track_id, seq
"""


class TrackStorage:
    """Stores and retrieves :class:`Track` records from a SQLite database.

    Parameters
    ----------
    db_path:
        Path to the SQLite file.  Pass ``":memory:"`` for in-process testing.
    """

    def __init__(self, db_path: str = "tracks.db") -> None:
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        for stmt in _DDL.strip().split(";"):
            stmt = stmt.strip()
            if stmt:
                self._conn.execute(stmt)
        self._conn.commit()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def save_track(self, track: Track) -> int:
        """Persist *track* (replacing any record with the same filename); return its row id."""
        with self._conn:
            self._conn.execute(_DELETE_TRACK, (track.filename,))
            cursor = self._conn.execute(
                _INSERT_TRACK, (track.filename, track.distance_km, track.duration_s)
            )
            track_id = cursor.lastrowid
            self._conn.executemany(
                _INSERT_POINT,
                (
                    (track_id, seq, p.latitude, p.longitude)
                    for seq, p in enumerate(track.points)
                ),
            )
        return track_id  # type: ignore[return-value]

    def load_tracks(self) -> list[Track]:
        """Return every stored track in import order."""
        points_by_track: dict[int, list[GeoPoint]] = {}
        for row in self._conn.execute(_SELECT_POINTS):
            points_by_track.setdefault(row["track_id"], []).append(
                GeoPoint(float(row["latitude"]), float(row["longitude"]))
            )

        return [
            Track(
                filename=row["filename"],
                points=tuple(points_by_track.get(row["id"], ())),
                distance_km=float(row["distance_km"]),
                duration_s=float(row["duration_s"]),
            )
            for row in self._conn.execute(_SELECT_TRACKS).fetchall()
        ]

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
