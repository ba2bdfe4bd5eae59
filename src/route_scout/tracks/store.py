"""TrackStore — the in-memory track collection shared by all requests.

Writers (imports) hold the exclusive side of the lock only while appending;
readers hold the shared side only while copying the list, so no caller ever
holds it across a network call.
"""

from __future__ import annotations

import contextlib
import threading
from collections.abc import Iterable, Iterator

from route_scout.tracks.models import Track


class ReadWriteLock:
    """Many concurrent readers or one writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextlib.contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextlib.contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class TrackStore:
    """Thread-safe, append-only collection of :class:`Track` records."""

    def __init__(self, tracks: Iterable[Track] = ()) -> None:
        self._lock = ReadWriteLock()
        self._tracks: list[Track] = list(tracks)

    def all(self) -> list[Track]:
        """Return a snapshot of every stored track."""
        with self._lock.read():
            return list(self._tracks)

    def add(self, track: Track) -> None:
        with self._lock.write():
            self._tracks.append(track)

    def extend(self, tracks: Iterable[Track]) -> None:
        """Append several tracks under a single exclusive acquisition."""
        batch = list(tracks)
        with self._lock.write():
            self._tracks.extend(batch)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._tracks)
