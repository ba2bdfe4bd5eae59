"""Tests for TrackStore and its read/write lock."""

from __future__ import annotations

import threading
import time

from route_scout.geo.models import GeoPoint
from route_scout.tracks.models import Track
from route_scout.tracks.store import ReadWriteLock, TrackStore


def _track(name: str) -> Track:
    return Track(filename=name, points=(GeoPoint(1.0, 2.0), GeoPoint(1.001, 2.0)))


def test_add_and_all():
    store = TrackStore()
    store.add(_track("a.gpx"))
    store.add(_track("b.gpx"))
    assert [t.filename for t in store.all()] == ["a.gpx", "b.gpx"]
    assert len(store) == 2


def test_all_returns_snapshot():
    store = TrackStore([_track("a.gpx")])
    snapshot = store.all()
    store.add(_track("b.gpx"))
    assert len(snapshot) == 1
    assert len(store) == 2


def test_extend_appends_in_order():
    store = TrackStore()
    store.extend([_track("a.gpx"), _track("b.gpx")])
    assert [t.filename for t in store.all()] == ["a.gpx", "b.gpx"]


def test_concurrent_adds_are_not_lost():
    store = TrackStore()

    def writer(prefix: str) -> None:
        for i in range(200):
            store.add(_track(f"{prefix}{i}.gpx"))

    def reader() -> None:
        for _ in range(200):
            store.all()

    threads = [threading.Thread(target=writer, args=(p,)) for p in "abcd"]
    threads += [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert len(store) == 800


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    inside = threading.Barrier(2, timeout=2)
    errors: list[Exception] = []

    def read() -> None:
        with lock.read():
            try:
                inside.wait()  # both readers must be inside at once
            except threading.BrokenBarrierError as exc:
                errors.append(exc)

    threads = [threading.Thread(target=read) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert errors == []


def test_writer_waits_for_reader():
    lock = ReadWriteLock()
    order: list[str] = []
    reader_in = threading.Event()

    def read() -> None:
        with lock.read():
            reader_in.set()
            time.sleep(0.05)
            order.append("read-done")

    def write() -> None:
        reader_in.wait(timeout=2)
        with lock.write():
            order.append("write")

    r = threading.Thread(target=read)
    w = threading.Thread(target=write)
    r.start()
    w.start()
    r.join(timeout=5)
    w.join(timeout=5)
    assert order == ["read-done", "write"]
