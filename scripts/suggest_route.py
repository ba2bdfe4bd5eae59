"""Suggest a new walking loop from a directory of recorded GPX tracks.

Usage:
  python scripts/suggest_route.py \\
      --gpx-dir data \\
      --min-km 3 \\
      --max-km 8 \\
      --output route.json

Uses the public OSRM demo server unless ROUTE_SCOUT_OSRM_URL is set.
Pass --no-streets to skip street conforming entirely.
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path

from dotenv import load_dotenv

from route_scout.config import Settings
from route_scout.suggest.conformer import StreetConformer
from route_scout.suggest.controller import RouteSuggester
from route_scout.suggest.models import RouteRequest
from route_scout.tracks.gpx_reader import GPXReader, GPXReadError
from route_scout.tracks.store import TrackStore


def _load_tracks(gpx_dir: Path, store: TrackStore) -> None:
    reader = GPXReader()
    for path in sorted(gpx_dir.glob("*.gpx")):
        try:
            track = reader.read(path.read_bytes(), path.name)
        except GPXReadError as exc:
            print(f"  [!] skipping {path.name}: {exc}", file=sys.stderr)
            continue
        store.add(track)
        print(
            f"  loaded {path.name}: {len(track.points)} points, {track.distance_km:.2f} km",
            file=sys.stderr,
        )


def main() -> None:
    load_dotenv()
    ap = argparse.ArgumentParser(description="Suggest a new walking route near recorded tracks")
    ap.add_argument("--gpx-dir", type=Path, required=True, help="Directory of .gpx files")
    ap.add_argument("--min-km", type=float, default=0.0, help="Minimum route length (0 = unset)")
    ap.add_argument("--max-km", type=float, default=0.0, help="Maximum route length (0 = unset)")
    ap.add_argument("--no-streets", action="store_true", help="Do not conform to streets")
    ap.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")
    ap.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log ladder decisions")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.gpx_dir.is_dir():
        print(f"  [!] not a directory: {args.gpx_dir}", file=sys.stderr)
        sys.exit(1)

    min_km, max_km = args.min_km, args.max_km
    if min_km > 0 and max_km > 0 and min_km > max_km:
        min_km, max_km = max_km, min_km

    settings = Settings.from_env()
    store = TrackStore()
    _load_tracks(args.gpx_dir, store)

    suggester = RouteSuggester(
        store,
        StreetConformer(
            base_url=settings.osrm_url,
            profile=settings.osrm_profile,
            timeout=settings.osrm_timeout,
            max_waypoints=settings.max_waypoints,
        ),
        rng=random.Random(args.seed),
        default_anchor=settings.default_anchor,
    )
    route = suggester.suggest(
        RouteRequest(min_distance_km=min_km, max_distance_km=max_km, follow_streets=not args.no_streets)
    )
    if route is None:
        print("  [!] no route could be suggested", file=sys.stderr)
        sys.exit(1)

    text = json.dumps(route.to_dict(), indent=2)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"Route ({route.distance_km:.2f} km, streets={route.follows_streets}) -> {args.output}")
    else:
        print(text)


if __name__ == "__main__":
    main()
