"""Runtime settings read from environment variables.

Call :func:`dotenv.load_dotenv` before :meth:`Settings.from_env` to pick up a
``.env`` file; the web app and CLI scripts do this at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from route_scout.geo.models import GeoPoint

DEFAULT_OSRM_URL = "https://router.project-osrm.org"
DEFAULT_ANCHOR = GeoPoint(52.52, 13.405)  # Berlin


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration.

    Args:
        db_path: SQLite database holding imported tracks.
        osrm_url: Base URL of the OSRM routing server.
        osrm_profile: OSRM profile used for street conforming.
        osrm_timeout: Seconds before a routing call is abandoned.
        max_waypoints: Waypoint cap applied before every routing call.
        default_anchor: Where suggestions are centred before any track exists.
    """

    db_path: str = "tracks.db"
    osrm_url: str = DEFAULT_OSRM_URL
    osrm_profile: str = "walking"
    osrm_timeout: float = 10.0
    max_waypoints: int = 100
    default_anchor: GeoPoint = DEFAULT_ANCHOR

    @classmethod
    def from_env(cls) -> Settings:
        env = os.environ
        return cls(
            db_path=env.get("ROUTE_SCOUT_DB", "tracks.db"),
            osrm_url=env.get("ROUTE_SCOUT_OSRM_URL", DEFAULT_OSRM_URL).rstrip("/"),
            osrm_profile=env.get("ROUTE_SCOUT_OSRM_PROFILE", "walking"),
            osrm_timeout=float(env.get("ROUTE_SCOUT_OSRM_TIMEOUT", "10")),
            max_waypoints=int(env.get("ROUTE_SCOUT_MAX_WAYPOINTS", "100")),
            default_anchor=GeoPoint(
                float(env.get("ROUTE_SCOUT_DEFAULT_LAT", DEFAULT_ANCHOR.latitude)),
                float(env.get("ROUTE_SCOUT_DEFAULT_LNG", DEFAULT_ANCHOR.longitude)),
            ),
        )
