"""FastAPI Web application.

Serve with ``uvicorn route_scout.web.app:app``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, File, HTTPException, Query, Request, UploadFile

from route_scout import __version__
from route_scout.config import Settings
from route_scout.geo.models import GeoPoint
from route_scout.suggest.conformer import StreetConformer
from route_scout.suggest.controller import RouteSuggester
from route_scout.suggest.models import RouteRequest
from route_scout.tracks.gpx_reader import GPXReadError
from route_scout.tracks.store import TrackStore
from route_scout.web.schemas import (
    HealthResponse,
    PointModel,
    RouteModel,
    TrackRecord,
    UploadResponse,
)
from route_scout.web.service import TrackService

load_dotenv()  # loads .env from project root; must run before env vars are consumed

_logger = logging.getLogger(__name__)

router = APIRouter()


def _points(points: list[GeoPoint] | tuple[GeoPoint, ...]) -> list[PointModel]:
    return [PointModel(lat=p.latitude, lng=p.longitude) for p in points]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@router.post("/api/tracks", response_model=UploadResponse)
def upload_track(request: Request, gpxfile: UploadFile = File(...)) -> UploadResponse:
    """Import one GPX file and make it available to suggestions."""
    filename = gpxfile.filename or ""
    if not filename.lower().endswith(".gpx"):
        raise HTTPException(status_code=400, detail="File must be a GPX file")

    service: TrackService = request.app.state.track_service
    try:
        track = service.import_track(filename, gpxfile.file.read())
    except GPXReadError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return UploadResponse(
        message=f"File uploaded and processed successfully: {filename}",
        filename=filename,
        distance=track.distance_km,
        point_count=len(track.points),
    )


@router.get("/api/tracks", response_model=list[TrackRecord])
def list_tracks(request: Request) -> list[TrackRecord]:
    service: TrackService = request.app.state.track_service
    return [
        TrackRecord(
            filename=t.filename,
            distance=t.distance_km,
            duration=t.duration_s,
            track_points=_points(t.points),
        )
        for t in service.list_tracks()
    ]


@router.get("/api/suggest", response_model=list[RouteModel])
def suggest(
    request: Request,
    min_distance: float = Query(0.0, alias="minDistance", ge=0),
    max_distance: float = Query(0.0, alias="maxDistance", ge=0),
    follow_streets: bool = Query(True, alias="followStreets"),
) -> list[RouteModel]:
    """Suggest one new loop; returns an empty list when no route can be built."""
    if min_distance > 0 and max_distance > 0 and min_distance > max_distance:
        min_distance, max_distance = max_distance, min_distance

    suggester: RouteSuggester = request.app.state.suggester
    try:
        route = suggester.suggest(
            RouteRequest(
                min_distance_km=min_distance,
                max_distance_km=max_distance,
                follow_streets=follow_streets,
            )
        )
    except Exception as exc:
        _logger.exception("Route suggestion failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    if route is None:
        return []
    return [
        RouteModel(
            points=_points(route.points),
            distance=route.distance_km,
            follows_streets=route.follows_streets,
        )
    ]


# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------


def create_app(
    settings: Settings | None = None,
    store: TrackStore | None = None,
    suggester: RouteSuggester | None = None,
) -> FastAPI:
    """Build the application around one shared :class:`TrackStore`."""
    settings = settings if settings is not None else Settings.from_env()
    store = store if store is not None else TrackStore()
    if suggester is None:
        suggester = RouteSuggester(
            store,
            StreetConformer(
                base_url=settings.osrm_url,
                profile=settings.osrm_profile,
                timeout=settings.osrm_timeout,
                max_waypoints=settings.max_waypoints,
            ),
            default_anchor=settings.default_anchor,
        )
    track_service = TrackService(settings.db_path, store)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        track_service.load_existing()
        yield

    application = FastAPI(title="Route Scout", version=__version__, lifespan=lifespan)
    application.state.settings = settings
    application.state.store = store
    application.state.track_service = track_service
    application.state.suggester = suggester
    application.include_router(router)
    return application


app = create_app()
