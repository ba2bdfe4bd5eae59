"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    version: str


class PointModel(BaseModel):
    lat: float
    lng: float


class TrackRecord(BaseModel):
    filename: str
    distance: float
    duration: float
    track_points: list[PointModel] = Field(serialization_alias="trackPoints")


class UploadResponse(BaseModel):
    message: str
    filename: str
    distance: float
    point_count: int = Field(serialization_alias="pointCount")


class RouteModel(BaseModel):
    points: list[PointModel]
    distance: float
    follows_streets: bool = Field(serialization_alias="followsStreets")
