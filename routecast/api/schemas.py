"""API request/response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from routecast.domain.models import Coordinate, RoadCondition, Weather


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = ""


class GeocodeResponse(BaseModel):
    query: str
    location: Optional[Coordinate] = None


class RouteRequest(BaseModel):
    origin: Coordinate
    destination: Coordinate
    origin_name: Optional[str] = Field(default=None, max_length=200)
    dest_name: Optional[str] = Field(default=None, max_length=200)
    departure_minutes: int = Field(default=0, ge=0, le=24 * 60, description="Departure offset from now")


class SegmentResponse(BaseModel):
    coordinates: list[list[float]] = Field(default_factory=list, description="[lat, lon] pairs")
    color: str


class PredictionResponse(BaseModel):
    duration_seconds: float
    formatted_duration: str
    color: str
    segments: list[SegmentResponse] = Field(default_factory=list)


class RankedRouteResponse(BaseModel):
    label: str
    color: str
    reason: str
    corridor_name: Optional[str] = None
    score: float
    confidence: int
    distance_km: float
    geometry: list[list[float]] = Field(default_factory=list, description="[lat, lon] pairs")
    predictions: dict[int, PredictionResponse] = Field(default_factory=dict)


class RouteResponse(BaseModel):
    routes: list[RankedRouteResponse] = Field(default_factory=list)
    weather: Optional[Weather] = None
    road_conditions: list[RoadCondition] = Field(default_factory=list)
    narrative: str = ""
    departure_minutes: int = 0


class FeedbackRequest(BaseModel):
    corridor_route_name: str = Field(min_length=1, max_length=200)
    predicted_minutes: float = Field(gt=0)
    actual_minutes: float = Field(gt=0)


class FeedbackResponse(BaseModel):
    status: str = "accepted"
    corridor_route_name: str
