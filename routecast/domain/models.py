"""Pydantic domain models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from routecast.domain.constants import COLOR_PRIMARY, UNNAMED_ROAD
from routecast.domain.enums import RoadType, RouteLabel, Severity


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class Step(BaseModel):
    model_config = ConfigDict(frozen=True)

    distance: float = 0.0
    duration: float = 0.0
    geometry: tuple[Coordinate, ...] = ()
    name: str = ""
    ref: str = ""


class Leg(BaseModel):
    model_config = ConfigDict(frozen=True)

    distance: float = 0.0
    duration: float = 0.0
    steps: tuple[Step, ...] = ()


class CandidateRoute(BaseModel):
    """One complete path returned by the routing provider."""

    model_config = ConfigDict(frozen=True)

    distance: float
    duration: float
    geometry: tuple[Coordinate, ...] = ()
    legs: tuple[Leg, ...] = ()
    source: str = "primary"

    def steps(self) -> list[Step]:
        return [step for leg in self.legs for step in leg.steps]

    def road_names(self) -> list[str]:
        return [s.name for s in self.steps() if s.name and s.name != UNNAMED_ROAD]


class Weather(BaseModel):
    temperature: Optional[float] = None
    precipitation: float = 0.0
    rain: float = 0.0
    code: int = 0
    wind_speed: Optional[float] = None


class SegmentMetrics(BaseModel):
    predicted_speed: float
    base_speed: float
    road_type: RoadType
    duration: float
    calibrated_duration: float
    delay: float
    color: str
    incident: Optional[str] = None


class RoadCondition(BaseModel):
    road_name: str
    delay_minutes: float
    severity: Severity
    predicted_speed: int
    base_speed: int
    distance: float


class CorridorRoute(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    via_roads: tuple[str, ...]
    typical_minutes: float
    description: str = ""


class PeakWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: float
    end: float


class Corridor(BaseModel):
    model_config = ConfigDict(frozen=True)

    origin: str
    destination: str
    routes: tuple[CorridorRoute, ...]
    peak_hours: tuple[PeakWindow, ...] = ()
    peak_delay_factor: float = 1.0


class CorridorWeight(BaseModel):
    multiplier: float = 1.0
    data_points: int = Field(default=0, alias="dataPoints")

    model_config = ConfigDict(populate_by_name=True)


class ColoredSegment(BaseModel):
    coordinates: list[Coordinate] = Field(default_factory=list)
    color: str = COLOR_PRIMARY


class PredictionBucket(BaseModel):
    duration: float
    formatted_duration: str
    segments: list[ColoredSegment] = Field(default_factory=list)
    color: str = COLOR_PRIMARY


class RankedRoute(BaseModel):
    route: CandidateRoute
    ui_label: RouteLabel
    ui_color: str
    ui_reason: str
    corridor_name: Optional[str] = None
    score: float
    confidence: int = 50
    distance_km: float
    predictions: dict[int, PredictionBucket] = Field(default_factory=dict)


class RouteSearchResult(BaseModel):
    routes: list[RankedRoute] = Field(default_factory=list)
    weather: Optional[Weather] = None
    road_conditions: list[RoadCondition] = Field(default_factory=list)
    narrative: str = ""
    departure_minutes: int = 0
