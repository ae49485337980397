"""Tool abstraction protocols and I/O schemas."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from pydantic import BaseModel

from routecast.domain.models import CandidateRoute, Coordinate, Weather
from routecast.shared.exceptions import ToolError


class RouteQuery(BaseModel):
    origin: Coordinate
    destination: Coordinate
    via: Optional[Coordinate] = None
    alternatives: bool = True


class WeatherQuery(BaseModel):
    location: Coordinate


class GeocodeQuery(BaseModel):
    text: str


@runtime_checkable
class RouteTool(Protocol):
    def fetch_routes(self, params: RouteQuery) -> list[CandidateRoute]: ...

    def fetch_via_waypoint(self, params: RouteQuery) -> list[CandidateRoute]: ...


@runtime_checkable
class WeatherTool(Protocol):
    def get_weather(self, params: WeatherQuery) -> Weather: ...


@runtime_checkable
class GeocodeTool(Protocol):
    def geocode(self, params: GeocodeQuery) -> Optional[Coordinate]: ...


__all__ = [
    "RouteQuery",
    "WeatherQuery",
    "GeocodeQuery",
    "RouteTool",
    "WeatherTool",
    "GeocodeTool",
    "ToolError",
]
