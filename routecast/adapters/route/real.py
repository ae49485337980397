"""OSRM route adapter.

Environment: OSRM_BASE_URL, OSRM_PROFILE, ROUTE_MAX_ATTEMPTS
OSRM docs: http://project-osrm.org/docs/v5.24.0/api/#route-service
"""

from __future__ import annotations

from typing import Any

from routecast.config.settings import load_settings
from routecast.domain.models import CandidateRoute, Coordinate, Leg, Step
from routecast.security.http_client import SecureHttpClient
from routecast.tools.interfaces import RouteQuery, ToolError

_TOOL = "osrm_route"
_NO_ROUTE_CODES = {"NoRoute", "NoSegment"}


def _format_location(point: Coordinate) -> str:
    """OSRM coordinate format: lon,lat (longitude first)."""
    return f"{point.lon},{point.lat}"


def _coordinates(geometry: Any) -> tuple[Coordinate, ...]:
    if not isinstance(geometry, dict):
        return ()
    points = []
    for pair in geometry.get("coordinates") or []:
        try:
            lon, lat = float(pair[0]), float(pair[1])
        except (TypeError, ValueError, IndexError):
            continue
        points.append(Coordinate(lat=lat, lon=lon))
    return tuple(points)


def _parse_step(raw: dict) -> Step:
    return Step(
        distance=float(raw.get("distance") or 0.0),
        duration=float(raw.get("duration") or 0.0),
        geometry=_coordinates(raw.get("geometry")),
        name=str(raw.get("name") or ""),
        ref=str(raw.get("ref") or ""),
    )


def parse_routes(data: dict, source: str = "primary") -> list[CandidateRoute]:
    """Normalize an OSRM /route response body into candidate routes."""
    code = data.get("code")
    if code in _NO_ROUTE_CODES:
        return []
    if code != "Ok":
        raise ToolError(_TOOL, f"OSRM error: {data.get('message', code or 'unknown error')}")

    routes: list[CandidateRoute] = []
    for raw in data.get("routes") or []:
        try:
            legs = tuple(
                Leg(
                    distance=float(leg.get("distance") or 0.0),
                    duration=float(leg.get("duration") or 0.0),
                    steps=tuple(_parse_step(step) for step in leg.get("steps") or []),
                )
                for leg in raw.get("legs") or []
            )
            routes.append(
                CandidateRoute(
                    distance=float(raw["distance"]),
                    duration=float(raw["duration"]),
                    geometry=_coordinates(raw.get("geometry")),
                    legs=legs,
                    source=source,
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ToolError(_TOOL, f"malformed route in OSRM response: {exc}") from None
    return routes


def _route_url(points: list[Coordinate]) -> str:
    settings = load_settings()
    coords = ";".join(_format_location(p) for p in points)
    return f"{settings.osrm_base_url}/route/v1/{settings.osrm_profile}/{coords}"


def _request_params(alternatives: bool) -> dict[str, str]:
    return {
        "overview": "full",
        "geometries": "geojson",
        "steps": "true",
        "alternatives": "true" if alternatives else "false",
    }


def fetch_routes(params: RouteQuery) -> list[CandidateRoute]:
    """Primary request: alternatives on, retried with backoff."""
    settings = load_settings()
    http = SecureHttpClient(
        tool_name=_TOOL,
        timeout=settings.http_timeout_seconds,
        max_attempts=settings.route_max_attempts,
    )
    data = http.get(
        _route_url([params.origin, params.destination]),
        params=_request_params(params.alternatives),
    )
    return parse_routes(data, source="primary")


def fetch_via_waypoint(params: RouteQuery) -> list[CandidateRoute]:
    """Best-effort probe through ``params.via``; a single attempt, no retries."""
    if params.via is None:
        raise ToolError(_TOOL, "waypoint probe requires a via coordinate")
    settings = load_settings()
    http = SecureHttpClient(tool_name=_TOOL, timeout=settings.http_timeout_seconds, max_attempts=1)
    data = http.get(
        _route_url([params.origin, params.via, params.destination]),
        params=_request_params(False),
    )
    return parse_routes(data, source="waypoint")
