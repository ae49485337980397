"""Mock route adapter: deterministic straight-line routes with named steps."""

from __future__ import annotations

import hashlib

from routecast.domain.models import CandidateRoute, Coordinate, Leg, Step
from routecast.planner.geometry import haversine
from routecast.tools.interfaces import RouteQuery

ROAD_FACTOR = 1.3
POINTS_PER_STEP = 6
STEPS_PER_LEG = 4

_ROAD_NAMES = (
    "Robert Mugabe Way",
    "Cecil Avenue",
    "Fife Street",
    "Gwanda Road",
    "Lobengula Street",
    "Leopold Takawira Avenue",
    "Fort Street",
    "Unnamed Road",
)
# Alternating free-flow speeds (km/h) so a route mixes road classes.
_STEP_SPEEDS = (60.0, 45.0, 60.0, 35.0)


def _pick(seed: str, pool: tuple[str, ...]) -> str:
    h = int(hashlib.md5(seed.encode()).hexdigest()[:8], 16)
    return pool[h % len(pool)]


def _interpolate(a: Coordinate, b: Coordinate, count: int) -> list[Coordinate]:
    return [
        Coordinate(
            lat=a.lat + (b.lat - a.lat) * i / (count - 1),
            lon=a.lon + (b.lon - a.lon) * i / (count - 1),
        )
        for i in range(count)
    ]


def _leg(a: Coordinate, b: Coordinate) -> tuple[Leg, list[Coordinate]]:
    points = _interpolate(a, b, STEPS_PER_LEG * (POINTS_PER_STEP - 1) + 1)
    total_m = haversine(a.lat, a.lon, b.lat, b.lon) * 1000 * ROAD_FACTOR
    step_m = total_m / STEPS_PER_LEG

    steps = []
    for i in range(STEPS_PER_LEG):
        start = i * (POINTS_PER_STEP - 1)
        geometry = tuple(points[start : start + POINTS_PER_STEP])
        speed = _STEP_SPEEDS[i % len(_STEP_SPEEDS)]
        seed = f"{geometry[0].lat:.4f},{geometry[0].lon:.4f}:{i}"
        steps.append(
            Step(
                distance=round(step_m, 1),
                duration=round(step_m / (speed / 3.6), 1),
                geometry=geometry,
                name=_pick(seed, _ROAD_NAMES),
            )
        )
    leg = Leg(
        distance=sum(s.distance for s in steps),
        duration=sum(s.duration for s in steps),
        steps=tuple(steps),
    )
    return leg, points


def _route(points: list[Coordinate], source: str) -> CandidateRoute:
    legs: list[Leg] = []
    geometry: list[Coordinate] = []
    for a, b in zip(points, points[1:]):
        leg, leg_points = _leg(a, b)
        legs.append(leg)
        geometry.extend(leg_points if not geometry else leg_points[1:])
    return CandidateRoute(
        distance=sum(leg.distance for leg in legs),
        duration=sum(leg.duration for leg in legs),
        geometry=tuple(geometry),
        legs=tuple(legs),
        source=source,
    )


def fetch_routes(params: RouteQuery) -> list[CandidateRoute]:
    return [_route([params.origin, params.destination], "primary")]


def fetch_via_waypoint(params: RouteQuery) -> list[CandidateRoute]:
    if params.via is None:
        return fetch_routes(params)
    return [_route([params.origin, params.via, params.destination], "waypoint")]
