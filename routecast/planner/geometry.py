"""Deterministic geometry helpers for comparing candidate routes."""

from __future__ import annotations

import math
from typing import Sequence

from routecast.domain.models import CandidateRoute, Coordinate

SAMPLE_SIZE = 20
MATCH_TOLERANCE_DEG = 0.001  # ~111 m
DUPLICATE_SIMILARITY = 0.75
CORRIDOR_SIMILARITY = 0.40
BEARING_TOLERANCE_DEG = 15.0
BEARING_PREFIX_FRACTION = 0.2


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    radius_km = 6371.0
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlon / 2) ** 2
    )
    return radius_km * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def sample_points(points: Sequence[Coordinate], size: int = SAMPLE_SIZE) -> list[Coordinate]:
    """Pick at most ``size`` evenly spaced points, always keeping both ends."""
    if len(points) <= size:
        return list(points)
    step = (len(points) - 1) / (size - 1)
    return [points[round(i * step)] for i in range(size)]


def _near(a: Coordinate, b: Coordinate) -> bool:
    return abs(a.lat - b.lat) < MATCH_TOLERANCE_DEG and abs(a.lon - b.lon) < MATCH_TOLERANCE_DEG


def _directed_similarity(a: list[Coordinate], b: list[Coordinate]) -> float:
    if not a or not b:
        return 0.0
    matches = sum(1 for p in a if any(_near(p, q) for q in b))
    return matches / len(a)


def route_similarity(first: CandidateRoute, second: CandidateRoute) -> float:
    """Share of sampled points of one route lying on the other; symmetric."""
    a = sample_points(first.geometry)
    b = sample_points(second.geometry)
    return max(_directed_similarity(a, b), _directed_similarity(b, a))


def initial_bearing(points: Sequence[Coordinate]) -> float | None:
    """Heading in degrees over the first fifth of the geometry."""
    if len(points) < 2:
        return None
    end_index = max(1, int(len(points) * BEARING_PREFIX_FRACTION))
    start, end = points[0], points[min(end_index, len(points) - 1)]
    lat1, lat2 = math.radians(start.lat), math.radians(end.lat)
    dlon = math.radians(end.lon - start.lon)
    x = math.sin(dlon) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    return (math.degrees(math.atan2(x, y)) + 360.0) % 360.0


def bearing_difference(first: float, second: float) -> float:
    diff = abs(first - second) % 360.0
    return min(diff, 360.0 - diff)


def is_distinct(candidate: CandidateRoute, accepted: Sequence[CandidateRoute]) -> bool:
    """True when ``candidate`` differs from every accepted route."""
    candidate_bearing = initial_bearing(candidate.geometry)
    for other in accepted:
        similarity = route_similarity(candidate, other)
        if similarity > DUPLICATE_SIMILARITY:
            return False
        other_bearing = initial_bearing(other.geometry)
        if (
            candidate_bearing is not None
            and other_bearing is not None
            and bearing_difference(candidate_bearing, other_bearing) <= BEARING_TOLERANCE_DEG
            and similarity > CORRIDOR_SIMILARITY
        ):
            return False
    return True


__all__ = [
    "haversine",
    "sample_points",
    "route_similarity",
    "initial_bearing",
    "bearing_difference",
    "is_distinct",
]
