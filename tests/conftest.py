"""Shared pytest fixtures: offline providers, no weight file, fresh caches."""

import pytest

from routecast.domain.models import CandidateRoute, Coordinate, Leg, Step
from routecast.infrastructure.cache import geocode_cache, weather_cache


@pytest.fixture(autouse=True)
def offline_providers(monkeypatch):
    """Pin the mock adapters and keep corridor weights in memory."""
    monkeypatch.setenv("ROUTE_PROVIDER", "mock")
    monkeypatch.setenv("CORRIDOR_WEIGHTS_ENABLED", "false")
    monkeypatch.delenv("OSRM_BASE_URL", raising=False)
    monkeypatch.delenv("ROUTE_MAX_ATTEMPTS", raising=False)
    geocode_cache.clear()
    weather_cache.clear()
    yield
    geocode_cache.clear()
    weather_cache.clear()


def _line(lat0: float, lon0: float, lat1: float, lon1: float, count: int = 30) -> tuple[Coordinate, ...]:
    return tuple(
        Coordinate(
            lat=lat0 + (lat1 - lat0) * i / (count - 1),
            lon=lon0 + (lon1 - lon0) * i / (count - 1),
        )
        for i in range(count)
    )


def _make_route(
    distance: float,
    duration: float,
    *,
    geometry: tuple[Coordinate, ...] = (),
    names: tuple[str, ...] = (),
    source: str = "primary",
) -> CandidateRoute:
    """Route whose distance and duration split evenly over one step per name."""
    if not names:
        return CandidateRoute(distance=distance, duration=duration, geometry=geometry, source=source)
    per_d = distance / len(names)
    per_t = duration / len(names)
    chunk = max(1, len(geometry) // len(names)) if geometry else 0
    steps = tuple(
        Step(
            distance=per_d,
            duration=per_t,
            geometry=geometry[i * chunk : (i + 1) * chunk + 1] if geometry else (),
            name=name,
        )
        for i, name in enumerate(names)
    )
    return CandidateRoute(
        distance=distance,
        duration=duration,
        geometry=geometry,
        legs=(Leg(distance=distance, duration=duration, steps=steps),),
        source=source,
    )


@pytest.fixture
def line():
    return _line


@pytest.fixture
def make_route():
    return _make_route
