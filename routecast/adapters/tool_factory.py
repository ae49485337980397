"""Concrete tool selection and wiring."""

from __future__ import annotations

from routecast.adapters.geocode import mock as mock_geocode
from routecast.adapters.geocode import real as real_geocode
from routecast.adapters.route import mock as mock_route
from routecast.adapters.route import real as real_route
from routecast.adapters.weather import mock as mock_weather
from routecast.adapters.weather import real as real_weather
from routecast.config.settings import resolve_route_provider


def _offline() -> bool:
    return resolve_route_provider() == "mock"


def get_route_tool():
    return mock_route if _offline() else real_route


def get_weather_tool():
    return mock_weather if _offline() else real_weather


def get_geocode_tool():
    return mock_geocode if _offline() else real_geocode


__all__ = ["get_route_tool", "get_weather_tool", "get_geocode_tool"]
