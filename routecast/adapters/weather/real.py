"""Open-Meteo current-conditions weather adapter."""

from __future__ import annotations

import logging

from routecast.config.settings import load_settings
from routecast.domain.models import Weather
from routecast.infrastructure.cache import make_cache_key, weather_cache
from routecast.security.http_client import SecureHttpClient
from routecast.tools.interfaces import ToolError, WeatherQuery

_TOOL = "open_meteo_weather"
_CURRENT_FIELDS = "temperature_2m,precipitation,rain,weather_code,wind_speed_10m"
_logger = logging.getLogger("routecast.weather")


def _as_float(value, default: float | None = 0.0) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_current(data: dict) -> Weather:
    current = data.get("current") if isinstance(data, dict) else None
    if not current:
        raise ToolError(_TOOL, "response has no current conditions")
    return Weather(
        temperature=_as_float(current.get("temperature_2m"), None),
        precipitation=_as_float(current.get("precipitation")) or 0.0,
        rain=_as_float(current.get("rain")) or 0.0,
        code=int(_as_float(current.get("weather_code")) or 0),
        wind_speed=_as_float(current.get("wind_speed_10m"), None),
    )


def get_weather(params: WeatherQuery) -> Weather:
    loc = params.location
    cache_key = make_cache_key("weather", round(loc.lat, 3), round(loc.lon, 3))
    cached = weather_cache.get(cache_key)
    if cached is not None:
        return cached

    settings = load_settings()
    http = SecureHttpClient(tool_name=_TOOL, timeout=settings.http_timeout_seconds, max_attempts=1)
    data = http.get(
        f"{settings.weather_base_url}/v1/forecast",
        params={
            "latitude": loc.lat,
            "longitude": loc.lon,
            "current": _CURRENT_FIELDS,
            "forecast_days": 1,
        },
    )
    weather = parse_current(data)
    _logger.debug("weather at %.3f,%.3f: code=%s rain=%s", loc.lat, loc.lon, weather.code, weather.rain)
    weather_cache.set(cache_key, weather)
    return weather
