"""Mock weather adapter: seeded, mostly-dry conditions per location and hour."""

from __future__ import annotations

import hashlib
from datetime import datetime

from routecast.domain.models import Weather
from routecast.tools.interfaces import WeatherQuery

# (weather code, rain mm) by bucket; dry conditions dominate
_CONDITIONS = (
    (0, 0.0),
    (1, 0.0),
    (2, 0.0),
    (3, 0.0),
    (0, 0.0),
    (1, 0.0),
    (51, 0.3),
    (61, 2.5),
)


def get_weather(params: WeatherQuery) -> Weather:
    loc = params.location
    hour_key = datetime.now().strftime("%Y%m%d%H")
    h = int(hashlib.md5(f"{loc.lat:.2f},{loc.lon:.2f}:{hour_key}".encode()).hexdigest()[:8], 16)
    code, rain = _CONDITIONS[h % len(_CONDITIONS)]
    return Weather(
        temperature=18.0 + (h % 11),
        precipitation=rain,
        rain=rain,
        code=code,
        wind_speed=float(h % 25),
    )
