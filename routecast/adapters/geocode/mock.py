"""Mock geocoder backed by a small gazetteer of Bulawayo landmarks."""

from __future__ import annotations

from typing import Optional

from routecast.domain.models import Coordinate
from routecast.tools.interfaces import GeocodeQuery

GAZETTEER: dict[str, tuple[float, float]] = {
    "nust university": (-20.1744, 28.6336),
    "bulawayo city hall": (-20.1553, 28.5836),
    "bulawayo centre": (-20.1706, 28.5583),
    "hillside dams": (-20.1886, 28.6080),
    "mpilo hospital": (-20.1397, 28.5592),
    "bulawayo airport": (-20.0174, 28.6179),
}


def geocode(params: GeocodeQuery) -> Optional[Coordinate]:
    text = params.text.strip().lower()
    if not text:
        return None
    for name, (lat, lon) in GAZETTEER.items():
        if text in name or name in text:
            return Coordinate(lat=lat, lon=lon)
    return None
