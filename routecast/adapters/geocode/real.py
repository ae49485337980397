"""Nominatim geocoding adapter: free text -> best-match coordinate."""

from __future__ import annotations

from typing import Optional

from routecast.config.settings import load_settings
from routecast.domain.models import Coordinate
from routecast.infrastructure.cache import geocode_cache, make_cache_key
from routecast.security.http_client import SecureHttpClient
from routecast.tools.interfaces import GeocodeQuery, ToolError

_TOOL = "nominatim_geocode"


def parse_first_match(data) -> Optional[Coordinate]:
    if not isinstance(data, list):
        raise ToolError(_TOOL, "unexpected response shape")
    if not data:
        return None
    first = data[0]
    try:
        return Coordinate(lat=float(first["lat"]), lon=float(first["lon"]))
    except (KeyError, TypeError, ValueError):
        raise ToolError(_TOOL, "match is missing lat/lon") from None


def geocode(params: GeocodeQuery) -> Optional[Coordinate]:
    text = params.text.strip()
    if not text:
        return None

    settings = load_settings()
    cache_key = make_cache_key("geocode", text.lower(), settings.geocode_country_codes)
    cached = geocode_cache.get(cache_key)
    if cached is not None:
        return cached

    query: dict[str, str | int] = {"format": "json", "q": text, "limit": 1}
    if settings.geocode_country_codes:
        query["countrycodes"] = settings.geocode_country_codes

    http = SecureHttpClient(
        tool_name=_TOOL,
        timeout=settings.http_timeout_seconds,
        max_attempts=1,
        headers={"User-Agent": settings.geocode_user_agent},
    )
    match = parse_first_match(http.get(f"{settings.geocode_base_url}/search", params=query))
    if match is not None:
        geocode_cache.set(cache_key, match)
    return match
