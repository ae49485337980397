"""Infrastructure services and cross-cutting utilities."""

from routecast.infrastructure.cache import MemoryCache, geocode_cache, make_cache_key, weather_cache
from routecast.infrastructure.logging import StructuredLogger

__all__ = [
    "MemoryCache",
    "StructuredLogger",
    "geocode_cache",
    "make_cache_key",
    "weather_cache",
]
