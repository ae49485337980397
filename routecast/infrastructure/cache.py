"""Small TTL caches for provider lookups that rarely change (geocodes, current weather)."""

from __future__ import annotations

import hashlib
import json
import threading
import time
from typing import Any, Optional


class MemoryCache:
    """Thread-safe TTL map; when full, expired entries go first, then the soonest to expire."""

    def __init__(self, name: str, *, ttl_seconds: float, capacity: int):
        self.name = name
        self._ttl = ttl_seconds
        self._capacity = capacity
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        now = time.monotonic()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] >= now:
                self._hits += 1
                return entry[1]
            if entry is not None:
                del self._entries[key]
            self._misses += 1
            return None

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        now = time.monotonic()
        expires_at = now + (self._ttl if ttl_seconds is None else ttl_seconds)
        with self._lock:
            if key not in self._entries and len(self._entries) >= self._capacity:
                self._evict(now)
            self._entries[key] = (expires_at, value)

    def _evict(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if expires_at < now]
        for k in expired:
            del self._entries[k]
        if len(self._entries) >= self._capacity:
            oldest = min(self._entries, key=lambda k: self._entries[k][0])
            del self._entries[oldest]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def stats(self) -> dict[str, Any]:
        with self._lock:
            lookups = self._hits + self._misses
            return {
                "name": self.name,
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / lookups, 3) if lookups else 0.0,
            }


def make_cache_key(*parts: Any) -> str:
    raw = json.dumps(parts, sort_keys=True, default=str, ensure_ascii=False)
    return hashlib.md5(raw.encode()).hexdigest()


# Current conditions move slowly; place names essentially never do.
weather_cache = MemoryCache("weather", ttl_seconds=600.0, capacity=100)
geocode_cache = MemoryCache("geocode", ttl_seconds=86400.0, capacity=300)
