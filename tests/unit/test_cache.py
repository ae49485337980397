"""TTL cache tests."""

from routecast.infrastructure.cache import MemoryCache, make_cache_key


def test_hit_and_miss_are_counted():
    cache = MemoryCache("t", ttl_seconds=60.0, capacity=4)
    assert cache.get("a") is None
    cache.set("a", 1)
    assert cache.get("a") == 1
    assert cache.stats["hits"] == 1
    assert cache.stats["misses"] == 1


def test_expired_entries_are_dropped():
    cache = MemoryCache("t", ttl_seconds=60.0, capacity=4)
    cache.set("a", 1, ttl_seconds=-1.0)
    assert cache.get("a") is None
    assert len(cache) == 0


def test_full_cache_evicts_soonest_expiry():
    cache = MemoryCache("t", ttl_seconds=60.0, capacity=2)
    cache.set("short", 1, ttl_seconds=10.0)
    cache.set("long", 2, ttl_seconds=100.0)
    cache.set("new", 3)
    assert cache.get("short") is None
    assert cache.get("long") == 2
    assert cache.get("new") == 3


def test_cache_keys_are_stable():
    assert make_cache_key("weather", -20.174, 28.634) == make_cache_key("weather", -20.174, 28.634)
    assert make_cache_key("weather", 1) != make_cache_key("geocode", 1)
