from __future__ import annotations

from dex_dashboard.utils.cache import CACHE_TTL_SECONDS, TTLCache


def test_default_ttl_is_five_minutes():
    assert CACHE_TTL_SECONDS == 300.0
    assert TTLCache().ttl == 300.0


def test_entry_valid_until_ttl_elapses(clock):
    cache = TTLCache(clock=clock)
    cache.put("k", [1, 2, 3])

    clock.advance(299.999)
    assert cache.is_valid("k") is True

    clock.advance(0.002)
    assert cache.is_valid("k") is False


def test_stale_entry_is_kept_not_evicted(clock):
    cache = TTLCache(clock=clock)
    cache.put("k", "payload")
    clock.advance(1_000)

    assert cache.is_valid("k") is False
    entry = cache.get("k")
    assert entry is not None
    assert entry.payload == "payload"
    assert len(cache) == 1


def test_missing_key():
    cache = TTLCache()
    assert cache.get("nope") is None
    assert cache.is_valid("nope") is False
    assert cache.age("nope") is None


def test_put_replaces_entry_instead_of_mutating(clock):
    cache = TTLCache(clock=clock)
    cache.put("k", "old")
    first = cache.get("k")

    clock.advance(10)
    cache.put("k", "new")
    second = cache.get("k")

    assert first is not second
    assert first.payload == "old"
    assert second.payload == "new"
    assert second.timestamp == first.timestamp + 10
    assert cache.keys() == ["k"]
