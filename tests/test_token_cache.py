"""Tests for the in-memory token cache (infra/token_cache.py).

A fake clock drives expiry: no sleeping.
"""

from __future__ import annotations

from opcall.infra.token_cache import InMemoryTokenCache


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestInMemoryTokenCache:
    def test_miss_returns_none(self) -> None:
        assert InMemoryTokenCache().get("missing") is None

    def test_set_then_get(self) -> None:
        cache = InMemoryTokenCache()
        cache.set("k", "tok", 3600)
        assert cache.get("k") == "tok"

    def test_expires_after_lifetime_minus_margin(self) -> None:
        clock = _Clock()
        cache = InMemoryTokenCache(expiry_margin=60, clock=clock)
        cache.set("k", "tok", 3600)
        clock.now += 3539
        assert cache.get("k") == "tok"
        clock.now += 1
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_short_lifetime_expires_immediately(self) -> None:
        clock = _Clock()
        cache = InMemoryTokenCache(expiry_margin=60, clock=clock)
        cache.set("k", "tok", 30)
        assert cache.get("k") is None

    def test_no_lifetime_uses_default_ttl(self) -> None:
        clock = _Clock()
        cache = InMemoryTokenCache(default_ttl=10, clock=clock)
        cache.set("k", "tok")
        clock.now += 11
        assert cache.get("k") is None

    def test_no_lifetime_without_default_never_expires(self) -> None:
        clock = _Clock()
        cache = InMemoryTokenCache(clock=clock)
        cache.set("k", "tok")
        clock.now += 10**9
        assert cache.get("k") == "tok"

    def test_set_overwrites(self) -> None:
        cache = InMemoryTokenCache()
        cache.set("k", "old", 3600)
        cache.set("k", "new", 3600)
        assert cache.get("k") == "new"

    def test_clear(self) -> None:
        cache = InMemoryTokenCache()
        cache.set("a", "1", 3600)
        cache.set("b", "2", 3600)
        cache.clear()
        assert len(cache) == 0
