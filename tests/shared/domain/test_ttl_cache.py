import pytest

from storefront.shared.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestTTLCache:
    def test_get_missing_returns_default(self):
        cache = TTLCache()
        assert cache.get("missing") is None
        assert cache.get("missing", 42) == 42

    def test_entry_expires(self):
        clock = FakeClock()
        cache = TTLCache(clock)
        cache.set("key", "value", ttl_seconds=60)

        clock.advance(59)
        assert cache.get("key") == "value"

        clock.advance(1)
        assert cache.get("key") is None
        assert len(cache) == 0

    def test_get_or_load_calls_loader_once(self):
        cache = TTLCache(FakeClock())
        calls = []

        def loader():
            calls.append(1)
            return "loaded"

        assert cache.get_or_load("key", loader, 60) == "loaded"
        assert cache.get_or_load("key", loader, 60) == "loaded"
        assert len(calls) == 1

    def test_get_or_load_reloads_after_expiry(self):
        clock = FakeClock()
        cache = TTLCache(clock)
        values = iter(["first", "second"])

        cache.get_or_load("key", lambda: next(values), 10)
        clock.advance(11)
        assert cache.get_or_load("key", lambda: next(values), 10) == "second"

    def test_cached_falsy_values_are_hits(self):
        cache = TTLCache(FakeClock())
        cache.set("empty", [], 60)
        assert cache.get_or_load("empty", lambda: ["reloaded"], 60) == []

    def test_clear(self):
        cache = TTLCache()
        cache.set("a", 1, 60)
        cache.set("b", 2, 60)
        cache.clear()
        assert len(cache) == 0

    def test_set_evicts_expired_entries(self):
        clock = FakeClock()
        cache = TTLCache(clock, max_entries=20_000)
        for i in range(10_000):
            cache.set(f"search:{i}", i, ttl_seconds=60)

        clock.advance(61)
        cache.set("fresh", "value", ttl_seconds=60)

        assert len(cache) == 1
        assert cache.get("fresh") == "value"

    def test_full_cache_drops_entry_closest_to_expiry(self):
        clock = FakeClock()
        cache = TTLCache(clock, max_entries=2)
        cache.set("short", 1, ttl_seconds=10)
        cache.set("long", 2, ttl_seconds=100)

        cache.set("new", 3, ttl_seconds=50)

        assert len(cache) == 2
        assert cache.get("short") is None
        assert cache.get("long") == 2
        assert cache.get("new") == 3

    def test_overwriting_a_key_in_full_cache_keeps_others(self):
        cache = TTLCache(FakeClock(), max_entries=2)
        cache.set("a", 1, 60)
        cache.set("b", 2, 60)
        cache.set("a", 10, 60)
        assert cache.get("a") == 10
        assert cache.get("b") == 2

    def test_max_entries_must_be_positive(self):
        with pytest.raises(ValueError):
            TTLCache(max_entries=0)
