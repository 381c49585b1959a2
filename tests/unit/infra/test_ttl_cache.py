"""Tests for TTLCache: lazy expiry and prefix invalidation."""

from isdapresyo.infra.cache.ttl_cache import TTLCache


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestGetSet:
    def test_miss_returns_none(self):
        assert TTLCache().get("nope") is None

    def test_hit_before_expiry(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        cache.set("k", [1, 2], ttl=60)
        clock.now += 59
        assert cache.get("k") == [1, 2]

    def test_still_valid_at_exact_expiry(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        cache.set("k", "v", ttl=60)
        clock.now += 60
        assert cache.get("k") == "v"

    def test_expired_entry_is_evicted_on_read(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        cache.set("k", "v", ttl=60)
        clock.now += 60.5
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_set_overwrites_and_resets_expiry(self):
        clock = FakeClock()
        cache = TTLCache(clock=clock)
        cache.set("k", "old", ttl=10)
        clock.now += 9
        cache.set("k", "new", ttl=10)
        clock.now += 9
        assert cache.get("k") == "new"

    def test_falsy_values_are_cached(self):
        cache = TTLCache()
        cache.set("empty", (), ttl=60)
        assert cache.get("empty") == ()


class TestInvalidatePrefix:
    def test_removes_only_matching_keys(self):
        cache = TTLCache()
        cache.set("fish-prices:all", 1, ttl=60)
        cache.set("fish-prices:type:Bangus", 2, ttl=60)
        cache.set("fish-types", 3, ttl=60)

        removed = cache.invalidate_prefix("fish-prices:")

        assert removed == 2
        assert cache.get("fish-prices:all") is None
        assert cache.get("fish-prices:type:Bangus") is None
        assert cache.get("fish-types") == 3

    def test_no_match(self):
        cache = TTLCache()
        cache.set("a", 1, ttl=60)
        assert cache.invalidate_prefix("b") == 0
        assert len(cache) == 1

    def test_clear(self):
        cache = TTLCache()
        cache.set("a", 1, ttl=60)
        cache.clear()
        assert len(cache) == 0


class TestGeneration:
    def test_invalidation_advances_generation(self):
        cache = TTLCache()
        before = cache.generation
        cache.invalidate_prefix("nothing-matches")
        assert cache.generation == before + 1

    def test_set_if_generation_current(self):
        cache = TTLCache()
        assert cache.set_if_generation("k", "v", 60, cache.generation) is True
        assert cache.get("k") == "v"

    def test_set_if_generation_refused_after_invalidation(self):
        cache = TTLCache()
        seen = cache.generation
        cache.invalidate_prefix("fish-")
        assert cache.set_if_generation("fish-types", ("Stale",), 60, seen) is False
        assert cache.get("fish-types") is None

    def test_clear_advances_generation(self):
        cache = TTLCache()
        seen = cache.generation
        cache.clear()
        assert not cache.set_if_generation("k", 1, 60, seen)
