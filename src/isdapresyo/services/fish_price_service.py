"""FishPriceService: read-through caching over the active record store."""

import logging
from typing import Optional

from isdapresyo.domain.models.fish_price import FishPriceDraft, FishPriceRecord
from isdapresyo.infra.cache.ttl_cache import TTLCache
from isdapresyo.store.base import FishPriceStore

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 60.0

FISH_TYPES_KEY = "fish-types"
FISH_PRICES_PREFIX = "fish-prices:"
LATEST_ALL_KEY = FISH_PRICES_PREFIX + "all"


def latest_by_type_key(fish_type: str) -> str:
    return f"{FISH_PRICES_PREFIX}type:{fish_type}"


class FishPriceService:
    """Reads: cache lookup -> store -> cache store. Writes: store -> invalidate on success.

    With cache_enabled=False (demo mode) every read goes straight to the store.
    """

    def __init__(
        self,
        store: FishPriceStore,
        cache: TTLCache,
        cache_enabled: bool = True,
        ttl_seconds: float = CACHE_TTL_SECONDS,
    ) -> None:
        self._store = store
        self._cache = cache
        self._cache_enabled = cache_enabled
        self._ttl = ttl_seconds

    @property
    def store(self) -> FishPriceStore:
        return self._store

    async def list_fish_types(self) -> list[str]:
        cached = self._cache_get(FISH_TYPES_KEY)
        if cached is not None:
            return list(cached)
        generation = self._cache.generation
        types = await self._store.list_fish_types()
        self._cache_set(FISH_TYPES_KEY, tuple(types), generation)
        return types

    async def list_latest(self) -> list[FishPriceRecord]:
        cached = self._cache_get(LATEST_ALL_KEY)
        if cached is not None:
            return list(cached)
        generation = self._cache.generation
        records = await self._store.list_latest_by_type()
        self._cache_set(LATEST_ALL_KEY, tuple(records), generation)
        return records

    async def get_latest(self, fish_type: str) -> Optional[FishPriceRecord]:
        key = latest_by_type_key(fish_type)
        cached = self._cache_get(key)
        if cached is not None:
            return cached
        generation = self._cache.generation
        record = await self._store.get_latest_by_type(fish_type)
        if record is not None:
            self._cache_set(key, record, generation)
        return record

    async def create(self, draft: FishPriceDraft) -> FishPriceRecord:
        record = await self._store.create(draft)
        self._invalidate()
        logger.info("Created fish price id=%s type=%s", record.id, record.fish_type)
        return record

    async def update(self, record_id: int, draft: FishPriceDraft) -> Optional[FishPriceRecord]:
        record = await self._store.update(record_id, draft)
        if record is not None:
            self._invalidate()
            logger.info("Updated fish price id=%s", record_id)
        return record

    async def delete(self, record_id: int) -> bool:
        deleted = await self._store.delete(record_id)
        if deleted:
            self._invalidate()
            logger.info("Deleted fish price id=%s", record_id)
        return deleted

    def _cache_get(self, key: str):
        if not self._cache_enabled:
            return None
        return self._cache.get(key)

    def _cache_set(self, key: str, value, generation: int) -> None:
        # A write that invalidated while the store was being read wins
        if self._cache_enabled and not self._cache.set_if_generation(key, value, self._ttl, generation):
            logger.debug("Dropped stale read for cache key %s", key)

    def _invalidate(self) -> None:
        if not self._cache_enabled:
            return
        self._cache.invalidate_prefix(FISH_PRICES_PREFIX)
        self._cache.invalidate_prefix(FISH_TYPES_KEY)
