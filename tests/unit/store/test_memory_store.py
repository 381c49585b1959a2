"""Tests for MemoryFishPriceStore: demo seed, ordering, tie-breaks."""

from datetime import date

from isdapresyo.domain.dates import utc_today
from isdapresyo.domain.models.fish_price import FishPriceDraft, FishPriceRecord
from isdapresyo.store.memory import MemoryFishPriceStore


def _draft(fish_type="Bangus", low=100.0, high=150.0, avg=125.0, day=None) -> FishPriceDraft:
    return FishPriceDraft(fish_type=fish_type, min_price=low, max_price=high, avg_price=avg, date_updated=day)


class TestDemoSeed:
    async def test_seeded_with_two_records(self):
        store = MemoryFishPriceStore()
        records = await store.list_latest_by_type()
        assert [r.fish_type for r in records] == ["Galunggong", "Tamban"]
        assert records[0].id == 1
        assert records[0].date_updated == date(2026, 1, 22)

    async def test_next_id_follows_seed(self):
        store = MemoryFishPriceStore()
        created = await store.create(_draft())
        assert created.id == 3

    async def test_empty_seed(self):
        store = MemoryFishPriceStore(seed=[])
        assert await store.list_fish_types() == []
        created = await store.create(_draft())
        assert created.id == 1

    async def test_instances_do_not_share_rows(self):
        a = MemoryFishPriceStore()
        b = MemoryFishPriceStore()
        await a.create(_draft())
        assert "Bangus" not in await b.list_fish_types()


class TestDateNormalization:
    async def test_missing_date_defaults_to_today(self):
        store = MemoryFishPriceStore(seed=[])
        created = await store.create(_draft())
        assert created.date_updated == utc_today()

    async def test_update_without_date_keeps_existing(self):
        store = MemoryFishPriceStore(seed=[])
        created = await store.create(_draft(day=date(2025, 5, 1)))
        updated = await store.update(created.id, _draft(avg=130.0))
        assert updated.date_updated == date(2025, 5, 1)
        assert updated.avg_price == 130.0

    async def test_update_with_date_replaces_it(self):
        store = MemoryFishPriceStore(seed=[])
        created = await store.create(_draft(day=date(2025, 5, 1)))
        updated = await store.update(created.id, _draft(day=date(2025, 6, 2)))
        assert updated.date_updated == date(2025, 6, 2)


class TestLatestSelection:
    async def test_tie_on_date_prefers_highest_id(self):
        seed = [
            FishPriceRecord(id=5, fish_type="Tilapia", min_price=1, max_price=3, avg_price=2,
                            date_updated=date(2026, 2, 1)),
            FishPriceRecord(id=9, fish_type="Tilapia", min_price=4, max_price=6, avg_price=5,
                            date_updated=date(2026, 2, 1)),
            FishPriceRecord(id=7, fish_type="Tilapia", min_price=7, max_price=9, avg_price=8,
                            date_updated=date(2026, 2, 1)),
        ]
        store = MemoryFishPriceStore(seed=seed)
        latest = await store.get_latest_by_type("Tilapia")
        assert latest.id == 9
        assert [r.id for r in await store.list_latest_by_type()] == [9]

    async def test_newer_date_beats_higher_id(self):
        seed = [
            FishPriceRecord(id=1, fish_type="Tilapia", min_price=1, max_price=3, avg_price=2,
                            date_updated=date(2026, 3, 1)),
            FishPriceRecord(id=2, fish_type="Tilapia", min_price=4, max_price=6, avg_price=5,
                            date_updated=date(2026, 2, 1)),
        ]
        store = MemoryFishPriceStore(seed=seed)
        assert (await store.get_latest_by_type("Tilapia")).id == 1

    async def test_ordering_is_ordinal(self):
        store = MemoryFishPriceStore(seed=[])
        for name in ["bangus", "Tamban", "Alumahan"]:
            await store.create(_draft(fish_type=name))
        assert await store.list_fish_types() == ["Alumahan", "Tamban", "bangus"]
        assert [r.fish_type for r in await store.list_latest_by_type()] == ["Alumahan", "Tamban", "bangus"]

    async def test_lookup_is_case_sensitive(self):
        store = MemoryFishPriceStore()
        assert await store.get_latest_by_type("galunggong") is None
        assert (await store.get_latest_by_type("Galunggong")).id == 1


class TestWrites:
    async def test_create_trims_fish_type(self):
        store = MemoryFishPriceStore(seed=[])
        created = await store.create(_draft(fish_type="  Bangus  "))
        assert created.fish_type == "Bangus"

    async def test_ids_are_never_reused(self):
        store = MemoryFishPriceStore(seed=[])
        first = await store.create(_draft())
        await store.delete(first.id)
        second = await store.create(_draft())
        assert second.id != first.id

    async def test_update_missing_returns_none(self):
        store = MemoryFishPriceStore()
        assert await store.update(999, _draft()) is None

    async def test_delete(self):
        store = MemoryFishPriceStore()
        assert await store.delete(1) is True
        assert await store.delete(1) is False
        assert await store.list_fish_types() == ["Tamban"]
