"""Record store capability shared by the relational and in-memory backends."""

from typing import Iterable, Optional, Protocol

from isdapresyo.domain.models.fish_price import FishPriceDraft, FishPriceRecord, latest_sort_key


class FishPriceStore(Protocol):
    """Persistence of fish price records. Callers never know which backend they hold."""

    async def list_latest_by_type(self) -> list[FishPriceRecord]:
        """One record per fish_type (latest date, ties by highest id), ordered by fish_type."""

    async def list_fish_types(self) -> list[str]:
        """Distinct fish types, ascending."""

    async def get_latest_by_type(self, fish_type: str) -> Optional[FishPriceRecord]:
        """Most recent record for an exact (case-sensitive) fish_type, or None."""

    async def create(self, draft: FishPriceDraft) -> FishPriceRecord: ...

    async def update(self, record_id: int, draft: FishPriceDraft) -> Optional[FishPriceRecord]:
        """Full replace by id. None when the id does not exist."""

    async def delete(self, record_id: int) -> bool: ...


def pick_latest_per_type(records: Iterable[FishPriceRecord]) -> list[FishPriceRecord]:
    latest: dict[str, FishPriceRecord] = {}
    for record in records:
        current = latest.get(record.fish_type)
        if current is None or latest_sort_key(record) > latest_sort_key(current):
            latest[record.fish_type] = record
    return sort_by_type(latest.values())


def sort_by_type(records: Iterable[FishPriceRecord]) -> list[FishPriceRecord]:
    # Ordinal (code point) order, whatever the database collation says.
    return sorted(records, key=lambda r: r.fish_type)
