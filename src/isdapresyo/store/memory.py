"""In-memory record store for demo mode. Data resets with the process."""

import threading
from datetime import date
from typing import Optional

from isdapresyo.domain.dates import to_calendar_date
from isdapresyo.domain.models.fish_price import FishPriceDraft, FishPriceRecord, latest_sort_key
from isdapresyo.store.base import pick_latest_per_type

DEMO_ROWS = [
    FishPriceRecord(
        id=1, fish_type="Galunggong", min_price=120, max_price=160, avg_price=140,
        date_updated=date(2026, 1, 22),
    ),
    FishPriceRecord(
        id=2, fish_type="Tamban", min_price=80, max_price=110, avg_price=95,
        date_updated=date(2026, 1, 22),
    ),
]


class MemoryFishPriceStore:
    """Mutex-guarded list of records. Mirrors SqlFishPriceStore ordering and tie-breaks."""

    def __init__(self, seed: Optional[list[FishPriceRecord]] = None) -> None:
        self._lock = threading.Lock()
        self._rows: list[FishPriceRecord] = list(DEMO_ROWS if seed is None else seed)
        self._next_id = max((r.id for r in self._rows), default=0) + 1

    async def list_latest_by_type(self) -> list[FishPriceRecord]:
        with self._lock:
            rows = list(self._rows)
        return pick_latest_per_type(rows)

    async def list_fish_types(self) -> list[str]:
        with self._lock:
            types = {r.fish_type for r in self._rows}
        return sorted(types)

    async def get_latest_by_type(self, fish_type: str) -> Optional[FishPriceRecord]:
        with self._lock:
            matches = [r for r in self._rows if r.fish_type == fish_type]
        if not matches:
            return None
        return max(matches, key=latest_sort_key)

    async def create(self, draft: FishPriceDraft) -> FishPriceRecord:
        with self._lock:
            record = FishPriceRecord(
                id=self._next_id,
                fish_type=draft.fish_type.strip(),
                min_price=draft.min_price,
                max_price=draft.max_price,
                avg_price=draft.avg_price,
                date_updated=to_calendar_date(draft.date_updated),
            )
            self._next_id += 1
            self._rows.append(record)
        return record

    async def update(self, record_id: int, draft: FishPriceDraft) -> Optional[FishPriceRecord]:
        with self._lock:
            idx = self._index_of(record_id)
            if idx is None:
                return None
            current = self._rows[idx]
            updated = FishPriceRecord(
                id=current.id,
                fish_type=draft.fish_type.strip(),
                min_price=draft.min_price,
                max_price=draft.max_price,
                avg_price=draft.avg_price,
                date_updated=(
                    to_calendar_date(draft.date_updated) if draft.date_updated else current.date_updated
                ),
            )
            self._rows[idx] = updated
        return updated

    async def delete(self, record_id: int) -> bool:
        with self._lock:
            idx = self._index_of(record_id)
            if idx is None:
                return False
            del self._rows[idx]
        return True

    def _index_of(self, record_id: int) -> Optional[int]:
        for idx, row in enumerate(self._rows):
            if row.id == record_id:
                return idx
        return None
