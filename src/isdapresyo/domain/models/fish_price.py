"""Domain types for fish price records."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict


class FishPriceRecord(BaseModel):
    """One stored price band for a fish type on a given day."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    fish_type: str
    min_price: float
    max_price: float
    avg_price: float
    date_updated: date


class FishPriceDraft(BaseModel):
    """Write input handed to a record store (already validated)."""

    model_config = ConfigDict(frozen=True)

    fish_type: str
    min_price: float
    max_price: float
    avg_price: float
    date_updated: Optional[date] = None  # None: today on create, keep existing on update


def latest_sort_key(record: FishPriceRecord) -> tuple[date, int]:
    """Ordering for "most recent": greatest date first, ties by greatest id."""
    return record.date_updated, record.id
