"""Relational record store (PostgreSQL in production, SQLite in tests)."""

import logging
from typing import Any, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from isdapresyo.db.models.fish_price import FishPrice
from isdapresyo.domain.dates import to_calendar_date
from isdapresyo.domain.models.fish_price import FishPriceDraft, FishPriceRecord
from isdapresyo.store.base import sort_by_type

logger = logging.getLogger(__name__)

_COLUMNS = (
    FishPrice.id,
    FishPrice.fish_type,
    FishPrice.min_price,
    FishPrice.max_price,
    FishPrice.avg_price,
    FishPrice.date_updated,
)


def _to_record(row: Any) -> FishPriceRecord:
    return FishPriceRecord.model_validate(dict(row._mapping))


class SqlFishPriceStore:
    """Each write is one atomic statement, committed on its own session."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def list_latest_by_type(self) -> list[FishPriceRecord]:
        rank = (
            func.row_number()
            .over(
                partition_by=FishPrice.fish_type,
                order_by=(FishPrice.date_updated.desc(), FishPrice.id.desc()),
            )
            .label("rn")
        )
        ranked = select(*_COLUMNS, rank).subquery()
        stmt = (
            select(
                ranked.c.id,
                ranked.c.fish_type,
                ranked.c.min_price,
                ranked.c.max_price,
                ranked.c.avg_price,
                ranked.c.date_updated,
            )
            .where(ranked.c.rn == 1)
            .order_by(ranked.c.fish_type)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return sort_by_type(_to_record(row) for row in result.all())

    async def list_fish_types(self) -> list[str]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(FishPrice.fish_type).group_by(FishPrice.fish_type).order_by(FishPrice.fish_type)
            )
            return sorted(result.scalars().all())

    async def get_latest_by_type(self, fish_type: str) -> Optional[FishPriceRecord]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(*_COLUMNS)
                .where(FishPrice.fish_type == fish_type)
                .order_by(FishPrice.date_updated.desc(), FishPrice.id.desc())
                .limit(1)
            )
            row = result.one_or_none()
        return _to_record(row) if row is not None else None

    async def create(self, draft: FishPriceDraft) -> FishPriceRecord:
        stmt = (
            insert(FishPrice)
            .values(
                fish_type=draft.fish_type.strip(),
                min_price=draft.min_price,
                max_price=draft.max_price,
                avg_price=draft.avg_price,
                date_updated=to_calendar_date(draft.date_updated),
            )
            .returning(*_COLUMNS)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            row = result.one()
            await session.commit()
        return _to_record(row)

    async def update(self, record_id: int, draft: FishPriceDraft) -> Optional[FishPriceRecord]:
        values: dict[str, Any] = {
            "fish_type": draft.fish_type.strip(),
            "min_price": draft.min_price,
            "max_price": draft.max_price,
            "avg_price": draft.avg_price,
        }
        if draft.date_updated is not None:
            values["date_updated"] = to_calendar_date(draft.date_updated)

        stmt = (
            update(FishPrice)
            .where(FishPrice.id == record_id)
            .values(**values)
            .returning(*_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            row = result.one_or_none()
            await session.commit()
        if row is None:
            logger.debug("Update of missing fish price id=%s", record_id)
            return None
        return _to_record(row)

    async def delete(self, record_id: int) -> bool:
        stmt = (
            delete(FishPrice)
            .where(FishPrice.id == record_id)
            .returning(FishPrice.id)
            .execution_options(synchronize_session=False)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            deleted = result.scalar_one_or_none()
            await session.commit()
        return deleted is not None
