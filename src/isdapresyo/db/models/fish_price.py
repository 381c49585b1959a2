from datetime import date

from sqlalchemy import Date, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from isdapresyo.db.session import Base


class FishPrice(Base):
    """A price band (min/max/avg) for one fish type, as of date_updated."""

    __tablename__ = "fish_prices"
    __table_args__ = (
        Index("ix_fish_prices_type_date", "fish_type", "date_updated"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    fish_type: Mapped[str] = mapped_column(String(100))
    min_price: Mapped[float] = mapped_column(Float)
    max_price: Mapped[float] = mapped_column(Float)
    avg_price: Mapped[float] = mapped_column(Float)
    date_updated: Mapped[date] = mapped_column(Date)
