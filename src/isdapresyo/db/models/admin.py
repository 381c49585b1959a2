from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from isdapresyo.db.session import Base, TimestampMixin


class Admin(TimestampMixin, Base):
    """Admin login credential. One row per username; password holds a bcrypt hash."""

    __tablename__ = "admin"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True)
    password: Mapped[str] = mapped_column(String(255))
