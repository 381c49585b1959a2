from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from isdapresyo.db.models.admin import Admin


class AdminRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_username(self, username: str) -> Optional[Admin]:
        result = await self._session.execute(
            select(Admin).where(Admin.username == username).limit(1)
        )
        return result.scalar_one_or_none()

    async def upsert(self, username: str, password_hash: str) -> Admin:
        """Create the admin, or replace the password hash if the username exists."""
        admin = await self.get_by_username(username)
        if admin is None:
            admin = Admin(username=username, password=password_hash)
            self._session.add(admin)
        else:
            admin.password = password_hash
        await self._session.flush()
        return admin
