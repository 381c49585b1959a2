"""Create an admin login, or replace its password if the username exists.

Usage:
    DATABASE_URL=... PYTHONPATH=src python scripts/create_admin.py <username> <password>
"""

import asyncio
import logging
import sys

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("create_admin")
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


async def main(username: str, password: str) -> None:
    from isdapresyo.auth.passwords import hash_password
    from isdapresyo.config import settings
    from isdapresyo.db.repos.admin_repo import AdminRepo
    from isdapresyo.db.session import build_engine, build_session_factory

    if not settings.database_url:
        logger.error("DATABASE_URL is required")
        sys.exit(1)

    engine = build_engine(settings.async_database_url, echo=False)
    session_factory = build_session_factory(engine)
    password_hash = await asyncio.to_thread(hash_password, password)

    async with session_factory() as session:
        try:
            await AdminRepo(session).upsert(username, password_hash)
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Admin upsert failed")
            sys.exit(1)

    await engine.dispose()
    logger.info('Admin user "%s" created/updated.', username)


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("Usage: python scripts/create_admin.py <username> <password>")
        sys.exit(1)
    asyncio.run(main(sys.argv[1], sys.argv[2]))
