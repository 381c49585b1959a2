from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from isdapresyo.api.main import create_app
from isdapresyo.config import Settings
from isdapresyo.container import Container
from isdapresyo.db.session import Base, create_schema

TEST_SECRET = "test-signing-secret"


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:")
    await create_schema(eng)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest.fixture()
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture()
async def session(session_factory) -> AsyncSession:
    async with session_factory() as sess:
        yield sess


@pytest.fixture()
def audit_path(tmp_path):
    return tmp_path / "logs" / "audit.log"


@pytest.fixture()
def make_settings(audit_path):
    """Settings for tests: demo mode, no rate limiting, audit log under tmp_path."""

    def _make(**overrides) -> Settings:
        values = dict(
            app_env="test",
            database_url="",
            jwt_secret="",
            audit_log_path=str(audit_path),
            rate_limit_enabled=False,
            serve_frontend=False,
        )
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture()
def make_container():
    def _make(settings: Settings, engine=None) -> Container:
        container = Container()
        container.settings.override(settings)
        if engine is not None:
            container.engine.override(engine)
        return container

    return _make


@pytest.fixture()
def make_client():
    @asynccontextmanager
    async def _make(container: Container):
        app = create_app(container)
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

    return _make


@pytest.fixture()
def demo_container(make_settings, make_container) -> Container:
    return make_container(make_settings())


@pytest.fixture()
def durable_container(make_settings, make_container, engine) -> Container:
    settings = make_settings(database_url="sqlite+aiosqlite:///:memory:", jwt_secret=TEST_SECRET)
    return make_container(settings, engine=engine)


@pytest.fixture()
async def demo_client(demo_container, make_client):
    async with make_client(demo_container) as ac:
        yield ac


@pytest.fixture()
async def durable_client(durable_container, make_client):
    async with make_client(durable_container) as ac:
        yield ac
