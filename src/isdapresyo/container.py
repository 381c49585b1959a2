from dependency_injector import containers, providers

from isdapresyo.auth.credentials import DatabaseCredentialChecker, DemoCredentialChecker
from isdapresyo.auth.tokens import TokenAuthority
from isdapresyo.config import Settings, resolve_signing_secret
from isdapresyo.db.session import build_engine, build_session_factory
from isdapresyo.infra.audit import AuditLog
from isdapresyo.infra.cache.ttl_cache import TTLCache
from isdapresyo.services.fish_price_service import FishPriceService
from isdapresyo.store.memory import MemoryFishPriceStore
from isdapresyo.store.sql import SqlFishPriceStore


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(modules=["isdapresyo.api.deps"])

    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.async_database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    # Backend is a tag ("durable" | "fallback") fixed for the process lifetime.
    store = providers.Selector(
        settings.provided.backend,
        durable=providers.Singleton(SqlFishPriceStore, session_factory=session_factory),
        fallback=providers.Singleton(MemoryFishPriceStore),
    )

    credential_checker = providers.Selector(
        settings.provided.backend,
        durable=providers.Singleton(DatabaseCredentialChecker, session_factory=session_factory),
        fallback=providers.Singleton(
            DemoCredentialChecker,
            username=settings.provided.demo_admin_user,
            password=settings.provided.demo_admin_pass,
        ),
    )

    cache = providers.Singleton(TTLCache)

    fish_price_service = providers.Singleton(
        FishPriceService,
        store=store,
        cache=cache,
        cache_enabled=settings.provided.read_cache_enabled,
        ttl_seconds=settings.provided.cache_ttl_seconds,
    )

    signing_secret = providers.Singleton(resolve_signing_secret, settings=settings)

    token_authority = providers.Singleton(
        TokenAuthority,
        secret=signing_secret,
        ttl=settings.provided.jwt_ttl,
    )

    audit_log = providers.Singleton(AuditLog, path=settings.provided.audit_log_path)
