import secrets
from datetime import timedelta

from pydantic_settings import BaseSettings, SettingsConfigDict

from isdapresyo.domain.enums import StoreMode
from isdapresyo.domain.errors import ConfigurationError


class Settings(BaseSettings):
    app_env: str = "development"
    database_url: str = ""
    jwt_secret: str = ""
    jwt_ttl_hours: float = 8
    demo_admin_user: str = "admin"
    demo_admin_pass: str = "admin123"
    frontend_origin: str = ""
    serve_frontend: bool = True
    frontend_dir: str = "frontend"
    admin_path: str = "/admin"
    audit_log_path: str = "logs/audit.log"
    cache_ttl_seconds: float = 60
    rate_limit_enabled: bool = True
    rate_limit_window_seconds: float = 15 * 60
    rate_limit_max: int = 200
    login_rate_limit_max: int = 20
    enforce_https: bool = False
    debug: bool = False

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def demo_mode(self) -> bool:
        """No durable backend outside production: in-memory store + demo login."""
        return not self.is_production and not self.database_url

    @property
    def backend(self) -> str:
        return StoreMode.FALLBACK.value if self.demo_mode else StoreMode.DURABLE.value

    @property
    def read_cache_enabled(self) -> bool:
        return not self.demo_mode

    @property
    def jwt_ttl(self) -> timedelta:
        return timedelta(hours=self.jwt_ttl_hours)

    @property
    def async_database_url(self) -> str:
        """DATABASE_URL rewritten for the asyncpg driver (postgres:// and postgresql:// forms)."""
        url = self.database_url
        for prefix in ("postgres://", "postgresql://"):
            if url.startswith(prefix):
                return "postgresql+asyncpg://" + url[len(prefix):]
        return url

    def check_required(self) -> None:
        """Fail loudly when production is missing its durable backend or signing secret."""
        if not self.is_production:
            return
        missing = []
        if not self.database_url:
            missing.append("DATABASE_URL")
        if not self.jwt_secret:
            missing.append("JWT_SECRET")
        if missing:
            raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")


def resolve_signing_secret(settings: Settings) -> str:
    """Operator secret, or a per-process random one in demo mode (tokens die with the process)."""
    if settings.jwt_secret:
        return settings.jwt_secret
    if settings.demo_mode:
        return secrets.token_hex(32)
    raise ConfigurationError("JWT_SECRET is required when a database backend is configured")


settings = Settings()
