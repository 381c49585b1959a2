import logging
import traceback
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.requests import Request
from starlette.responses import JSONResponse

from isdapresyo.api.admin import router as admin_router
from isdapresyo.api.fish_prices import router as fish_prices_router
from isdapresyo.api.middleware import FixedWindowCounter, ForwardedHTTPSRedirectMiddleware, RateLimitMiddleware
from isdapresyo.api.schemas.admin import HealthResponse
from isdapresyo.config import Settings
from isdapresyo.container import Container
from isdapresyo.domain.errors import AccessDenied, RecordNotFound, ValidationFailed
from isdapresyo.validation import collect_errors

logger = logging.getLogger("isdapresyo.api")


def create_app(container: Optional[Container] = None) -> FastAPI:
    container = container or Container()
    settings = container.settings()
    settings.check_required()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _log_startup(settings)
        yield
        if not settings.demo_mode:
            await container.engine().dispose()

    app = FastAPI(title="IsdaPresyo", version="0.1.0", lifespan=lifespan)
    app.state.container = container

    _register_exception_handlers(app)
    _add_middleware(app, settings)

    app.include_router(fish_prices_router)
    app.include_router(admin_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(ok=True, demo_mode=settings.demo_mode)

    _mount_frontend(app, settings)
    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AccessDenied)
    async def access_denied_handler(request: Request, exc: AccessDenied):
        # Same body for every cause; details only go to the audit log.
        return JSONResponse(status_code=403, content={"message": "Access denied"})

    @app.exception_handler(RecordNotFound)
    async def not_found_handler(request: Request, exc: RecordNotFound):
        return JSONResponse(status_code=404, content={"message": "Not found"})

    @app.exception_handler(ValidationFailed)
    async def validation_failed_handler(request: Request, exc: ValidationFailed):
        return JSONResponse(status_code=400, content={"message": "Validation failed", "errors": exc.errors})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Validation failed", "errors": collect_errors(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
        logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
        return JSONResponse(status_code=500, content={"message": "Server error"})


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    if settings.rate_limit_enabled:
        window = settings.rate_limit_window_seconds
        app.add_middleware(
            RateLimitMiddleware,
            rules=[
                ("/api/admin/login", FixedWindowCounter(settings.login_rate_limit_max, window)),
                ("/api", FixedWindowCounter(settings.rate_limit_max, window)),
            ],
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin] if settings.frontend_origin else ["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.enforce_https and settings.is_production:
        app.add_middleware(ForwardedHTTPSRedirectMiddleware)


def _mount_frontend(app: FastAPI, settings: Settings) -> None:
    root = Path(settings.frontend_dir)
    if not settings.serve_frontend or not root.is_dir():
        return

    @app.get(settings.admin_path, include_in_schema=False)
    async def admin_page() -> FileResponse:
        return FileResponse(root / "admin" / "index.html")

    @app.get("/", include_in_schema=False)
    async def index_page() -> FileResponse:
        return FileResponse(root / "index.html")

    app.mount("/", StaticFiles(directory=root), name="frontend")


def _log_startup(settings: Settings) -> None:
    if settings.demo_mode:
        logger.warning("DEMO MODE: DATABASE_URL is not set. Using in-memory data (non-production only).")
        logger.warning("DEMO MODE: admin login uses DEMO_ADMIN_USER/DEMO_ADMIN_PASS.")
    elif not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set. Admin login will fail until configured.")


app = create_app()
