"""Boundary controls applied before requests reach the routers."""

import math
import threading
import time
from typing import Callable, Sequence

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response


class FixedWindowCounter:
    """Counts hits per key in fixed windows of `window_seconds`."""

    def __init__(self, limit: int, window_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._windows: dict[str, tuple[float, int]] = {}

    def hit(self, key: str) -> tuple[bool, float]:
        """Record one hit. Returns (allowed, seconds until the window resets)."""
        now = self._clock()
        with self._lock:
            started, count = self._windows.get(key, (now, 0))
            if now - started >= self.window_seconds:
                started, count = now, 0
            count += 1
            self._windows[key] = (started, count)
            if len(self._windows) > 10_000:
                self._drop_stale(now)
        return count <= self.limit, max(0.0, started + self.window_seconds - now)

    def _drop_stale(self, now: float) -> None:
        stale = [k for k, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in stale:
            del self._windows[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client-IP limits keyed by path prefix; every matching rule counts the request."""

    def __init__(self, app, rules: Sequence[tuple[str, FixedWindowCounter]]) -> None:
        super().__init__(app)
        self._rules = list(rules)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        ip = request.client.host if request.client else "unknown"
        path = request.url.path
        for prefix, counter in self._rules:
            if not path.startswith(prefix):
                continue
            allowed, reset_in = counter.hit(ip)
            if not allowed:
                return JSONResponse(
                    status_code=429,
                    content={"message": "Too many requests"},
                    headers={"Retry-After": str(math.ceil(reset_in))},
                )
        return await call_next(request)


class ForwardedHTTPSRedirectMiddleware(BaseHTTPMiddleware):
    """Redirect to https when a proxy reports the original request was plain http."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        proto = request.headers.get("x-forwarded-proto")
        if proto and proto != "https":
            url = request.url.replace(scheme="https")
            return RedirectResponse(str(url), status_code=301)
        return await call_next(request)
