"""HTTP Middleware — security headers, per-IP rate limiting, request logging, catch-all 500.

Invariants:
    - Security headers are set on every response, errors included: unhandled
      route errors become a 500 envelope inside CatchAllErrorMiddleware, which
      sits innermost so every other middleware sees a normal response
    - Rate limiting applies only to paths under /api/
    - Limited responses use the standard error envelope with status 429
    - RateLimit-Limit / RateLimit-Remaining / RateLimit-Reset headers on limited paths
"""

import logging
import time
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.api.error_handlers import internal_error_response
from app.core.errors import RateLimitExceededError
from app.core.rate_window import SlidingWindowLimiter

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Content-Security-Policy": (
        "default-src 'self'; frame-ancestors 'self'; object-src 'none'"
    ),
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window limit per client IP on /api/ paths."""

    def __init__(
        self, app, max_requests: int, window_seconds: float,
        path_prefix: str = "/api/",
        limiter: SlidingWindowLimiter | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        if limiter is None:
            limiter = SlidingWindowLimiter(max_requests, window_seconds)
        self.limiter = limiter
        self.path_prefix = path_prefix
        self.clock = clock

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        decision = self.limiter.hit(client_ip, self.clock())
        headers = {
            "RateLimit-Limit": str(decision.limit),
            "RateLimit-Remaining": str(decision.remaining),
            "RateLimit-Reset": str(decision.reset_after_seconds),
        }
        if not decision.allowed:
            exc = RateLimitExceededError(decision.reset_after_seconds)
            logger.warning(
                "Rate limit exceeded",
                extra={"client_ip": client_ip, "path": request.url.path},
            )
            headers["Retry-After"] = str(decision.reset_after_seconds)
            return JSONResponse(
                status_code=exc.http_status,
                content=exc.to_response(),
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.info(
            f"{request.method} {request.url.path} {response.status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response


class CatchAllErrorMiddleware(BaseHTTPMiddleware):
    """Unhandled route exception -> 500 envelope, never leaks internal details."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                f"Unhandled exception on {request.url.path}: {exc}",
                exc_info=True,
            )
            return internal_error_response()
