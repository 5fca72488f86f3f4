"""HTTP middleware: CORS, per-client rate limiting and security headers."""

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from snippet_review.config import Settings

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-XSS-Protection": "0",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}

# Forget idle clients once this many are tracked
_PRUNE_THRESHOLD = 10_000


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request against a client's window."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class FixedWindowRateLimiter:
    """Fixed-window request counter keyed by client.

    Each client gets ``max_requests`` per ``window_seconds``; the window
    starts at the client's first request and resets when it elapses.

    Example:
        >>> limiter = FixedWindowRateLimiter(max_requests=100, window_seconds=900)
        >>> limiter.hit("203.0.113.7").allowed
        True
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}

    def hit(self, key: str) -> RateLimitDecision:
        """Count a request for ``key``.

        Args:
            key: Client identifier (usually the remote IP)

        Returns:
            RateLimitDecision; ``allowed`` is False once the limit is exceeded
        """
        now = self._clock()
        if len(self._windows) > _PRUNE_THRESHOLD:
            self._prune(now)

        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0

        count += 1
        self._windows[key] = (started, count)

        return RateLimitDecision(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_after=max(0.0, started + self.window_seconds - now),
        )

    def reset(self, key: str | None = None) -> None:
        """Forget one client's window, or every window."""
        if key is None:
            self._windows.clear()
        else:
            self._windows.pop(key, None)

    def _prune(self, now: float) -> None:
        expired = [k for k, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            del self._windows[key]


def server_error_response(request: Request, exc: Exception, show_details: bool) -> JSONResponse:
    """Log an unhandled error and build the generic 500 payload.

    Args:
        request: The failing request
        exc: The unhandled exception
        show_details: Put the exception text in "message" (development only)

    Returns:
        JSONResponse with status 500 and the security headers
    """
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Something broke!",
            "message": str(exc) if show_details else "Internal server error",
        },
        headers=SECURITY_HEADERS,
    )


def _rate_limit_headers(decision: RateLimitDecision) -> dict[str, str]:
    return {
        "RateLimit-Limit": str(decision.limit),
        "RateLimit-Remaining": str(decision.remaining),
        "RateLimit-Reset": str(math.ceil(decision.reset_after)),
    }


def install_middleware(app: FastAPI, app_settings: Settings) -> None:
    """Register CORS, rate limiting and security headers on ``app``.

    The limiter is kept on ``app.state.rate_limiter``; it is None when
    RATE_LIMIT_MAX_REQUESTS is 0.

    Args:
        app: The FastAPI application
        app_settings: Settings providing the CORS origin and rate limits
    """
    limiter = None
    if app_settings.rate_limit_max_requests:
        limiter = FixedWindowRateLimiter(
            max_requests=app_settings.rate_limit_max_requests,
            window_seconds=app_settings.rate_limit_window_seconds,
        )
    app.state.rate_limiter = limiter

    # Registered innermost first: rate limit, then security headers, then CORS
    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        limiter = request.app.state.rate_limiter
        if limiter is None:
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        decision = limiter.hit(client)
        headers = _rate_limit_headers(decision)

        if not decision.allowed:
            logger.warning("Rate limit exceeded for %s", client)
            headers["Retry-After"] = headers["RateLimit-Reset"]
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": RATE_LIMIT_MESSAGE},
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        # Build the 500 here so it still passes through CORS
        try:
            response = await call_next(request)
        except Exception as exc:
            response = server_error_response(request, exc, app_settings.is_development)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=[app_settings.frontend_url],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
