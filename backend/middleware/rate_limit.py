"""Rate limiting middleware for FastAPI.

Guards the endpoints that spend model tokens or parse uploads.
Each client IP gets an in-memory sliding window log of request times,
checked against a burst, a per-minute and a per-hour ceiling.
"""

import logging
import time
from collections import defaultdict, deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from config import get_settings
from responses import ResponseCode, error_dict, get_http_status

logger = logging.getLogger(__name__)

BURST_WINDOW_SECONDS = 10
HISTORY_SECONDS = 3600


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting."""

    enabled: bool = True
    requests_per_minute: int = 20
    requests_per_hour: int = 200
    burst_limit: int = 5

    @classmethod
    def from_settings(cls) -> "RateLimitConfig":
        settings = get_settings()
        return cls(
            enabled=settings.rate_limit_enabled,
            requests_per_minute=settings.rate_limit_per_minute,
            requests_per_hour=settings.rate_limit_per_hour,
            burst_limit=settings.rate_limit_burst,
        )


class Window(NamedTuple):
    seconds: int
    limit: int
    message: str


class RateLimiter:
    """Sliding window rate limiter keyed by client id."""

    def __init__(self, config: RateLimitConfig | None = None) -> None:
        self.config = config or RateLimitConfig()
        self._history: dict[str, deque[float]] = defaultdict(deque)
        # Checked in order; the first exhausted window rejects the request
        self.windows = (
            Window(
                BURST_WINDOW_SECONDS,
                self.config.burst_limit,
                "Too many requests. Please slow down.",
            ),
            Window(
                60,
                self.config.requests_per_minute,
                "Rate limit exceeded. Please wait a moment.",
            ),
            Window(
                HISTORY_SECONDS,
                self.config.requests_per_hour,
                "Hourly rate limit exceeded.",
            ),
        )

    def get_client_id(self, request: Request) -> str:
        """Identify the caller by forwarded or direct IP."""
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return f"ip:{forwarded.split(',')[0].strip()}"
        if request.client:
            return f"ip:{request.client.host}"
        return "unknown"

    def _prune(self, client_id: str, now: float) -> deque[float]:
        history = self._history[client_id]
        while history and history[0] <= now - HISTORY_SECONDS:
            history.popleft()
        return history

    def check(
        self, client_id: str, now: float | None = None
    ) -> tuple[bool, str | None, dict[str, str]]:
        """Check a client against every window and record the request if allowed.

        Returns:
            Tuple of (allowed, error_message, headers).
        """
        now = time.time() if now is None else now
        history = self._prune(client_id, now)

        counts = {}
        for window in self.windows:
            used = sum(1 for ts in history if ts > now - window.seconds)
            if used >= window.limit:
                return (
                    False,
                    window.message,
                    {
                        "X-RateLimit-Limit": str(window.limit),
                        "X-RateLimit-Remaining": "0",
                        "Retry-After": str(window.seconds),
                    },
                )
            counts[window.seconds] = used

        history.append(now)
        remaining = self.config.requests_per_minute - counts[60] - 1
        return (
            True,
            None,
            {
                "X-RateLimit-Limit": str(self.config.requests_per_minute),
                "X-RateLimit-Remaining": str(remaining),
            },
        )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Applies the limiter to model-backed and upload paths only."""

    RATE_LIMITED_PATHS = frozenset({"/api/generate", "/api/chat", "/api/upload"})

    def __init__(self, app, config: RateLimitConfig | None = None) -> None:
        super().__init__(app)
        self.limiter = RateLimiter(config or RateLimitConfig.from_settings())

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        limited = request.url.path in self.RATE_LIMITED_PATHS
        if not (self.limiter.config.enabled and limited):
            return await call_next(request)

        client_id = self.limiter.get_client_id(request)
        allowed, message, headers = self.limiter.check(client_id)

        if allowed:
            response = await call_next(request)
        else:
            logger.warning(
                "Rate limit exceeded for %s on %s", client_id, request.url.path
            )
            response = JSONResponse(
                status_code=get_http_status(ResponseCode.RATE_LIMITED),
                content=error_dict(
                    ResponseCode.RATE_LIMITED,
                    message,
                    request_id=getattr(request.state, "request_id", None),
                ),
            )

        response.headers.update(headers)
        return response
