"""Tests for the rate limiting middleware."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from middleware import RateLimitConfig, RateLimiter, RateLimitMiddleware


def make_app(config: RateLimitConfig) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, config=config)

    @app.post("/api/chat")
    async def chat():
        return {"response": "ok"}

    @app.get("/api/health")
    async def health():
        return {"status": "healthy"}

    return app


class TestRateLimiter:
    """Tests for RateLimiter windows."""

    def test_burst_limit(self):
        limiter = RateLimiter(RateLimitConfig(burst_limit=3, requests_per_minute=100))

        results = [limiter.check("ip:1", now=1000.0 + i)[0] for i in range(4)]

        assert results == [True, True, True, False]

    def test_burst_window_expires(self):
        limiter = RateLimiter(RateLimitConfig(burst_limit=2, requests_per_minute=100))
        limiter.check("ip:1", now=1000.0)
        limiter.check("ip:1", now=1001.0)

        allowed, _, _ = limiter.check("ip:1", now=1012.0)

        assert allowed is True

    def test_minute_limit(self):
        limiter = RateLimiter(RateLimitConfig(burst_limit=100, requests_per_minute=3))
        for i in range(3):
            limiter.check("ip:1", now=1000.0 + i * 11)

        allowed, message, headers = limiter.check("ip:1", now=1040.0)

        assert allowed is False
        assert message == "Rate limit exceeded. Please wait a moment."
        assert headers["Retry-After"] == "60"

    def test_clients_tracked_separately(self):
        limiter = RateLimiter(RateLimitConfig(burst_limit=1))
        limiter.check("ip:1", now=1000.0)

        assert limiter.check("ip:2", now=1000.0)[0] is True
        assert limiter.check("ip:1", now=1000.0)[0] is False

    def test_remaining_header(self):
        limiter = RateLimiter(RateLimitConfig(requests_per_minute=20))

        _, _, headers = limiter.check("ip:1", now=1000.0)

        assert headers["X-RateLimit-Remaining"] == "19"


class TestRateLimitMiddleware:
    """Tests for RateLimitMiddleware."""

    def test_limited_path_returns_429(self):
        client = TestClient(make_app(RateLimitConfig(burst_limit=1)))

        first = client.post("/api/chat")
        second = client.post("/api/chat")

        assert first.status_code == 200
        assert second.status_code == 429
        body = second.json()
        assert body["code"] == "RATE_LIMITED"
        assert body["error"] == "Too many requests. Please slow down."
        assert second.headers["Retry-After"] == "10"

    def test_unlimited_path_passes(self):
        client = TestClient(make_app(RateLimitConfig(burst_limit=1)))

        statuses = [client.get("/api/health").status_code for _ in range(3)]

        assert statuses == [200, 200, 200]

    def test_disabled(self):
        client = TestClient(make_app(RateLimitConfig(enabled=False, burst_limit=1)))

        statuses = [client.post("/api/chat").status_code for _ in range(3)]

        assert statuses == [200, 200, 200]
