"""
Logging and rate limiting tests
"""
import asyncio
import json
import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from config.logging_config import JSONFormatter, LogContext, log_metric
from middleware.cors import get_allowed_origins
from middleware.error_handler import register_exception_handlers
from middleware.rate_limiter import RateLimiter, RateLimitMiddleware


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


class TestStructuredLogging:
    """Tests for the JSON formatter and log context"""

    def _record(self, message="hello", **kwargs):
        logger = logging.getLogger("tests.logging")
        return logger.makeRecord(logger.name, logging.INFO, __file__, 1, message, (), None, **kwargs)

    def test_json_fields(self):
        """Test the basic JSON layout"""
        payload = json.loads(JSONFormatter().format(self._record("checked acme.com")))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "tests.logging"
        assert payload["message"] == "checked acme.com"

    def test_log_context_fields(self):
        """Test that request-scoped context reaches the output"""
        with LogContext(request_id="req-1", domain="acme.com"):
            record = self._record()

        payload = json.loads(JSONFormatter().format(record))

        assert payload["request_id"] == "req-1"
        assert payload["domain"] == "acme.com"

    def test_context_is_removed_on_exit(self):
        """Test that context fields are dropped on exit"""
        with LogContext(request_id="req-1"):
            pass

        assert not hasattr(self._record(), "request_id")

    def test_nested_context_adds_fields(self):
        """Test that an inner context extends and then restores the outer one"""
        with LogContext(request_id="req-1"):
            with LogContext(domain="acme.com"):
                inner = self._record()
            outer = self._record()

        assert inner.request_id == "req-1"
        assert inner.domain == "acme.com"
        assert outer.request_id == "req-1"
        assert not hasattr(outer, "domain")

    @pytest.mark.asyncio
    async def test_concurrent_contexts_stay_separate(self):
        """Test that interleaved requests do not see each other's fields"""
        seen = {}

        async def handle(query):
            with LogContext(query=query):
                await asyncio.sleep(0)
                seen[query] = self._record().query

        await asyncio.gather(handle("coffee"), handle("tech"))

        assert seen == {"coffee": "coffee", "tech": "tech"}
        assert not hasattr(self._record(), "query")

    def test_metric_fields(self, caplog):
        """Test that metrics carry structured fields"""
        logger = logging.getLogger("tests.metrics")

        with caplog.at_level(logging.INFO, logger="tests.metrics"):
            log_metric(logger, "pairs_resolved", 12, {"extension": ".com"})

        record = caplog.records[-1]
        assert record.extra_fields["metric"] == "pairs_resolved"
        assert record.extra_fields["value"] == 12

        payload = json.loads(JSONFormatter().format(record))
        assert payload["tags"] == {"extension": ".com"}
        assert payload["type"] == "metric"


class TestRateLimiter:
    """Tests for the sliding window limiter"""

    @pytest.mark.asyncio
    async def test_limit_and_retry_after(self):
        """Test the request that crosses the limit"""
        clock = FakeClock()
        limiter = RateLimiter(clock=clock)

        assert (await limiter.is_allowed("ip_1", limit=2, window=60))[0]
        allowed, meta = await limiter.is_allowed("ip_1", limit=2, window=60)
        assert allowed and meta["remaining"] == 0

        clock.now += 15
        allowed, meta = await limiter.is_allowed("ip_1", limit=2, window=60)
        assert not allowed
        assert meta["retry_after"] == 45

    @pytest.mark.asyncio
    async def test_window_slides(self):
        """Test that old requests expire"""
        clock = FakeClock()
        limiter = RateLimiter(clock=clock)

        await limiter.is_allowed("ip_1", limit=1, window=60)
        clock.now += 61

        assert (await limiter.is_allowed("ip_1", limit=1, window=60))[0]

    @pytest.mark.asyncio
    async def test_clients_are_separate(self):
        """Test per-client buckets"""
        limiter = RateLimiter(clock=FakeClock())

        await limiter.is_allowed("ip_1", limit=1)
        assert (await limiter.is_allowed("ip_2", limit=1))[0]

    @pytest.mark.asyncio
    async def test_inactive_clients_cleaned_up(self):
        """Test lazy cleanup of idle clients"""
        clock = FakeClock()
        limiter = RateLimiter(clock=clock)

        await limiter.is_allowed("ip_old", limit=5)
        clock.now += 3600
        await limiter.is_allowed("ip_new", limit=5)

        assert "ip_old" not in limiter.requests
        assert "ip_new" in limiter.requests

    def test_middleware_returns_429(self):
        """Test the 429 envelope and headers"""
        app = FastAPI()

        @app.get("/api/domains/search")
        async def search():
            return {"ok": True}

        @app.get("/api/health/live")
        async def live():
            return {"status": "alive"}

        app.add_middleware(RateLimitMiddleware, limiter=RateLimiter(clock=FakeClock()))
        register_exception_handlers(app)
        client = TestClient(app)

        middleware_limit = 60
        for _ in range(middleware_limit):
            client.get("/api/domains/search")

        response = client.get("/api/domains/search")
        assert response.status_code == 429
        assert response.json()["error"]["type"] == "rate_limit_exceeded"
        assert response.headers["Retry-After"] == "60"

        # Health checks are never limited
        assert client.get("/api/health/live").status_code == 200


class TestCors:
    """Tests for allowed origin resolution"""

    def test_origins_are_unique(self):
        """Test that the frontend URL is not listed twice"""
        origins = get_allowed_origins()

        assert "http://localhost:5173" in origins
        assert len(origins) == len(set(origins))
