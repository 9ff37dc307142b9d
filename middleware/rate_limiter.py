"""
Rate Limiting Middleware
"""
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Dict, Tuple
import time
import logging
from collections import defaultdict
import asyncio

from config.settings import settings
from core.exceptions import RateLimitExceeded

logger = logging.getLogger(__name__)


class RateLimiter:
    """In-memory rate limiter with sliding window"""

    def __init__(self, clock=time.time):
        # Store request timestamps for each client
        self.requests: Dict[str, list] = defaultdict(list)
        self.lock = asyncio.Lock()
        self.clock = clock
        self.cleanup_interval = 300  # 5 minutes
        self._last_cleanup = clock()

    def _cleanup_old_entries(self, current_time: float):
        """Drop clients with no requests in the last hour"""
        stale = [
            client_id for client_id, timestamps in self.requests.items()
            if not timestamps or current_time - max(timestamps) >= 3600
        ]
        for client_id in stale:
            del self.requests[client_id]

        if stale:
            logger.info(f"Cleaned up {len(stale)} inactive clients")
        self._last_cleanup = current_time

    async def is_allowed(
        self,
        client_id: str,
        limit: int = 60,
        window: int = 60
    ) -> Tuple[bool, Dict]:
        """Check if request is allowed

        Args:
            client_id: Client identifier
            limit: Maximum requests allowed
            window: Time window in seconds

        Returns:
            Tuple of (is_allowed, metadata)
        """
        async with self.lock:
            current_time = self.clock()

            if current_time - self._last_cleanup >= self.cleanup_interval:
                self._cleanup_old_entries(current_time)

            window_start = current_time - window

            # Remove old timestamps outside window
            timestamps = [ts for ts in self.requests[client_id] if ts > window_start]
            self.requests[client_id] = timestamps

            if len(timestamps) >= limit:
                oldest_request = min(timestamps)
                retry_after = int(oldest_request + window - current_time)

                return False, {
                    "limit": limit,
                    "remaining": 0,
                    "reset": int(oldest_request + window),
                    "retry_after": max(1, retry_after)
                }

            timestamps.append(current_time)

            return True, {
                "limit": limit,
                "remaining": limit - len(timestamps),
                "reset": int(min(timestamps) + window)
            }


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rate limiting middleware"""

    def __init__(self, app, limiter: RateLimiter = None):
        super().__init__(app)
        self.limiter = limiter or RateLimiter()

        # Configure limits
        self.limits = {
            "default": {
                "requests": settings.rate_limit_requests_per_minute,
                "window": 60
            },
            "generation": {
                "requests": settings.rate_limit_generations_per_minute,
                "window": 60
            }
        }

    async def dispatch(self, request: Request, call_next):
        """Process request with rate limiting"""

        # Skip rate limiting for health endpoints
        if request.url.path.startswith("/api/health"):
            return await call_next(request)

        client_id = self._get_client_id(request)
        limit_type = self._get_limit_type(request.url.path)
        limit_config = self.limits.get(limit_type, self.limits["default"])

        is_allowed, metadata = await self.limiter.is_allowed(
            f"{limit_type}:{client_id}",
            limit_config["requests"],
            limit_config["window"]
        )

        if not is_allowed:
            logger.warning(f"🚦 Rate limit hit for {client_id} on {request.url.path}")
            exc = RateLimitExceeded(
                "Too many requests. Please retry after some time.",
                retry_after=metadata["retry_after"]
            )
            return JSONResponse(
                content={
                    "error": {
                        "type": exc.error_code,
                        "message": exc.message,
                        "request_id": getattr(request.state, "request_id", "unknown"),
                        "details": exc.details
                    }
                },
                status_code=exc.status_code,
                headers={
                    "X-RateLimit-Limit": str(metadata["limit"]),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(metadata["reset"]),
                    "Retry-After": str(metadata["retry_after"])
                }
            )

        response = await call_next(request)

        # Add rate limit headers
        response.headers["X-RateLimit-Limit"] = str(metadata["limit"])
        response.headers["X-RateLimit-Remaining"] = str(metadata["remaining"])
        response.headers["X-RateLimit-Reset"] = str(metadata["reset"])

        return response

    def _get_client_id(self, request: Request) -> str:
        """Client identifier: forwarded address, then peer address"""
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return f"ip_{forwarded.split(',')[0].strip()}"

        if request.client:
            return f"ip_{request.client.host}"

        return "anonymous"

    def _get_limit_type(self, path: str) -> str:
        if path.startswith("/api/domains/generate"):
            return "generation"
        return "default"
