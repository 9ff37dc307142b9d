"""
Middleware Package
"""
from fastapi import FastAPI
import logging

from config.settings import settings
from middleware.cors import setup_cors
from middleware.error_handler import register_exception_handlers
from middleware.logging_middleware import AccessLogMiddleware, LoggingMiddleware
from middleware.rate_limiter import RateLimitMiddleware

logger = logging.getLogger(__name__)


def setup_middleware(app: FastAPI) -> None:
    """
    Install middleware and exception handlers

    Starlette runs the last added middleware first, so request logging is
    added last: it assigns the request ID that rate limit and error
    responses report.

    Args:
        app: FastAPI application instance
    """
    setup_cors(app)

    if settings.is_production():
        app.add_middleware(AccessLogMiddleware)

    if settings.enable_rate_limiting:
        app.add_middleware(RateLimitMiddleware)
        logger.info(
            f"✅ Rate limiting enabled ({settings.rate_limit_requests_per_minute}/min, "
            f"{settings.rate_limit_generations_per_minute}/min for generation)"
        )

    if settings.enable_request_logging:
        app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    logger.info("✅ Middleware configured")


__all__ = [
    "setup_middleware",
    "setup_cors",
    "RateLimitMiddleware",
    "LoggingMiddleware",
    "AccessLogMiddleware",
    "register_exception_handlers"
]
