"""
Request/Response Logging Middleware
"""
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import time
import json
import logging
import uuid
from typing import Dict
import traceback

from config.logging_config import LogContext, log_metric
from config.settings import settings

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging with a per-request ID
    """

    def __init__(self, app, **kwargs):
        super().__init__(app)

        # Paths to skip detailed logging
        self.skip_paths = [
            "/api/health",
            "/docs",
            "/openapi.json",
            "/favicon.ico"
        ]

        # Sensitive headers to redact
        self.sensitive_headers = [
            "authorization",
            "x-api-key",
            "cookie",
            "set-cookie"
        ]

    async def dispatch(self, request: Request, call_next):
        """Log request and response details"""

        # Reuse the caller's request ID when one is supplied
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        if any(request.url.path.startswith(path) for path in self.skip_paths):
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        start_time = time.time()

        with LogContext(request_id=request_id):
            self._log_request(request, request_id)

            try:
                response = await call_next(request)
            except Exception as e:
                duration = (time.time() - start_time) * 1000
                self._log_error(request, e, duration, request_id)
                raise

            duration = (time.time() - start_time) * 1000
            self._log_response(request, response, duration, request_id)

        response.headers["X-Request-ID"] = request_id
        return response

    def _log_request(self, request: Request, request_id: str):
        """Log incoming request details"""

        client_host = request.client.host if request.client else "unknown"
        headers = self._get_safe_headers(request.headers)

        log_data = {
            "type": "request",
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "query": dict(request.query_params),
            "client_ip": client_host,
            "user_agent": headers.get("user-agent", "unknown")
        }

        if settings.debug:
            logger.info(f"→ Request: {json.dumps(log_data)}")
        else:
            logger.info(
                f"→ {request.method} {request.url.path} "
                f"[{request_id}] from {client_host}"
            )

    def _log_response(
        self,
        request: Request,
        response: Response,
        duration: float,
        request_id: str
    ):
        """Log response details"""

        if response.status_code >= 500:
            log_level = logging.ERROR
        elif response.status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            f"← {response.status_code} {request.method} {request.url.path} "
            f"({duration:.2f}ms) [{request_id}]"
        )

        log_metric(logger, "http_request_duration_ms", round(duration, 2), {
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code
        })

    def _log_error(
        self,
        request: Request,
        error: Exception,
        duration: float,
        request_id: str
    ):
        """Log error details"""

        log_data = {
            "type": "error",
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "duration_ms": round(duration, 2)
        }

        # Add traceback in debug mode
        if settings.debug:
            log_data["traceback"] = traceback.format_exc()

        logger.error(f"✗ Error: {json.dumps(log_data)}")

    def _get_safe_headers(self, headers) -> Dict:
        """Get headers with sensitive data redacted"""
        safe_headers = {}

        for key, value in headers.items():
            if key.lower() in self.sensitive_headers:
                safe_headers[key] = "***REDACTED***"
            else:
                safe_headers[key] = value

        return safe_headers


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Simplified access log middleware (Apache/Nginx style)
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        client_ip = request.client.host if request.client else "-"

        # Common Log Format with extras
        log_line = (
            f'{client_ip} - - '
            f'[{time.strftime("%d/%b/%Y:%H:%M:%S %z")}] '
            f'"{request.method} {request.url.path} HTTP/1.1" '
            f'{response.status_code} - '
            f'"{request.headers.get("referer", "-")}" '
            f'"{request.headers.get("user-agent", "-")}" '
            f'{process_time:.3f}s'
        )

        logging.getLogger("access").info(log_line)

        return response
