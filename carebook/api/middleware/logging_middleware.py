"""
Request logging middleware for FastAPI application.
"""

import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from carebook.core.shared import get_logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with its method, path, status and duration.

    Reuses the caller's X-Correlation-ID or mints one, exposes it on
    ``request.state.correlation_id`` and echoes it in the response.
    """

    CORRELATION_HEADER = "X-Correlation-ID"
    EXCLUDE_PATHS: tuple[str, ...] = ("/health", "/docs", "/openapi.json", "/favicon.ico")

    def __init__(self, app, logger_name: str = "carebook.http") -> None:
        super().__init__(app)
        self._logger_name = logger_name

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        correlation_id = request.headers.get(self.CORRELATION_HEADER) or uuid.uuid4().hex[:12]
        request.state.correlation_id = correlation_id

        if any(request.url.path.startswith(p) for p in self.EXCLUDE_PATHS):
            response = await call_next(request)
            response.headers[self.CORRELATION_HEADER] = correlation_id
            return response

        log = get_logger(self._logger_name, {"correlation_id": correlation_id})
        started = time.perf_counter()
        log.info(f"[{correlation_id}] --> {request.method} {request.url.path}")

        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_ms = (time.perf_counter() - started) * 1000
            log.error(f"[{correlation_id}] <-- {request.method} {request.url.path} failed after {elapsed_ms:.1f}ms: {e}")
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        line = f"[{correlation_id}] <-- {request.method} {request.url.path} {response.status_code} in {elapsed_ms:.1f}ms"
        if response.status_code >= 500:
            log.error(line)
        elif response.status_code >= 400:
            log.warning(line)
        else:
            log.info(line)

        response.headers[self.CORRELATION_HEADER] = correlation_id
        return response

