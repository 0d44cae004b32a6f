"""
Request Tracing Middleware for FastAPI.

Times every request, tags it with a request ID, and reports it through
:func:`legal_aid.core.monitoring.log_api_request` (Logfire when enabled,
stdlib logging otherwise). Slow and failed requests are logged at warning and
error level.
"""

import time
import uuid
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from legal_aid.core.logging_config import get_logger
from legal_aid.core.monitoring import log_api_request

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SLOW_REQUEST_MS = 1000


class LogfireMiddleware(BaseHTTPMiddleware):
    """Middleware for tracing API requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process the request and log metrics.

        Args:
            request: The incoming HTTP request
            call_next: The next middleware/handler

        Returns:
            The HTTP response
        """
        start_time = time.time()
        method = request.method
        path = request.url.path
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

        request.state.start_time = start_time
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"API request failed: {method} {path}",
                exc_info=True,
                extra={
                    "request_id": request_id,
                    "method": method,
                    "path": path,
                    "duration_ms": duration_ms,
                    "error": str(e),
                },
            )
            log_api_request(method=method, path=path, status_code=500, duration_ms=duration_ms)
            raise

        duration_ms = (time.time() - start_time) * 1000
        log_api_request(method=method, path=path, status_code=response.status_code, duration_ms=duration_ms)

        response.headers["X-Process-Time"] = f"{duration_ms:.2f}"
        response.headers[REQUEST_ID_HEADER] = request_id

        if duration_ms > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow API request: {method} {path} took {duration_ms:.2f}ms",
                extra={
                    "request_id": request_id,
                    "method": method,
                    "path": path,
                    "duration_ms": duration_ms,
                    "status_code": response.status_code,
                },
            )
        return response
