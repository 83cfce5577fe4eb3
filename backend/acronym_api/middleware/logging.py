"""
Acronym API: Request Logging Middleware
==========================================

What:  One access-log line per request: method, path, status, duration.
Why:   The service's only request log; uvicorn's own access log is muted
       in main.setup_logging().

Log line:
    GET /acronym 200 4.2ms [a1b2c3d4] from 127.0.0.1

Level follows the status: 5xx → ERROR, 4xx → WARNING, else INFO.
Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from acronym_api.middleware.request_id import request_id_var

logger = logging.getLogger("acronym_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each HTTP request once its response is ready."""

    # Health checks every few seconds would drown the log
    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
