"""
VSRAdmin Backend - Access Log Middleware
=========================================

What:  One log line per request: method, path, status, duration, client.
Who:   Sits inside RequestIDMiddleware (so the line carries the request id)
       and outside the error translator (so translated 500s are logged too).

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

What we log vs what we DON'T log:
    Log:        method, path, status, duration, client IP, request id
    Don't log:  request bodies (passwords, customer data), query strings, file contents
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from vsradmin.middleware.request_id import request_id_var

logger = logging.getLogger("vsradmin.access")

# Polled every few seconds by orchestrators; logging them drowns real traffic
QUIET_PATHS = {"/", "/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Interceptor contract: pass-through; observes the response only."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
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

        logger.log(
            log_level,
            "%s %s %d %.1fms from %s",
            request.method,
            path,
            status,
            duration_ms,
            client_ip,
            extra={
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "rid": request_id_var.get(""),
            },
        )
        return response
