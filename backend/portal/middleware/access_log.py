"""
Institute Portal Backend: Access Log Middleware
================================================

What:  One log line per HTTP request with method, path, status and duration.
       RequestContextFilter adds the request id and locale to the record.
Who:   Logs to the `portal.access` logger so deployments can route access
       logs separately from application logs.

Levels follow the status code: 5xx → ERROR, 4xx → WARNING, else INFO.
Health probes are not logged. Request bodies are never logged: admin
payloads carry staff contact details.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("portal.access")

_SILENT_PATHS = frozenset({"/health"})


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Times each request and logs its outcome."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in _SILENT_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
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
            },
        )
        return response
