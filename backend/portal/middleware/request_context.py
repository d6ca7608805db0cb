"""
Institute Portal Backend: Request Context Middleware
=====================================================

What:  Assigns each request an ID and a locale and makes both available to
       every log record emitted while the request is handled.
How:   Values live in ContextVars (coroutine-local, so concurrent requests on
       one event loop never see each other's values). `RequestContextFilter`
       copies them onto log records for the format string.

Request ID:
    Taken from the client's X-Request-ID header when present, otherwise a
    short random id. Echoed back in the X-Request-ID response header and in
    every error body.

Locale:
    Same resolution as the route dependencies (`?lang=`, Accept-Language,
    default). Echoed back as Content-Language.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from portal.i18n import locale_var, resolve_locale

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Populates request_id_var and locale_var for the current request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        locale = resolve_locale(
            request.query_params.get("lang"),
            request.headers.get("accept-language"),
        )

        request_id_var.set(rid)
        locale_var.set(locale)
        request.state.request_id = rid
        request.state.locale = locale

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid
        response.headers["Content-Language"] = locale
        return response


class RequestContextFilter(logging.Filter):
    """Stamps log records with the current request id and locale ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        record.locale = locale_var.get() or "-"
        return True
