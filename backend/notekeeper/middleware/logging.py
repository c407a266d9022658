"""
Notekeeper Backend: Request Logging Middleware
================================================

What:  One access-log line per HTTP request.
How:   Measures duration around the downstream app and logs method, route,
       status, duration and request ID.

The route is logged as its template (`/api/notes/{note_id}`), not the raw
path, so lines for the same endpoint group together whatever id was asked
for. Requests that matched no route fall back to the raw path.

Log level by status class:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request and response bodies are never logged: note content is user data.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notekeeper.middleware.request_id import request_id_var

logger = logging.getLogger("notekeeper.access")

# Probes and docs assets; they would drown out the note traffic
QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


def route_label(request: Request) -> str:
    """The matched route's path template, or the raw path when nothing matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        rid = request_id_var.get("")

        try:
            response = await call_next(request)
        except Exception:
            # Nothing downstream answered; the server will send a bare 500
            logger.error(
                "%s %s failed after %.1fms [%s]",
                request.method,
                route_label(request),
                (time.perf_counter() - start_time) * 1000,
                rid,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        label = route_label(request)

        logger.log(
            level_for(status),
            "%s %s %d %.1fms [%s]",
            request.method,
            label,
            status,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": label,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )

        return response
