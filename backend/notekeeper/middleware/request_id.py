"""
Notekeeper Backend: Request ID Middleware
===========================================

What:  Assigns a short correlation ID to each request and echoes it back.
How:   Accepts the client's X-Request-ID when it is a plain token, otherwise
       generates one; binds it to a ContextVar for the duration of the
       request and sets it on the response.
Who:   Read by the logging middleware and by the exception handlers,
       which prefix every error log line with it.

Accepted client IDs:
    1 to 64 characters from [A-Za-z0-9._-]. Anything else (spaces, CR/LF,
    quotes) is replaced, so a header value can never forge extra log lines.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(header_value: Optional[str]) -> str:
    """Client-supplied ID if it is a safe token, a fresh one otherwise."""
    if header_value and _CLIENT_ID.fullmatch(header_value):
        return header_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid

        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
