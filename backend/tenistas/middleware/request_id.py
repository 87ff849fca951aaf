"""
Tenistas API — Request ID Middleware
======================================

What:  Assigns a correlation id to every request, echoes it back in the
       X-Request-ID header and stamps it on every error body.
Why:   Ties together the access log line, any error log lines and the
       request_id a client quotes when reporting a failed racket call.
How:   A client-sent X-Request-ID is reused when it looks like an id
       (short, no whitespace or control characters); otherwise a new one
       is generated. The id lives in a ContextVar, so the catch-all error
       handler outside the middleware still sees it.

Error body shape (built by error_body()):
    {"error": code, "message": str, "details": {...}, "request_id": str}
"""

import re
import uuid
from contextvars import ContextVar
from typing import Any, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Client ids end up in log lines; anything else is replaced
_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def current_request_id() -> str:
    """Id of the request being handled, or "" outside a request."""
    return request_id_var.get()


def error_body(
    error: str, message: str, details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """JSON body for an error response, carrying the current request id."""
    body: Dict[str, Any] = {"error": error, "message": message}
    if details is not None:
        body["details"] = details
    body["request_id"] = current_request_id()
    return body


def _resolve_request_id(request: Request) -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _CLIENT_ID_PATTERN.fullmatch(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Resolves the id, publishes it in request_id_var and request.state."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = _resolve_request_id(request)
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
