"""
Wildtrail Backend: Request ID Middleware
========================================

What:  Assigns each request a correlation ID and echoes it in ``X-Request-ID``.
How:   Reuses the client's ``X-Request-ID`` header when present (the admin
       dashboard sends one per action), otherwise generates a short UUID.
       The ID is stored in a ContextVar for loggers and exception handlers,
       and on ``request.state`` for route handlers.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid

        return response
