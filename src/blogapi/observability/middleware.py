"""
blogapi.observability.middleware

Per-request log context for the blog API.

Responsibilities:
- Accept the caller's `x-request-id` or mint one, and echo it on the response.
- Bind request id, route and the caller's `grpc-timeout` into structlog contextvars
  for the duration of the handler.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        context = {
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
        }
        if "grpc-timeout" in request.headers:
            context["grpc_timeout"] = request.headers["grpc-timeout"]
        structlog.contextvars.bind_contextvars(**context)
        try:
            response: Response = await call_next(request)
        finally:
            # The context ends with the handler. A streamed body (ListBlogs) keeps
            # running after this point and must carry its own request id.
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response
