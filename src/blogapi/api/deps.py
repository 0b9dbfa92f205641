"""
blogapi.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide the request mapper and gateway stashed on app.state at startup.
- Resolve the caller's deadline from the `grpc-timeout` header.
"""

from __future__ import annotations

from fastapi import Header, Request

from blogapi.domain.gateway import BlogGateway
from blogapi.rpc.status import parse_timeout
from blogapi.services.blog_service import BlogService


def blog_service(request: Request) -> BlogService:
    # Created in the lifespan of `blogapi.api.app.create_app`.
    return request.app.state.blog_service  # type: ignore[attr-defined]


def gateway(request: Request) -> BlogGateway:
    return request.app.state.gateway  # type: ignore[attr-defined]


def deadline(grpc_timeout: str | None = Header(default=None)) -> float | None:
    # None lets BlogService apply the configured default.
    if grpc_timeout is None:
        return None
    return parse_timeout(grpc_timeout)
