"""
blogapi.clients.http

HTTP client for the blog service.

Responsibilities:
- Call the `/v1/blogs` routes and decode responses into RPC messages.
- Propagate a per-call deadline via the `grpc-timeout` header.
- Rebuild `RpcError` from error bodies, including a failure ending a list stream.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any

import httpx

from blogapi.rpc.messages import (
    Blog,
    CreateBlogRequest,
    CreateBlogResponse,
    DeleteBlogResponse,
    ListBlogsResponse,
    ReadBlogResponse,
    UpdateBlogRequest,
    UpdateBlogResponse,
)
from blogapi.rpc.status import RpcError, StatusCode, format_timeout


class BlogApiClient:
    def __init__(self, *, http: httpx.AsyncClient, timeout: float | None = None) -> None:
        self._http = http
        self._timeout = timeout

    def _headers(self, timeout: float | None) -> dict[str, str]:
        effective = timeout if timeout is not None else self._timeout
        if effective is None:
            return {}
        return {"grpc-timeout": format_timeout(effective)}

    async def create_blog(self, blog: Blog, *, timeout: float | None = None) -> Blog:
        r = await self._http.post(
            "/v1/blogs",
            headers=self._headers(timeout),
            json=CreateBlogRequest(blog=blog).model_dump(mode="json", by_alias=True),
        )
        return CreateBlogResponse.model_validate(_json_or_raise(r)).blog

    async def read_blog(self, id: str, *, timeout: float | None = None) -> ReadBlogResponse:
        r = await self._http.get(f"/v1/blogs/{id}", headers=self._headers(timeout))
        return ReadBlogResponse.model_validate(_json_or_raise(r))

    async def update_blog(self, blog: Blog, *, timeout: float | None = None) -> UpdateBlogResponse:
        r = await self._http.put(
            f"/v1/blogs/{blog.id}",
            headers=self._headers(timeout),
            json=UpdateBlogRequest(blog=blog).model_dump(mode="json", by_alias=True),
        )
        return UpdateBlogResponse.model_validate(_json_or_raise(r))

    async def delete_blog(self, id: str, *, timeout: float | None = None) -> DeleteBlogResponse:
        r = await self._http.delete(f"/v1/blogs/{id}", headers=self._headers(timeout))
        return DeleteBlogResponse.model_validate(_json_or_raise(r))

    async def list_blogs(self, *, timeout: float | None = None) -> AsyncIterator[Blog]:
        async with self._http.stream(
            "GET", "/v1/blogs", headers=self._headers(timeout)
        ) as r:
            if r.is_error:
                await r.aread()
                _json_or_raise(r)
            async for line in r.aiter_lines():
                if not line.strip():
                    continue
                payload = json.loads(line)
                if "error" in payload:
                    raise RpcError.from_dict(payload["error"])
                yield ListBlogsResponse.model_validate(payload["result"]).blog


def _json_or_raise(r: httpx.Response) -> Any:
    if r.is_success:
        return r.json()
    try:
        payload = r.json()
    except ValueError:
        raise RpcError(StatusCode.UNKNOWN, f"HTTP {r.status_code}: {r.text}") from None
    if not isinstance(payload, dict):
        raise RpcError(StatusCode.UNKNOWN, f"HTTP {r.status_code}")
    raise RpcError.from_dict(payload)


# --- Module Notes -----------------------------------------------------------
# Callers own the httpx.AsyncClient (base_url, transport); tests hand in an
# ASGITransport-backed client so no network is involved.
