"""
blogapi.api.routers.blogs

REST surface for the blog RPCs (one route per RPC).

Responsibilities:
- POST/GET/PUT/DELETE `/v1/blogs[/{id}]` for Create/Read/Update/Delete.
- `GET /v1/blogs` streams ListBlogs as newline-delimited JSON.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import aclosing

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from blogapi.api.deps import blog_service, deadline
from blogapi.observability.logging import get_logger
from blogapi.rpc.messages import (
    CreateBlogRequest,
    CreateBlogResponse,
    DeleteBlogRequest,
    DeleteBlogResponse,
    ListBlogsRequest,
    ListBlogsResponse,
    ReadBlogRequest,
    ReadBlogResponse,
    UpdateBlogRequest,
    UpdateBlogResponse,
)
from blogapi.rpc.status import RpcError
from blogapi.services.blog_service import BlogService

log = get_logger(__name__)

router = APIRouter(prefix="/v1/blogs", tags=["blogs"])

NDJSON = "application/x-ndjson"


@router.post("", response_model=CreateBlogResponse)
async def create_blog(
    body: CreateBlogRequest,
    service: BlogService = Depends(blog_service),
    timeout: float | None = Depends(deadline),
) -> CreateBlogResponse:
    return await service.create_blog(body, timeout=timeout)


@router.get("/{id}", response_model=ReadBlogResponse)
async def read_blog(
    id: str,
    service: BlogService = Depends(blog_service),
    timeout: float | None = Depends(deadline),
) -> ReadBlogResponse:
    return await service.read_blog(ReadBlogRequest(id=id), timeout=timeout)


@router.put("/{blog_id}", response_model=UpdateBlogResponse)
async def update_blog(
    blog_id: str,
    body: UpdateBlogRequest,
    service: BlogService = Depends(blog_service),
    timeout: float | None = Depends(deadline),
) -> UpdateBlogResponse:
    # The path names the blog; an id in the body is overridden.
    req = UpdateBlogRequest(blog=body.blog.model_copy(update={"id": blog_id}))
    return await service.update_blog(req, timeout=timeout)


@router.delete("/{id}", response_model=DeleteBlogResponse)
async def delete_blog(
    id: str,
    service: BlogService = Depends(blog_service),
    timeout: float | None = Depends(deadline),
) -> DeleteBlogResponse:
    return await service.delete_blog(DeleteBlogRequest(id=id), timeout=timeout)


@router.get("", response_class=StreamingResponse)
async def list_blogs(
    service: BlogService = Depends(blog_service),
    timeout: float | None = Depends(deadline),
) -> StreamingResponse:
    stream = service.list_blogs(ListBlogsRequest(), timeout=timeout)
    # Pull the first element before committing to a 200: a failure that happens
    # before anything was produced still gets a proper HTTP status.
    try:
        first: ListBlogsResponse | None = await anext(stream)
    except StopAsyncIteration:
        first = None
    # The body streams after the middleware has cleared the log context; carry the
    # request id along explicitly.
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    return StreamingResponse(_ndjson(first, stream, request_id), media_type=NDJSON)


async def _ndjson(
    first: ListBlogsResponse | None,
    rest: AsyncIterator[ListBlogsResponse],
    request_id: str | None,
) -> AsyncIterator[str]:
    if first is None:
        return
    async with aclosing(rest):
        yield _result_line(first)
        try:
            async for item in rest:
                yield _result_line(item)
        except RpcError as e:
            # Headers are already sent; the failure becomes the final line.
            log.warning(
                "list_blogs.stream_aborted", code=e.code.name, request_id=request_id
            )
            yield json.dumps({"error": e.to_dict()}) + "\n"


def _result_line(item: ListBlogsResponse) -> str:
    return json.dumps({"result": item.model_dump(mode="json", by_alias=True)}) + "\n"
