"""
blogapi.services.blog_service

Request mapper for the blog RPCs.

Responsibilities:
- Turn protocol requests into persistence gateway calls.
- Bound every call by the caller's deadline.
- Decide the externally visible status for every domain error.
- Drive the ListBlogs stream.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator, Awaitable
from typing import TypeVar

from blogapi.domain.errors import BlogError, InvalidIdentifier, NotFound
from blogapi.domain.gateway import BlogGateway
from blogapi.domain.models import ReadOutcome
from blogapi.observability.logging import get_logger
from blogapi.rpc.messages import (
    Blog,
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
from blogapi.rpc.status import RpcError, StatusCode

log = get_logger(__name__)

T = TypeVar("T")


class BlogService:
    """
    Stateless across calls: the only thing held is the injected gateway.

    `timeout` on each method is the caller's deadline in seconds; `None` falls back
    to `default_timeout` (and `None` there means unbounded).
    """

    def __init__(self, *, gateway: BlogGateway, default_timeout: float | None = None) -> None:
        self._gateway = gateway
        self._default_timeout = default_timeout

    async def create_blog(
        self, req: CreateBlogRequest, *, timeout: float | None = None
    ) -> CreateBlogResponse:
        log.info("create_blog.invoked", author_id=req.blog.author_id, title=req.blog.title)
        try:
            # Any id on the request is dropped; storage assigns one.
            created = await self._bounded(
                self._gateway.create(req.blog.to_domain().with_id("")), timeout
            )
        except BlogError as e:
            raise _internal("create_blog.failed", "Error inserting document", e) from e

        log.info("create_blog.succeeded", id=created.id)
        return CreateBlogResponse(blog=Blog.from_domain(created))

    async def read_blog(
        self, req: ReadBlogRequest, *, timeout: float | None = None
    ) -> ReadBlogResponse:
        log.info("read_blog.invoked", id=req.id)
        try:
            blog = await self._bounded(self._gateway.read(req.id), timeout)
        except InvalidIdentifier as e:
            raise _invalid_id(req.id) from e
        except NotFound as e:
            raise RpcError(StatusCode.NOT_FOUND, f"Blog {req.id} not found") from e
        except BlogError as e:
            raise _internal("read_blog.failed", "Error retrieving document", e) from e

        return ReadBlogResponse(blog=Blog.from_domain(blog), status=ReadOutcome.FOUND)

    async def update_blog(
        self, req: UpdateBlogRequest, *, timeout: float | None = None
    ) -> UpdateBlogResponse:
        log.info("update_blog.invoked", id=req.blog.id)
        try:
            outcome = await self._bounded(self._gateway.update(req.blog.to_domain()), timeout)
        except InvalidIdentifier as e:
            raise _invalid_id(req.blog.id) from e
        except NotFound as e:
            raise RpcError(StatusCode.NOT_FOUND, f"Blog {req.blog.id} not found") from e
        except BlogError as e:
            raise _internal("update_blog.failed", "Error updating document", e) from e

        log.info("update_blog.succeeded", id=req.blog.id, status=outcome.value)
        return UpdateBlogResponse(status=outcome)

    async def delete_blog(
        self, req: DeleteBlogRequest, *, timeout: float | None = None
    ) -> DeleteBlogResponse:
        log.info("delete_blog.invoked", id=req.id)
        try:
            outcome = await self._bounded(self._gateway.delete(req.id), timeout)
        except InvalidIdentifier as e:
            raise _invalid_id(req.id) from e
        except BlogError as e:
            raise _internal("delete_blog.failed", "Error deleting document", e) from e

        # NOT_DELETED is a successful call with a negative result, passed through as-is.
        log.info("delete_blog.succeeded", id=req.id, status=outcome.value)
        return DeleteBlogResponse(status=outcome)

    async def list_blogs(
        self, req: ListBlogsRequest, *, timeout: float | None = None
    ) -> AsyncIterator[ListBlogsResponse]:
        """
        Yields one response per stored blog. The deadline covers the whole stream
        but is only enforced while waiting on storage, never while the consumer
        holds an element.
        """

        log.info("list_blogs.invoked")
        deadline = self._deadline(timeout)
        sent = 0
        async with contextlib.aclosing(self._gateway.list()) as blogs:
            while True:
                try:
                    async with asyncio.timeout_at(deadline):
                        blog = await anext(blogs)
                except StopAsyncIteration:
                    break
                except TimeoutError as e:
                    log.warning("list_blogs.deadline_exceeded", sent=sent)
                    raise _deadline_exceeded() from e
                except BlogError as e:
                    raise _internal("list_blogs.failed", "Error listing documents", e) from e
                yield ListBlogsResponse(blog=Blog.from_domain(blog))
                sent += 1

        log.info("list_blogs.completed", sent=sent)

    def _effective_timeout(self, timeout: float | None) -> float | None:
        return timeout if timeout is not None else self._default_timeout

    def _deadline(self, timeout: float | None) -> float | None:
        effective = self._effective_timeout(timeout)
        if effective is None:
            return None
        return asyncio.get_running_loop().time() + effective

    async def _bounded(self, call: Awaitable[T], timeout: float | None) -> T:
        try:
            async with asyncio.timeout(self._effective_timeout(timeout)):
                return await call
        except TimeoutError as e:
            log.warning("call.deadline_exceeded", timeout=self._effective_timeout(timeout))
            raise _deadline_exceeded() from e


def _invalid_id(identifier: str) -> RpcError:
    return RpcError(StatusCode.INVALID_ARGUMENT, f"Invalid blog id: {identifier!r}")


def _deadline_exceeded() -> RpcError:
    return RpcError(StatusCode.DEADLINE_EXCEEDED, "Deadline exceeded")


def _internal(event: str, message: str, err: BlogError) -> RpcError:
    # Backend detail goes to the log only; callers get the generic message.
    log.error(event, error=str(err), error_type=type(err).__name__, cause=repr(err.__cause__))
    return RpcError(StatusCode.INTERNAL, message)


# --- Module Notes -----------------------------------------------------------
# This is the single place domain errors become status codes; the gateway never
# picks a status and the HTTP layer only renders the one chosen here.
