"""
tests.conftest

Shared fixtures.

Responsibilities:
- Settings pointed at a throwaway sqlite file.
- An in-memory BlogGateway double for service and API tests.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from blogapi.db.models import new_storage_key
from blogapi.db.repositories.blogs import SqlBlogGateway
from blogapi.domain import identifiers
from blogapi.domain.errors import NotFound, StorageError
from blogapi.domain.models import Blog, DeleteOutcome, UpdateOutcome
from blogapi.settings import Settings


class InMemoryBlogGateway:
    """
    Dict-backed gateway. `delay` slows every call; `fail_list_after` makes list()
    raise StorageError after that many items.
    """

    endpoint = "memory://blogs"

    def __init__(self) -> None:
        self.docs: dict[bytes, Blog] = {}
        self.connected = False
        self.delay = 0.0
        self.fail_list_after: int | None = None
        self.fail_writes = False

    async def _io(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    async def ping(self) -> None:
        if not self.connected:
            raise StorageError("not connected")

    async def create(self, blog: Blog) -> Blog:
        await self._io()
        if self.fail_writes:
            raise StorageError("disk on fire at 10.0.0.7")
        key = new_storage_key()
        created = blog.with_id(identifiers.encode(key))
        self.docs[key] = created
        return created

    async def read(self, identifier: str) -> Blog:
        key = identifiers.decode(identifier)
        await self._io()
        if key not in self.docs:
            raise NotFound(identifier)
        return self.docs[key]

    async def update(self, blog: Blog) -> UpdateOutcome:
        key = identifiers.decode(blog.id)
        await self._io()
        if key not in self.docs:
            raise NotFound(blog.id)
        self.docs[key] = blog
        return UpdateOutcome.UPDATED

    async def delete(self, identifier: str) -> DeleteOutcome:
        key = identifiers.decode(identifier)
        await self._io()
        if self.fail_writes:
            raise StorageError("disk on fire at 10.0.0.7")
        if self.docs.pop(key, None) is None:
            return DeleteOutcome.NOT_DELETED
        return DeleteOutcome.DELETED

    async def list(self) -> AsyncIterator[Blog]:
        for n, blog in enumerate(list(self.docs.values())):
            if self.fail_list_after is not None and n >= self.fail_list_after:
                raise StorageError("cursor died")
            await self._io()
            yield blog


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'blogs.db'}",
        log_json=False,
    )


@pytest.fixture
def memory_gateway() -> InMemoryBlogGateway:
    return InMemoryBlogGateway()


@pytest_asyncio.fixture
async def sql_gateway(settings: Settings) -> AsyncIterator[SqlBlogGateway]:
    gateway = SqlBlogGateway(settings)
    await gateway.connect()
    try:
        yield gateway
    finally:
        await gateway.disconnect()
