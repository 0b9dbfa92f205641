"""
blogapi.domain.gateway

Persistence gateway port.

Responsibilities:
- Define the single path from the service layer to storage.
- Let tests substitute an in-memory store for the SQLAlchemy implementation.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol

from blogapi.domain.models import Blog, DeleteOutcome, UpdateOutcome


class BlogGateway(Protocol):
    """
    Errors: `InvalidIdentifier` for malformed ids, `NotFound` for missing documents,
    `StorageError` for backend faults, `StorageConnectionError` from `connect`.
    """

    @property
    def endpoint(self) -> str: ...

    async def connect(self) -> None: ...

    async def disconnect(self) -> None: ...

    async def ping(self) -> None: ...

    async def create(self, blog: Blog) -> Blog: ...

    async def read(self, identifier: str) -> Blog: ...

    async def update(self, blog: Blog) -> UpdateOutcome: ...

    async def delete(self, identifier: str) -> DeleteOutcome: ...

    def list(self) -> AsyncIterator[Blog]:
        """
        One-shot stream of every stored blog in backend order. A fault partway
        through raises `StorageError`; items already yielded stay yielded.
        """
        ...


# --- Module Notes -----------------------------------------------------------
# update() is a read-modify-write without a version check: two concurrent updates
# of the same blog can lose one of the writes.
