"""
blogapi.db.repositories.blogs

SQLAlchemy implementation of the persistence gateway.

Responsibilities:
- Own the storage engine for the life of the process (connect/disconnect).
- Map blog CRUD + list onto the `blogs` table through the identifier codec.
- Translate driver failures into `StorageError` / `StorageConnectionError`.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

from sqlalchemy import delete, select, text, update
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from blogapi.db.init_db import init_db
from blogapi.db.models import BlogItem
from blogapi.db.session import create_engine, create_sessionmaker
from blogapi.domain import identifiers
from blogapi.domain.errors import NotFound, StorageConnectionError, StorageError
from blogapi.domain.models import Blog, DeleteOutcome, UpdateOutcome
from blogapi.observability.logging import get_logger
from blogapi.settings import Settings

log = get_logger(__name__)


def _to_blog(item: BlogItem) -> Blog:
    try:
        id = identifiers.encode(item.id)
    except ValueError as e:
        # A stored key of the wrong width is corrupt data, not a caller error.
        raise StorageError("undecodable document") from e
    return Blog(
        id=id,
        author_id=item.author_id,
        title=item.title,
        content=item.content,
    )


class SqlBlogGateway:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def endpoint(self) -> str:
        try:
            return make_url(self._settings.database_endpoint).render_as_string(
                hide_password=True
            )
        except SQLAlchemyError:
            return "<unparseable database url>"

    async def connect(self) -> None:
        log.info("gateway.connecting", endpoint=self.endpoint)
        engine: AsyncEngine | None = None
        try:
            engine = create_engine(self._settings)
            async with asyncio.timeout(self._settings.db_connect_timeout_seconds):
                async with engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
                if self._settings.env in ("dev", "test"):
                    # Dev/test convenience; production tables are provisioned out of band.
                    await init_db(engine)
        except (TimeoutError, OSError, SQLAlchemyError) as e:
            if engine is not None:
                await engine.dispose()
            raise StorageConnectionError(
                f"Error connecting to storage at {self.endpoint}"
            ) from e

        self._engine = engine
        self._sessionmaker = create_sessionmaker(engine)
        log.info("gateway.connected", endpoint=self.endpoint)

    async def disconnect(self) -> None:
        engine, self._engine, self._sessionmaker = self._engine, None, None
        if engine is None:
            return
        log.info("gateway.disconnecting")
        try:
            await engine.dispose()
        except (OSError, SQLAlchemyError) as e:
            # Shutdown continues regardless; the process is going away.
            log.warning("gateway.disconnect_failed", error=str(e))
            return
        log.info("gateway.disconnected")

    def _sessions(self) -> async_sessionmaker[AsyncSession]:
        if self._sessionmaker is None:
            raise StorageError("storage session is not connected")
        return self._sessionmaker

    async def ping(self) -> None:
        try:
            async with self._sessions()() as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StorageError("storage ping failed") from e

    async def create(self, blog: Blog) -> Blog:
        item = BlogItem(author_id=blog.author_id, title=blog.title, content=blog.content)
        try:
            async with self._sessions()() as session:
                session.add(item)
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError("insert failed") from e
        # Built from the request, not the row: only the id comes from storage.
        return blog.with_id(identifiers.encode(item.id))

    async def read(self, identifier: str) -> Blog:
        key = identifiers.decode(identifier)
        try:
            async with self._sessions()() as session:
                item = await session.get(BlogItem, key)
        except SQLAlchemyError as e:
            raise StorageError("lookup failed") from e
        if item is None:
            raise NotFound(identifier)
        return _to_blog(item)

    async def update(self, blog: Blog) -> UpdateOutcome:
        key = identifiers.decode(blog.id)
        try:
            async with self._sessions()() as session:
                # Read-modify-write with no version check (see domain.gateway notes).
                item = await session.get(BlogItem, key)
                if item is None:
                    raise NotFound(blog.id)
                result = await session.execute(
                    update(BlogItem)
                    .where(BlogItem.id == key)
                    .values(author_id=blog.author_id, title=blog.title, content=blog.content)
                )
                if result.rowcount == 0:
                    # Deleted between the read and the replace.
                    raise NotFound(blog.id)
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError("replace failed") from e
        return UpdateOutcome.UPDATED

    async def delete(self, identifier: str) -> DeleteOutcome:
        key = identifiers.decode(identifier)
        try:
            async with self._sessions()() as session:
                result = await session.execute(delete(BlogItem).where(BlogItem.id == key))
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError("delete failed") from e
        if result.rowcount == 0:
            return DeleteOutcome.NOT_DELETED
        return DeleteOutcome.DELETED

    async def list(self) -> AsyncIterator[Blog]:
        sessions = self._sessions()
        try:
            async with sessions() as session:
                rows = await session.stream_scalars(select(BlogItem))
                async for item in rows:
                    yield _to_blog(item)
        except SQLAlchemyError as e:
            raise StorageError("cursor failed while listing") from e


# --- Module Notes -----------------------------------------------------------
# Each operation opens its own session, so a call cancelled by its deadline only
# tears down its own session; the engine and its pool stay usable.
