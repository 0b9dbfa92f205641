"""
blogapi.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create the blogs table for local development and tests.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from blogapi.db import models  # noqa: F401  # registers BlogItem on Base.metadata
from blogapi.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production databases are provisioned out of band.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
