"""
blogapi.db.models

Storage schema for blog documents.

Responsibilities:
- Define the `blogs` table keyed by a 12-byte binary storage key.
- Generate fresh storage keys at insert time.
"""

from __future__ import annotations

import itertools
import os
import time

from sqlalchemy import LargeBinary, Text
from sqlalchemy.orm import Mapped, mapped_column

from blogapi.db.base import Base
from blogapi.domain.identifiers import KEY_SIZE

# Per-process random component plus a counter seeded at random: keys stay unique
# across processes and are never handed out twice, even after a delete.
_PROCESS_UNIQUE = os.urandom(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))


def new_storage_key() -> bytes:
    seconds = int(time.time()) & 0xFFFFFFFF
    count = next(_counter) & 0xFFFFFF
    return seconds.to_bytes(4, "big") + _PROCESS_UNIQUE + count.to_bytes(3, "big")


class BlogItem(Base):
    __tablename__ = "blogs"

    id: Mapped[bytes] = mapped_column(
        LargeBinary(KEY_SIZE), primary_key=True, default=new_storage_key
    )
    author_id: Mapped[str] = mapped_column(Text, nullable=False, default="")
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")


# --- Module Notes -----------------------------------------------------------
# Text columns: no length or encoding limits are imposed on blog fields.
