"""
blogapi.domain.models

Blog record and operation outcomes.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class Blog:
    """
    A blog post. `id` is empty until the gateway assigns it at creation time.
    """

    author_id: str = ""
    title: str = ""
    content: str = ""
    id: str = ""

    def with_id(self, id: str) -> Blog:
        return replace(self, id=id)


class ReadOutcome(enum.StrEnum):
    # UNKNOWN is only ever the zero value; completed calls never report it.
    UNKNOWN = "UNKNOWN"
    NOT_FOUND = "NOT_FOUND"
    FOUND = "FOUND"


class UpdateOutcome(enum.StrEnum):
    UNKNOWN = "UNKNOWN"
    NOT_UPDATED = "NOT_UPDATED"
    UPDATED = "UPDATED"


class DeleteOutcome(enum.StrEnum):
    UNKNOWN = "UNKNOWN"
    NOT_DELETED = "NOT_DELETED"
    DELETED = "DELETED"
