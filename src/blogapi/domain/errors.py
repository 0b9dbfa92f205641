"""
blogapi.domain.errors

Domain error taxonomy.

Responsibilities:
- Name the failure modes of identifier decoding and storage access.
- Stay transport-neutral: the request mapper alone turns these into status codes.
"""

from __future__ import annotations


class BlogError(Exception):
    pass


class InvalidIdentifier(BlogError):
    """
    The identifier string is not a well-formed storage key. Always a caller error.
    """

    def __init__(self, identifier: str) -> None:
        super().__init__(f"invalid blog identifier: {identifier!r}")
        self.identifier = identifier


class NotFound(BlogError):
    def __init__(self, identifier: str) -> None:
        super().__init__(f"no blog with identifier {identifier}")
        self.identifier = identifier


class StorageError(BlogError):
    # Backend fault: network, encoding or internal database error.
    pass


class StorageConnectionError(StorageError):
    # Startup-time failure to establish the storage session; fatal to boot.
    pass


# --- Module Notes -----------------------------------------------------------
# NOT_DELETED / NOT_UPDATED are outcomes (see domain.models), not errors.
