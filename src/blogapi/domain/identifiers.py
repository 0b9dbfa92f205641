"""
blogapi.domain.identifiers

Identifier codec: storage key <-> public identifier string.

Responsibilities:
- Render a 12-byte storage key as 24 lower-case hex characters.
- Validate and parse an identifier back into its storage key.
"""

from __future__ import annotations

import re
from typing import NewType

from blogapi.domain.errors import InvalidIdentifier

StorageKey = NewType("StorageKey", bytes)

KEY_SIZE = 12
IDENTIFIER_LENGTH = KEY_SIZE * 2

_IDENTIFIER_RE = re.compile(rf"[0-9a-fA-F]{{{IDENTIFIER_LENGTH}}}")


def encode(key: bytes) -> str:
    if len(key) != KEY_SIZE:
        raise ValueError(f"storage key must be {KEY_SIZE} bytes, got {len(key)}")
    return key.hex()


def decode(identifier: str) -> StorageKey:
    # fullmatch: bytes.fromhex alone would tolerate embedded whitespace.
    if not isinstance(identifier, str) or _IDENTIFIER_RE.fullmatch(identifier) is None:
        raise InvalidIdentifier(str(identifier))
    return StorageKey(bytes.fromhex(identifier))


# --- Module Notes -----------------------------------------------------------
# Upper-case digits decode to the same key; encode() always emits lower case, so
# identifiers handed out by the service are canonical.
