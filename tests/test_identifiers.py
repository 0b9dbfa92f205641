"""
tests.test_identifiers

Identifier codec: canonical encoding and strict decoding.
"""

from __future__ import annotations

import pytest

from blogapi.db.models import new_storage_key
from blogapi.domain import identifiers
from blogapi.domain.errors import InvalidIdentifier


def test_encode_is_lowercase_hex_of_fixed_width() -> None:
    key = bytes(range(250, 256)) + bytes(range(6))
    encoded = identifiers.encode(key)
    assert encoded == "fafbfcfdfeff000102030405"
    assert len(encoded) == identifiers.IDENTIFIER_LENGTH


def test_decode_inverts_encode() -> None:
    key = new_storage_key()
    assert identifiers.decode(identifiers.encode(key)) == key


def test_decode_accepts_upper_case_digits() -> None:
    assert identifiers.decode("FAFBFCFDFEFF000102030405") == identifiers.decode(
        "fafbfcfdfeff000102030405"
    )


@pytest.mark.parametrize(
    "bad",
    [
        "",
        "not-hex",
        "abc",
        "0" * 23,
        "0" * 25,
        "g" * 24,
        " " + "0" * 23,
        "0" * 24 + "\n",
        "00112233 4455667788990a",
    ],
)
def test_decode_rejects_malformed(bad: str) -> None:
    with pytest.raises(InvalidIdentifier) as exc:
        identifiers.decode(bad)
    assert exc.value.identifier == bad


def test_encode_rejects_wrong_width_key() -> None:
    with pytest.raises(ValueError):
        identifiers.encode(b"\x00" * 11)


def test_fresh_keys_are_distinct() -> None:
    keys = {new_storage_key() for _ in range(1000)}
    assert len(keys) == 1000
