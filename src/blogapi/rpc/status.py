"""
blogapi.rpc.status

RPC status codes, the error that carries them, and caller deadlines.

Responsibilities:
- Mirror gRPC status numbering so any transport can render it.
- Parse gRPC-style `grpc-timeout` values into seconds.
"""

from __future__ import annotations

import enum
import re


class StatusCode(enum.IntEnum):
    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    INTERNAL = 13
    UNAVAILABLE = 14


class RpcError(Exception):
    """
    A call that ended with a non-OK status. `message` is safe to show to callers.
    """

    def __init__(self, code: StatusCode, message: str) -> None:
        super().__init__(f"{code.name}: {message}")
        self.code = code
        self.message = message

    def to_dict(self) -> dict[str, object]:
        return {"code": int(self.code), "message": self.message, "details": []}

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> RpcError:
        raw_code = payload.get("code", StatusCode.UNKNOWN)
        try:
            code = StatusCode(int(raw_code))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            code = StatusCode.UNKNOWN
        return cls(code, str(payload.get("message", "")))


_TIMEOUT_RE = re.compile(r"(\d{1,8})([HMSmun])")
_MAX_TIMEOUT_AMOUNT = 99_999_999
_TIMEOUT_UNITS = {
    "H": 3600.0,
    "M": 60.0,
    "S": 1.0,
    "m": 1e-3,
    "u": 1e-6,
    "n": 1e-9,
}


def parse_timeout(value: str) -> float:
    match = _TIMEOUT_RE.fullmatch(value.strip())
    if match is None:
        raise RpcError(StatusCode.INVALID_ARGUMENT, f"malformed grpc-timeout: {value!r}")
    amount, unit = match.groups()
    return int(amount) * _TIMEOUT_UNITS[unit]


def format_timeout(seconds: float) -> str:
    # Smallest unit whose value fits the eight-digit grammar; clamp past that.
    for unit in ("m", "S", "M", "H"):
        amount = max(round(seconds / _TIMEOUT_UNITS[unit]), 0)
        if amount <= _MAX_TIMEOUT_AMOUNT:
            return f"{amount}{unit}"
    return f"{_MAX_TIMEOUT_AMOUNT}H"


# --- Module Notes -----------------------------------------------------------
# The grpc-timeout grammar allows at most eight digits followed by a unit letter.
