"""Error types raised across the remotevalue boundary.

Only two conditions ever reach the caller as exceptions: a URL that cannot be
parsed while inferring the format, and a selector of an unsupported shape.
Everything else (bad content, unknown format, failed path evaluation) is
recovered locally and surfaces as ``None``. Exceptions raised inside a
caller-supplied selector function are not wrapped.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_URL = "INVALID_URL"
    INVALID_SELECTOR = "INVALID_SELECTOR"


class RemoteValueError(Exception):
    """Structured error carrying a machine-readable code."""

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def to_dict(self) -> dict[str, object]:
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "recoverable": self.recoverable,
            }
        }


class DeserializationError(Exception):
    """Raised by a deserializer when content is not valid for its format."""
