from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel


class ParseStatus(StrEnum):
    FOUND = "found"
    NO_MATCH = "no_match"
    DESERIALIZATION_FAILED = "deserialization_failed"
    SELECTOR_FAILED = "selector_failed"
    UNKNOWN_FORMAT = "unknown_format"


class ParseOutcome(BaseModel):
    """Tagged result of a parse; ``value`` is only meaningful when found."""

    status: ParseStatus
    value: Any = None
    format: str | None = None

    @property
    def found(self) -> bool:
        return self.status is ParseStatus.FOUND

    def unwrap(self) -> Any:
        """Collapse to the plain value, ``None`` for every non-found status."""
        return self.value if self.found else None
