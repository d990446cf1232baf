from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class DocumentCacheEntry(BaseModel):
    """Structured value parsed from one URL's content."""

    url: str
    document: Any  # May legitimately be None for a JSON ``null`` payload
    parsed_at: datetime


class CacheStats(BaseModel):
    entries: int
    max_entries: int | None
    hits: int = 0
    misses: int = 0
    failures: int = 0  # Deserialization attempts that raised
    evictions: int = 0
