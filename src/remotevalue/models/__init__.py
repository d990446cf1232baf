from __future__ import annotations

from remotevalue.models.cache import CacheStats, DocumentCacheEntry
from remotevalue.models.results import ParseOutcome, ParseStatus
from remotevalue.models.selectors import (
    FunctionSelector,
    PathSelector,
    Selector,
    SelectorFunction,
    SelectorLike,
)

__all__ = [
    # cache
    "DocumentCacheEntry",
    "CacheStats",
    # results
    "ParseStatus",
    "ParseOutcome",
    # selectors
    "PathSelector",
    "FunctionSelector",
    "Selector",
    "SelectorFunction",
    "SelectorLike",
]
