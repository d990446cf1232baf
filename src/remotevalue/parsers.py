"""Concrete parsers for structured-data formats."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from remotevalue.errors import DeserializationError
from remotevalue.models.results import ParseOutcome, ParseStatus
from remotevalue.selectors import select

if TYPE_CHECKING:
    from remotevalue.cache import DocumentCache
    from remotevalue.models.selectors import SelectorLike


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def json_loads(content: str) -> Any:
    """Deserialize JSON text, rejecting the NaN/Infinity extensions.

    Nesting deep enough to exhaust the interpreter stack counts as invalid
    content.
    """
    try:
        return json.loads(content, parse_constant=_reject_constant)
    except (TypeError, ValueError, RecursionError) as exc:  # JSONDecodeError is a ValueError
        raise DeserializationError(str(exc)) from exc


class StructuredDataParser:
    """Deserializes through the document cache, then applies the selector."""

    def __init__(self, deserialize: Callable[[str], Any], cache: DocumentCache) -> None:
        self._deserialize = deserialize
        self._cache = cache

    def parse(self, url: str, content: str, selector: SelectorLike) -> ParseOutcome:
        entry = self._cache.get_or_parse(url, content, self._deserialize)
        if entry is None:
            return ParseOutcome(status=ParseStatus.DESERIALIZATION_FAILED)
        return select(entry.document, selector)


class JsonParser(StructuredDataParser):
    def __init__(self, cache: DocumentCache) -> None:
        super().__init__(json_loads, cache)
