"""Extract a single value from fetched remote content.

    from remotevalue import parse

    parse("https://example.com/doc.json", '{"a": {"b": 42}}', "$.a.b")  # 42
"""

from __future__ import annotations

from remotevalue.api import (
    RemoteValue,
    default_registry,
    get_default_engine,
    parse,
    parse_outcome,
    reset_default_engine,
)
from remotevalue.cache import DocumentCache
from remotevalue.errors import DeserializationError, ErrorCode, RemoteValueError
from remotevalue.models import (
    FunctionSelector,
    ParseOutcome,
    ParseStatus,
    PathSelector,
)
from remotevalue.parsers import JsonParser, StructuredDataParser
from remotevalue.registry import Parser, ParserRegistry, resolve_format

__all__ = [
    "parse",
    "parse_outcome",
    "RemoteValue",
    "default_registry",
    "get_default_engine",
    "reset_default_engine",
    "DocumentCache",
    "Parser",
    "ParserRegistry",
    "resolve_format",
    "StructuredDataParser",
    "JsonParser",
    "PathSelector",
    "FunctionSelector",
    "ParseOutcome",
    "ParseStatus",
    "ErrorCode",
    "RemoteValueError",
    "DeserializationError",
]
