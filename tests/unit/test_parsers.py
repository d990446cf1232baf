"""Unit tests for remotevalue.parsers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from remotevalue.errors import DeserializationError
from remotevalue.models.results import ParseStatus
from remotevalue.parsers import JsonParser, StructuredDataParser, json_loads

if TYPE_CHECKING:
    from remotevalue.cache import DocumentCache

URL = "https://example.com/doc.json"


# ---------------------------------------------------------------------------
# json_loads
# ---------------------------------------------------------------------------


class TestJsonLoads:
    def test_valid(self) -> None:
        assert json_loads('{"a": [1, 2.5, "x", true, null]}') == {"a": [1, 2.5, "x", True, None]}

    @pytest.mark.parametrize("content", ["{not valid json", "", "{'a': 1}", "[1,]"])
    def test_invalid_raises(self, content: str) -> None:
        with pytest.raises(DeserializationError):
            json_loads(content)

    @pytest.mark.parametrize("content", ["NaN", "[Infinity]", '{"a": -Infinity}'])
    def test_non_standard_constants_rejected(self, content: str) -> None:
        with pytest.raises(DeserializationError):
            json_loads(content)

    def test_non_string_rejected(self) -> None:
        with pytest.raises(DeserializationError):
            json_loads(None)  # type: ignore[arg-type]

    def test_deep_nesting_rejected(self) -> None:
        depth = 100_000
        with pytest.raises(DeserializationError):
            json_loads("[" * depth + "]" * depth)


# ---------------------------------------------------------------------------
# JsonParser
# ---------------------------------------------------------------------------


class TestJsonParser:
    def test_selects_value(self, cache: DocumentCache) -> None:
        outcome = JsonParser(cache).parse(URL, '{"a": {"b": 42}}', "$.a.b")
        assert outcome.status is ParseStatus.FOUND
        assert outcome.value == 42

    def test_deeply_nested_content(self, cache: DocumentCache) -> None:
        depth = 100_000
        content = "[" * depth + "]" * depth
        outcome = JsonParser(cache).parse(URL, content, lambda doc: len(doc))
        assert outcome.status is ParseStatus.DESERIALIZATION_FAILED
        assert URL not in cache

    def test_bad_content(self, cache: DocumentCache) -> None:
        outcome = JsonParser(cache).parse(URL, "{not valid json", "$.a")
        assert outcome.status is ParseStatus.DESERIALIZATION_FAILED
        assert URL not in cache

    def test_uses_cache(self, cache: DocumentCache) -> None:
        parser = JsonParser(cache)
        parser.parse(URL, '{"a": 1}', "$.a")
        assert parser.parse(URL, '{"a": 2}', "$.a").value == 1

    def test_bad_content_ignored_on_cache_hit(self, cache: DocumentCache) -> None:
        parser = JsonParser(cache)
        parser.parse(URL, '{"a": 1}', "$.a")
        assert parser.parse(URL, "{broken", "$.a").value == 1


# ---------------------------------------------------------------------------
# StructuredDataParser with a custom deserializer
# ---------------------------------------------------------------------------


def _parse_key_values(content: str) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for line in content.splitlines():
        if "=" not in line:
            raise DeserializationError(f"expected key=value, got {line!r}")
        key, _, value = line.partition("=")
        result[key.strip()] = value.strip()
    return result


class TestStructuredDataParser:
    def test_custom_deserializer(self, cache: DocumentCache) -> None:
        parser = StructuredDataParser(_parse_key_values, cache)
        outcome = parser.parse("https://example.com/app.env", "HOST=a\nPORT=8080", "$.PORT")
        assert outcome.value == "8080"

    def test_custom_deserializer_failure(self, cache: DocumentCache) -> None:
        parser = StructuredDataParser(_parse_key_values, cache)
        outcome = parser.parse("https://example.com/app.env", "garbage", "$.PORT")
        assert outcome.status is ParseStatus.DESERIALIZATION_FAILED
