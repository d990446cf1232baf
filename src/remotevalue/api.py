"""Public parse API.

``parse()`` returns the selected value or ``None``. ``parse_outcome()`` takes
the same arguments and returns a ``ParseOutcome`` that says why no value was
produced. Both delegate to a process-wide ``RemoteValue`` engine built from
``Settings`` on first use; build a ``RemoteValue`` directly to control the
registry and cache explicitly.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

import structlog

from remotevalue.cache import DocumentCache
from remotevalue.config import Settings
from remotevalue.models.results import ParseOutcome, ParseStatus
from remotevalue.parsers import JsonParser
from remotevalue.registry import ParserRegistry, resolve_format
from remotevalue.selectors import as_selector

if TYPE_CHECKING:
    from remotevalue.models.selectors import SelectorLike

log = structlog.get_logger()


def default_registry(cache: DocumentCache) -> ParserRegistry:
    """Registry with the built-in formats, all sharing *cache*."""
    registry = ParserRegistry()
    registry.register("json", JsonParser(cache))
    return registry


class RemoteValue:
    """Format dispatch over a parser registry and a shared document cache."""

    def __init__(
        self,
        registry: ParserRegistry | None = None,
        cache: DocumentCache | None = None,
    ) -> None:
        self.cache = cache if cache is not None else DocumentCache()
        self.registry = registry if registry is not None else default_registry(self.cache)

    @classmethod
    def from_settings(cls, settings: Settings) -> RemoteValue:
        return cls(cache=DocumentCache(max_entries=settings.cache.max_entries))

    def parse_outcome(
        self,
        url: str,
        content: str,
        selector: SelectorLike,
        format: str | None = None,
    ) -> ParseOutcome:
        resolved = as_selector(selector)
        format_id = resolve_format(url, format)
        parser = self.registry.lookup(format_id)
        if parser is None:
            log.info("format_not_registered", url=url, format=format_id)
            return ParseOutcome(status=ParseStatus.UNKNOWN_FORMAT, format=format_id.lower())

        outcome = parser.parse(url, content, resolved)
        return outcome.model_copy(update={"format": format_id.lower()})

    def parse(
        self,
        url: str,
        content: str,
        selector: SelectorLike,
        format: str | None = None,
    ) -> Any:
        return self.parse_outcome(url, content, selector, format).unwrap()


# ---------------------------------------------------------------------------
# Process-wide engine
# ---------------------------------------------------------------------------

_default_engine: RemoteValue | None = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> RemoteValue:
    global _default_engine
    with _default_engine_lock:
        if _default_engine is None:
            _default_engine = RemoteValue.from_settings(Settings())
        return _default_engine


def reset_default_engine(engine: RemoteValue | None = None) -> None:
    """Replace the process-wide engine; ``None`` rebuilds it lazily."""
    global _default_engine
    with _default_engine_lock:
        _default_engine = engine


def parse(
    url: str,
    content: str,
    selector: SelectorLike,
    format: str | None = None,
) -> Any:
    """Parse *content* fetched from *url* and return the selected value.

    Returns ``None`` when the format is not registered, the content does not
    deserialize, or a JSONPath selector matches nothing. Raises
    ``RemoteValueError`` for a malformed URL; exceptions from a selector
    function propagate unchanged.
    """
    return get_default_engine().parse(url, content, selector, format)


def parse_outcome(
    url: str,
    content: str,
    selector: SelectorLike,
    format: str | None = None,
) -> ParseOutcome:
    return get_default_engine().parse_outcome(url, content, selector, format)
