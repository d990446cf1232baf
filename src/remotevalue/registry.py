"""Format resolution and the parser registry.

The registry maps a lowercased format identifier to a ``Parser``. Adding a
format means registering another parser; neither ``resolve_format`` nor the
public ``parse`` entry point changes.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from urllib.parse import urlsplit

from remotevalue.errors import ErrorCode, RemoteValueError

if TYPE_CHECKING:
    from remotevalue.models.results import ParseOutcome
    from remotevalue.models.selectors import SelectorLike

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")

# Schemes whose URLs must name a host, e.g. "https:/doc.json" is rejected
_HIERARCHICAL_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


@runtime_checkable
class Parser(Protocol):
    """Parses content of one format and resolves a selector against it."""

    def parse(self, url: str, content: str, selector: SelectorLike) -> ParseOutcome:
        """Return the selected value wrapped in a ``ParseOutcome``."""
        ...


def _invalid_url(url: str, reason: str) -> RemoteValueError:
    return RemoteValueError(
        code=ErrorCode.INVALID_URL,
        message=f"Invalid URL {url!r}: {reason}",
    )


def resolve_format(url: str, explicit_format: str | None = None) -> str:
    """Return the format identifier to use for *url*.

    A non-empty *explicit_format* wins and is returned unchanged. Otherwise
    the identifier is the URL path after its last ``.``; a path without a
    ``.`` is returned whole, which never names a registered format.

    URL checks are stricter than a WHATWG URL parser: a host-based scheme
    without a host (``"https:/doc.json"``) is rejected rather than repaired.
    """
    if explicit_format:
        return explicit_format

    try:
        parts = urlsplit(url)
    except (AttributeError, TypeError, ValueError) as exc:
        raise _invalid_url(str(url), str(exc)) from exc

    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        raise _invalid_url(url, "missing scheme")
    if parts.scheme.lower() in _HIERARCHICAL_SCHEMES and not parts.netloc:
        raise _invalid_url(url, "missing host")

    path = parts.path
    return path[path.rfind(".") + 1 :]


class ParserRegistry:
    """Case-insensitive map of format identifier → parser."""

    def __init__(self) -> None:
        self._parsers: dict[str, Parser] = {}

    def register(self, format: str, parser: Parser) -> None:
        if not format:
            raise ValueError("format must not be empty")
        if not isinstance(parser, Parser):
            raise TypeError(f"{type(parser).__name__} does not implement Parser")
        self._parsers[format.lower()] = parser

    def unregister(self, format: str) -> Parser | None:
        return self._parsers.pop(format.lower(), None)

    def lookup(self, format: str) -> Parser | None:
        return self._parsers.get(format.lower())

    def formats(self) -> list[str]:
        return sorted(self._parsers)

    def __contains__(self, format: object) -> bool:
        return isinstance(format, str) and format.lower() in self._parsers
