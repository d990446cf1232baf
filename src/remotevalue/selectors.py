"""Selector resolution against a parsed document.

A selector is either a JSONPath expression or a caller-owned function. Path
evaluation failures are recovered and reported as ``SELECTOR_FAILED``; a
function selector is called without any protection so its exceptions reach
the caller unchanged.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog
from jsonpath_ng.ext import parse as jsonpath_parse

from remotevalue.errors import ErrorCode, RemoteValueError
from remotevalue.models.results import ParseOutcome, ParseStatus
from remotevalue.models.selectors import FunctionSelector, PathSelector

if TYPE_CHECKING:
    from jsonpath_ng import JSONPath

    from remotevalue.models.selectors import Selector, SelectorLike

log = structlog.get_logger()


def as_selector(selector: SelectorLike) -> Selector:
    """Convert a plain string or callable into a ``Selector``."""
    match selector:
        case PathSelector() | FunctionSelector():
            return selector
        case str():
            return PathSelector(selector)
        case _ if callable(selector):
            return FunctionSelector(selector)
        case _:
            raise RemoteValueError(
                code=ErrorCode.INVALID_SELECTOR,
                message=(
                    "selector must be a JSONPath string or a callable, "
                    f"got {type(selector).__name__}"
                ),
            )


@lru_cache(maxsize=256)
def _compile(path: str) -> JSONPath:
    return jsonpath_parse(path)


def evaluate_path(path: str, document: Any) -> list[Any]:
    """Return every value matched by *path*, in document order."""
    return [match.value for match in _compile(path).find(document)]


def select(document: Any, selector: SelectorLike) -> ParseOutcome:
    """Resolve *selector* against *document*."""
    match as_selector(selector):
        case PathSelector(path=path):
            try:
                matches = evaluate_path(path, document)
            except Exception as exc:  # jsonpath_ng raises bare Exception on bad syntax
                log.warning("selector_evaluation_failed", path=path, reason=str(exc))
                return ParseOutcome(status=ParseStatus.SELECTOR_FAILED)
            if not matches:
                return ParseOutcome(status=ParseStatus.NO_MATCH)
            return ParseOutcome(status=ParseStatus.FOUND, value=matches[0])
        case FunctionSelector(function=function):
            return ParseOutcome(status=ParseStatus.FOUND, value=function(document))
