from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

SelectorFunction = Callable[[Any], Any]


@dataclass(frozen=True)
class PathSelector:
    """JSONPath expression evaluated against the parsed document."""

    path: str


@dataclass(frozen=True)
class FunctionSelector:
    """Caller-owned lookup invoked with the parsed document."""

    function: SelectorFunction


Selector = PathSelector | FunctionSelector

# Shapes accepted at the public boundary before conversion to a Selector
SelectorLike = str | SelectorFunction | PathSelector | FunctionSelector
