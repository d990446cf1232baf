"""Integration test fixtures.

Every test starts from a fresh process-wide engine so the module-level
``parse()`` sees an empty document cache.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from remotevalue.api import RemoteValue, reset_default_engine
from remotevalue.cache import DocumentCache

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def default_engine() -> Iterator[RemoteValue]:
    engine = RemoteValue(cache=DocumentCache())
    reset_default_engine(engine)
    yield engine
    reset_default_engine()
