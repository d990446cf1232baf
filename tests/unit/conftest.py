"""Unit-specific fixtures (pure in-memory, no shared process state)."""

from __future__ import annotations

import pytest

from remotevalue.cache import DocumentCache


@pytest.fixture()
def cache() -> DocumentCache:
    """Fresh unbounded document cache for each test."""
    return DocumentCache()
