"""In-memory cache of parsed documents keyed by source URL.

A URL is deserialized at most once while its entry is cached: later lookups
return the stored structured value and ignore whatever content they carry.
Failed deserialization is never cached, so the next call for the same URL
tries again.

With ``max_entries=None`` (the default) entries live until the process exits
or until ``invalidate()``/``clear()`` is called. Setting a bound turns the
cache into an LRU.

Thread safety: ``_lock`` guards the entry map, counters and per-URL locks. A
per-URL lock serializes first-time parses of the same URL and stays registered
until its last waiter leaves, so a failed parse hands the URL to exactly one
waiting caller. Stores never overwrite an existing entry: the first successful
parse wins. Different URLs parse in parallel.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import structlog

from remotevalue.errors import DeserializationError
from remotevalue.models.cache import CacheStats, DocumentCacheEntry

log = structlog.get_logger()

Deserializer = Callable[[str], Any]


class _KeyLock:
    """Per-URL lock shared by every caller currently parsing that URL."""

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0  # Callers holding or waiting on ``lock``; guarded by the cache lock


class DocumentCache:
    """Process-local URL → parsed document map."""

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1 or None")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, DocumentCacheEntry] = OrderedDict()
        self._key_locks: dict[str, _KeyLock] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._failures = 0
        self._evictions = 0

    @property
    def max_entries(self) -> int | None:
        return self._max_entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._entries

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, url: str) -> DocumentCacheEntry | None:
        """Return the cached entry for *url* without parsing anything."""
        with self._lock:
            return self._lookup(url)

    def get_or_parse(
        self,
        url: str,
        content: str,
        deserialize: Deserializer,
    ) -> DocumentCacheEntry | None:
        """Return the cached entry for *url*, parsing *content* on a miss.

        Returns ``None`` when *deserialize* raises ``DeserializationError``;
        nothing is stored in that case.
        """
        with self._lock:
            entry = self._lookup(url)
            if entry is not None:
                self._hits += 1
                return entry
            key_lock = self._key_locks.get(url)
            if key_lock is None:
                key_lock = self._key_locks[url] = _KeyLock()
            key_lock.users += 1

        try:
            with key_lock.lock:
                with self._lock:
                    # Another thread may have populated the entry while we waited
                    entry = self._lookup(url)
                    if entry is not None:
                        self._hits += 1
                        return entry
                    self._misses += 1

                try:
                    document = deserialize(content)
                except DeserializationError as exc:
                    with self._lock:
                        self._failures += 1
                    log.warning("document_parse_failed", url=url, reason=str(exc))
                    return None

                entry = DocumentCacheEntry(
                    url=url,
                    document=document,
                    parsed_at=datetime.now(UTC),
                )
                with self._lock:
                    stored = self._store(url, entry)
                if stored is entry:
                    log.debug("document_cached", url=url)
                return stored
        finally:
            with self._lock:
                key_lock.users -= 1
                if key_lock.users == 0 and self._key_locks.get(url) is key_lock:
                    del self._key_locks[url]

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def invalidate(self, url: str) -> bool:
        """Drop the entry for *url*. Returns True if one was present."""
        with self._lock:
            removed = self._entries.pop(url, None) is not None
        if removed:
            log.info("cache_invalidated", url=url)
        return removed

    def clear(self) -> None:
        """Drop every entry and reset the counters."""
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()
            self._hits = self._misses = self._failures = self._evictions = 0
        log.info("cache_cleared", dropped=dropped)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                entries=len(self._entries),
                max_entries=self._max_entries,
                hits=self._hits,
                misses=self._misses,
                failures=self._failures,
                evictions=self._evictions,
            )

    # ------------------------------------------------------------------
    # Internals (caller holds _lock)
    # ------------------------------------------------------------------

    def _lookup(self, url: str) -> DocumentCacheEntry | None:
        entry = self._entries.get(url)
        if entry is not None and self._max_entries is not None:
            self._entries.move_to_end(url)
        return entry

    def _store(self, url: str, entry: DocumentCacheEntry) -> DocumentCacheEntry:
        """Insert *entry* unless *url* is already cached; return the cached entry."""
        existing = self._entries.get(url)
        if existing is not None:
            return existing
        self._entries[url] = entry
        if self._max_entries is None:
            return entry
        while len(self._entries) > self._max_entries:
            evicted_url, _ = self._entries.popitem(last=False)
            self._evictions += 1
            log.debug("cache_evicted", url=evicted_url)
        return entry
