"""Where: src/tracksort/features/metadata/usecases/online/cache.py
What: In-memory, thread-safe cache of provider lookup results for one batch.
Why: A query must reach each provider at most once per run, failures included.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Callable
from typing import Final

from unidecode import unidecode

from tracksort.platform.providers.base import ProviderResult

CacheKey = tuple[str, str, str, str]

_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s+")


def normalize_key_part(value: str | None) -> str:
    """Fold ``value`` to ASCII, casefold it and collapse whitespace."""

    if not value:
        return ""
    return _WHITESPACE.sub(" ", unidecode(value).casefold()).strip()


def make_key(provider: str, artist: str | None, album: str | None, title: str | None) -> CacheKey:
    return (
        provider,
        normalize_key_part(artist),
        normalize_key_part(album),
        normalize_key_part(title),
    )


class LookupCache:
    """Memoise provider results; concurrent callers for one key share a single fetch."""

    def __init__(self) -> None:
        self._lock: Final[threading.Lock] = threading.Lock()
        self._entries: dict[CacheKey, ProviderResult] = {}
        self._pending: dict[CacheKey, threading.Event] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: CacheKey) -> ProviderResult | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: CacheKey, result: ProviderResult) -> None:
        with self._lock:
            self._entries[key] = result

    def get_or_fetch(self, key: CacheKey, fetch: Callable[[], ProviderResult]) -> ProviderResult:
        """Return the cached result for ``key``, calling ``fetch`` only on a miss."""

        while True:
            with self._lock:
                if key in self._entries:
                    return self._entries[key]
                pending = self._pending.get(key)
                if pending is None:
                    pending = threading.Event()
                    self._pending[key] = pending
                    break
            # Another thread is fetching this key; wait and re-check.
            _ = pending.wait()

        try:
            result = fetch()
            with self._lock:
                self._entries[key] = result
            return result
        finally:
            with self._lock:
                _ = self._pending.pop(key, None)
            pending.set()


__all__ = ["CacheKey", "LookupCache", "make_key", "normalize_key_part"]
