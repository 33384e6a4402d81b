"""Where: src/tracksort/platform/providers/rate_limit.py
What: Thread-safe throttle and concurrency gate for outbound provider requests.
Why: Third-party APIs limit traffic (MusicBrainz asks for about 1 request per second).
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final


class RateLimiter:
    """Provide a minimal monotonic sleep guard for outgoing requests."""

    def __init__(self, min_interval_seconds: float) -> None:
        self._min_interval: float = min_interval_seconds
        self._lock: Final[threading.Lock] = threading.Lock()
        self._last_start: float = 0.0

    def respect(self) -> None:
        """Delay the caller until the minimum spacing constraint is met."""

        with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_start
            wait = self._min_interval - elapsed
            if wait > 0:
                time.sleep(wait)
            self._last_start = time.monotonic()


class ProviderGate:
    """Bound the number of concurrent provider calls and space their starts.

    Entering the gate blocks until a slot is free; it never rejects a caller.
    """

    def __init__(self, max_concurrency: int, min_interval_seconds: float = 0.0) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._semaphore: Final[threading.BoundedSemaphore] = threading.BoundedSemaphore(
            max_concurrency
        )
        self._limiter: Final[RateLimiter] = RateLimiter(min_interval_seconds)
        self.max_concurrency: int = max_concurrency

    def acquire(self) -> None:
        """Block until a slot is free and the start spacing allows a new call."""

        _ = self._semaphore.acquire()
        self._limiter.respect()

    def release(self) -> None:
        self._semaphore.release()

    @contextmanager
    def slot(self) -> Iterator[None]:
        self.acquire()
        try:
            yield
        finally:
            self.release()


__all__ = ["ProviderGate", "RateLimiter"]
