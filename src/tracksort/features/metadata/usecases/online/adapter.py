"""Where: src/tracksort/features/metadata/usecases/online/adapter.py
What: Query online providers in priority order and merge their suggestions.
Why: Providers are best-effort collaborators; a slow or failing one must never
     stall or break a batch.
"""

from __future__ import annotations

import concurrent.futures
from collections.abc import Sequence
from types import TracebackType
from typing import Final

from tracksort.platform.logging import logger
from tracksort.platform.providers.base import (
    LookupFailure,
    LookupFailureKind,
    MetadataProvider,
    ProviderResult,
)
from tracksort.platform.providers.rate_limit import ProviderGate
from tracksort.shared.track_metadata import OVERRIDABLE_FIELDS, FieldOverrides, RawMetadataBundle

from .cache import LookupCache, make_key

DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0


def lookup_terms(bundle: RawMetadataBundle) -> tuple[str | None, str | None, str | None]:
    """Best raw guesses for artist, album and title to send to providers."""

    def first(name: str) -> str | None:
        for namespace in (bundle.tag, bundle.from_folder, bundle.from_file):
            value = getattr(namespace, name)
            if value is not None:
                return value
        return None

    return first("artist"), first("album"), first("title")


class OnlineCorrectionAdapter:
    """Merge provider suggestions; the first provider to supply a field wins.

    Every provider call runs on a worker thread so its timeout is enforced, and
    inside ``gate`` so concurrent outbound traffic stays bounded. A call abandoned
    after a timeout holds its slot until the provider actually returns. Results,
    failures included, are cached for the lifetime of the adapter.
    """

    def __init__(
        self,
        providers: Sequence[MetadataProvider],
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        gate: ProviderGate | None = None,
        cache: LookupCache | None = None,
    ) -> None:
        self.providers: tuple[MetadataProvider, ...] = tuple(providers)
        self.timeout: float = timeout
        self.gate: ProviderGate = gate or ProviderGate(max_concurrency=1)
        self.cache: LookupCache = cache or LookupCache()
        self._executor: concurrent.futures.ThreadPoolExecutor = concurrent.futures.ThreadPoolExecutor(
            max_workers=self.gate.max_concurrency,
            thread_name_prefix="tracksort-lookup",
        )

    def __enter__(self) -> OnlineCorrectionAdapter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Stop the worker threads without waiting for abandoned requests."""

        self._executor.shutdown(wait=False, cancel_futures=True)

    def lookup(self, artist: str | None, album: str | None, title: str | None) -> FieldOverrides | None:
        """Return merged overrides, or None when no provider found anything."""

        merged = FieldOverrides()
        for provider in self.providers:
            key = make_key(provider.name, artist, album, title)
            result = self.cache.get_or_fetch(
                key, lambda provider=provider: self._query(provider, artist, album, title)
            )
            if isinstance(result, LookupFailure):
                logger.debug(
                    "Provider %s found nothing for %r / %r / %r: %s %s",
                    provider.name,
                    artist,
                    album,
                    title,
                    result.kind,
                    result.message,
                )
                continue
            merged = merged.merge_missing(result, provider.name)
            if all(getattr(merged, name) is not None for name in OVERRIDABLE_FIELDS):
                break

        return None if merged.is_empty() else merged

    def lookup_bundle(self, bundle: RawMetadataBundle, *, prefer_online: bool = False) -> FieldOverrides | None:
        """Look up ``bundle`` unless its tags already decide every field."""

        if not self.providers:
            return None
        if not prefer_online and all(getattr(bundle.tag, name) is not None for name in OVERRIDABLE_FIELDS):
            return None
        artist, album, title = lookup_terms(bundle)
        if title is None:
            return None
        return self.lookup(artist, album, title)

    def _query(
        self,
        provider: MetadataProvider,
        artist: str | None,
        album: str | None,
        title: str | None,
    ) -> ProviderResult:
        self.gate.acquire()
        try:
            future = self._executor.submit(provider.lookup, artist, album, title)
        except RuntimeError as exc:
            # Executor already shut down (batch cancelled).
            self.gate.release()
            return LookupFailure(LookupFailureKind.DISABLED, str(exc))
        # The slot is returned when the call finishes or is cancelled, not when we stop waiting.
        future.add_done_callback(lambda _future: self.gate.release())
        try:
            return future.result(timeout=self.timeout)
        except concurrent.futures.TimeoutError:
            _ = future.cancel()
            logger.warning("Provider %s timed out after %.1fs", provider.name, self.timeout)
            return LookupFailure(LookupFailureKind.TIMEOUT, f"No answer within {self.timeout}s")
        except concurrent.futures.CancelledError:
            return LookupFailure(LookupFailureKind.DISABLED, "Lookup cancelled")
        except Exception as exc:
            logger.warning("Provider %s failed: %s", provider.name, exc)
            return LookupFailure(LookupFailureKind.HTTP_ERROR, str(exc))


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "OnlineCorrectionAdapter", "lookup_terms"]
