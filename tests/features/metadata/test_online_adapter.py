"""Tests for the online correction adapter and its lookup cache."""

from __future__ import annotations

import threading
import time
from pathlib import Path

from tracksort.features.metadata.usecases.online.adapter import OnlineCorrectionAdapter, lookup_terms
from tracksort.features.metadata.usecases.online.cache import LookupCache, make_key, normalize_key_part
from tracksort.platform.providers.base import LookupFailure, LookupFailureKind, ProviderResult, not_found
from tracksort.platform.providers.rate_limit import ProviderGate
from tracksort.shared.track_metadata import FieldOverrides, RawFields, RawMetadataBundle


class StaticProvider:
    """Provider answering every lookup with the same result."""

    def __init__(self, name: str, result: ProviderResult, delay: float = 0.0) -> None:
        self.name = name
        self.result = result
        self.delay = delay
        self.calls: list[tuple[str | None, str | None, str | None]] = []
        self._lock = threading.Lock()

    def lookup(self, artist: str | None, album: str | None, title: str | None) -> ProviderResult:
        with self._lock:
            self.calls.append((artist, album, title))
        if self.delay:
            time.sleep(self.delay)
        return self.result


class ExplodingProvider:
    name = "exploding"

    def lookup(self, artist: str | None, album: str | None, title: str | None) -> ProviderResult:
        raise RuntimeError("parser crashed")


def test_first_provider_wins_per_field() -> None:
    first = StaticProvider("first", FieldOverrides(artist="Nirvana", year="1989"))
    second = StaticProvider("second", FieldOverrides(artist="Nirvana (US)", album="Bleach", year="1990"))

    with OnlineCorrectionAdapter([first, second], timeout=5.0) as adapter:
        result = adapter.lookup("nirvana", None, "Blew")

    assert result is not None
    assert result.artist == "Nirvana"
    assert result.album == "Bleach"
    assert result.year == "1989"
    assert result.sources == {"artist": "first", "year": "first", "album": "second"}


def test_failures_are_skipped_and_none_when_nothing_found() -> None:
    missing = StaticProvider("missing", not_found("nothing"))
    limited = StaticProvider("limited", LookupFailure(LookupFailureKind.RATE_LIMITED, "slow down"))

    with OnlineCorrectionAdapter([missing, limited], timeout=5.0) as adapter:
        assert adapter.lookup("a", "b", "c") is None


def test_complete_result_stops_querying() -> None:
    complete = FieldOverrides(artist="A", album="B", title="C", year="2001", genre="Rock", track="1")
    first = StaticProvider("first", complete)
    second = StaticProvider("second", FieldOverrides(artist="Other"))

    with OnlineCorrectionAdapter([first, second], timeout=5.0) as adapter:
        result = adapter.lookup("A", "B", "C")

    assert result is not None
    assert (result.artist, result.genre, result.track) == ("A", "Rock", "1")
    assert second.calls == []


def test_results_and_failures_are_cached() -> None:
    found = StaticProvider("found", FieldOverrides(album="Bleach"))
    missing = StaticProvider("missing", not_found())

    with OnlineCorrectionAdapter([missing, found], timeout=5.0) as adapter:
        _ = adapter.lookup("Nirvana", None, "Blew")
        _ = adapter.lookup("  NIRVANA ", None, "blew")

    assert len(found.calls) == 1
    assert len(missing.calls) == 1


def test_slow_provider_times_out() -> None:
    slow = StaticProvider("slow", FieldOverrides(artist="Late"), delay=1.0)
    fast = StaticProvider("fast", FieldOverrides(album="On Time"))

    with OnlineCorrectionAdapter([slow, fast], timeout=0.05, gate=ProviderGate(2)) as adapter:
        started = time.monotonic()
        result = adapter.lookup("a", None, "t")
        elapsed = time.monotonic() - started
        cached = adapter.cache.get(make_key("slow", "a", None, "t"))

    assert result == FieldOverrides(album="On Time", sources={"album": "fast"})
    assert elapsed < 0.9
    assert isinstance(cached, LookupFailure)
    assert cached.kind is LookupFailureKind.TIMEOUT


def test_provider_exception_is_treated_as_failure() -> None:
    fallback = StaticProvider("fallback", FieldOverrides(genre="Grunge"))

    with OnlineCorrectionAdapter([ExplodingProvider(), fallback], timeout=5.0) as adapter:
        result = adapter.lookup("a", None, "t")

    assert result is not None
    assert result.genre == "Grunge"


def test_lookup_bundle_skips_fully_tagged_files() -> None:
    provider = StaticProvider("p", FieldOverrides(artist="Online"))
    tagged = RawFields(artist="A", album="B", title="C", year="2001", genre="Rock", track="1")
    bundle = RawMetadataBundle(source_path=Path("a.mp3"), tag=tagged)

    with OnlineCorrectionAdapter([provider], timeout=5.0) as adapter:
        assert adapter.lookup_bundle(bundle) is None
        assert adapter.lookup_bundle(bundle, prefer_online=True) is not None


def test_lookup_bundle_requires_a_title() -> None:
    provider = StaticProvider("p", FieldOverrides(artist="Online"))
    bundle = RawMetadataBundle(source_path=Path("a.mp3"), tag=RawFields(artist="A"))

    with OnlineCorrectionAdapter([provider], timeout=5.0) as adapter:
        assert adapter.lookup_bundle(bundle) is None
    assert provider.calls == []


def test_lookup_terms_prefer_tags_then_folder_then_file() -> None:
    bundle = RawMetadataBundle(
        source_path=Path("a.mp3"),
        tag=RawFields(title="Tag Title"),
        from_folder=RawFields(artist="Folder Artist", album="Folder Album"),
        from_file=RawFields(title="File Title"),
    )
    assert lookup_terms(bundle) == ("Folder Artist", "Folder Album", "Tag Title")


def test_gate_bounds_concurrent_calls() -> None:
    active = 0
    peak = 0
    lock = threading.Lock()

    class CountingProvider:
        name = "counting"

        def lookup(self, artist: str | None, album: str | None, title: str | None) -> ProviderResult:
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.02)
            with lock:
                active -= 1
            return not_found()

    with OnlineCorrectionAdapter([CountingProvider()], timeout=5.0, gate=ProviderGate(2)) as adapter:
        threads = [
            threading.Thread(target=adapter.lookup, args=(f"artist {index}", None, "t"))
            for index in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert 1 <= peak <= 2


def test_timed_out_call_keeps_its_slot_until_it_returns() -> None:
    active = 0
    peak = 0
    lock = threading.Lock()

    class SlowCountingProvider:
        name = "slow-counting"

        def lookup(self, artist: str | None, album: str | None, title: str | None) -> ProviderResult:
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.2)
            with lock:
                active -= 1
            return FieldOverrides(album="Late")

    with OnlineCorrectionAdapter([SlowCountingProvider()], timeout=0.02, gate=ProviderGate(1)) as adapter:
        first = adapter.lookup("first", None, "t")
        second = adapter.lookup("second", None, "t")

    assert first is None
    assert second is None
    assert peak == 1


def test_cache_key_normalization() -> None:
    assert normalize_key_part("  Beyoncé   Knowles ") == "beyonce knowles"
    assert normalize_key_part(None) == ""
    assert make_key("mb", "Sigur Rós", None, "Hoppípolla") == ("mb", "sigur ros", "", "hoppipolla")


def test_cache_fetches_each_key_once_under_contention() -> None:
    cache = LookupCache()
    key = make_key("p", "a", "b", "c")
    calls = 0
    calls_lock = threading.Lock()

    def fetch() -> ProviderResult:
        nonlocal calls
        with calls_lock:
            calls += 1
        time.sleep(0.05)
        return FieldOverrides(artist="A")

    results: list[ProviderResult] = []
    threads = [threading.Thread(target=lambda: results.append(cache.get_or_fetch(key, fetch))) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert calls == 1
    assert len(results) == 5
    assert all(result == FieldOverrides(artist="A") for result in results)
    assert len(cache) == 1
