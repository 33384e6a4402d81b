"""Where: src/tracksort/features/statistics/aggregator.py
What: Thread-safe batch statistics and the immutable snapshot handed to callers.
Why: Counters, per-file manifest entries and errors must be reported identically
     for dry runs and real runs.
"""

from __future__ import annotations

import threading
import time
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final

from tracksort.features.metadata.usecases.resolution.resolver import was_corrected
from tracksort.features.path.usecases.path_builder import DestinationPath
from tracksort.shared.track_metadata import CanonicalRecord, FieldOverrides, RawMetadataBundle


class FileOutcome(StrEnum):
    """Final state of one file in a batch."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ErrorEntry:
    """A failure recorded against one file and processing stage."""

    file: Path
    stage: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"file": str(self.file), "stage": self.stage, "message": self.message}


@dataclass(frozen=True, slots=True)
class WarningEntry:
    file: Path
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"file": str(self.file), "message": self.message}


@dataclass(frozen=True, slots=True)
class ManifestEntry:
    """Everything known about one file after the batch decided its fate."""

    original_path: Path
    new_path: Path | None
    raw: RawMetadataBundle
    record: CanonicalRecord | None
    online: FieldOverrides | None
    corrected: bool
    warnings: tuple[str, ...]
    outcome: FileOutcome

    def to_dict(self) -> dict[str, Any]:
        return {
            "original_path": str(self.original_path),
            "new_path": str(self.new_path) if self.new_path is not None else None,
            "raw": self.raw.to_dict(),
            "resolved": self.record.to_dict() if self.record is not None else None,
            "online": self.online.to_dict() if self.online is not None else None,
            "corrected": self.corrected,
            "warnings": list(self.warnings),
            "outcome": self.outcome.value,
        }


def _empty_counts() -> Mapping[str, int]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class BatchSnapshot:
    """Read-only view of a batch's statistics at one point in time."""

    dry_run: bool
    total_files: int = 0
    processed: int = 0
    corrected: int = 0
    failed: int = 0
    cancelled: bool = False
    duration_seconds: float = 0.0
    genres: Mapping[str, int] = field(default_factory=_empty_counts)
    artists: Mapping[str, int] = field(default_factory=_empty_counts)
    albums: Mapping[str, int] = field(default_factory=_empty_counts)
    years: Mapping[str, int] = field(default_factory=_empty_counts)
    entries: tuple[ManifestEntry, ...] = ()
    errors: tuple[ErrorEntry, ...] = ()
    warnings: tuple[WarningEntry, ...] = ()
    playlists: tuple[Path, ...] = ()
    playlists_removed: bool = False

    @property
    def has_failures(self) -> bool:
        return self.failed > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "dry_run": self.dry_run,
            "total_files": self.total_files,
            "processed": self.processed,
            "corrected": self.corrected,
            "failed": self.failed,
            "cancelled": self.cancelled,
            "duration_seconds": round(self.duration_seconds, 4),
            "genres": dict(self.genres),
            "artists": dict(self.artists),
            "albums": dict(self.albums),
            "years": dict(self.years),
            "files": [entry.to_dict() for entry in self.entries],
            "errors": [error.to_dict() for error in self.errors],
            "warnings": [warning.to_dict() for warning in self.warnings],
            "playlists": [str(path) for path in self.playlists],
            "playlists_removed": self.playlists_removed,
        }


def _frozen_counts(counter: Counter[str]) -> Mapping[str, int]:
    return MappingProxyType(dict(sorted(counter.items())))


class BatchStatistics:
    """Collect per-file results for one batch run."""

    def __init__(self, dry_run: bool) -> None:
        self.dry_run: bool = dry_run
        self.total_files: int = 0
        self._lock: Final[threading.Lock] = threading.Lock()
        self._start: float = time.perf_counter()
        self._processed = 0
        self._corrected = 0
        self._failed = 0
        self._cancelled = False
        self._genres: Counter[str] = Counter()
        self._artists: Counter[str] = Counter()
        self._albums: Counter[str] = Counter()
        self._years: Counter[str] = Counter()
        self._entries: list[ManifestEntry] = []
        self._errors: list[ErrorEntry] = []
        self._warnings: list[WarningEntry] = []
        self._playlists: tuple[Path, ...] = ()
        self._playlists_removed = False

    def record(
        self,
        bundle: RawMetadataBundle,
        record: CanonicalRecord | None,
        destination: DestinationPath | None,
        outcome: FileOutcome,
        *,
        overrides: FieldOverrides | None = None,
        warnings: Iterable[str] = (),
    ) -> ManifestEntry:
        """Record the final outcome of one file.

        Only successful files feed the genre, artist, album and year counters.
        """

        corrected = record is not None and was_corrected(bundle, record)
        entry = ManifestEntry(
            original_path=bundle.source_path,
            new_path=destination.full_path if destination is not None else None,
            raw=bundle,
            record=record,
            online=overrides,
            corrected=corrected,
            warnings=tuple(warnings),
            outcome=outcome,
        )
        with self._lock:
            self._entries.append(entry)
            if outcome is FileOutcome.SUCCESS and record is not None:
                self._processed += 1
                if corrected:
                    self._corrected += 1
                self._genres[record.genre] += 1
                self._artists[record.artist] += 1
                self._albums[f"{record.artist} / {record.album}"] += 1
                self._years[record.year] += 1
            else:
                self._failed += 1
        return entry

    def record_error(self, file: Path, stage: str, message: str) -> None:
        with self._lock:
            self._errors.append(ErrorEntry(file=file, stage=stage, message=message))

    def record_warning(self, file: Path, message: str) -> None:
        with self._lock:
            self._warnings.append(WarningEntry(file=file, message=message))

    def record_playlists(self, playlists: Iterable[Path], *, removed: bool) -> None:
        with self._lock:
            self._playlists = tuple(playlists)
            self._playlists_removed = removed

    def mark_cancelled(self) -> None:
        with self._lock:
            self._cancelled = True

    def snapshot(self) -> BatchSnapshot:
        """Return an immutable copy of the current state."""

        with self._lock:
            return BatchSnapshot(
                dry_run=self.dry_run,
                total_files=self.total_files,
                processed=self._processed,
                corrected=self._corrected,
                failed=self._failed,
                cancelled=self._cancelled,
                duration_seconds=time.perf_counter() - self._start,
                genres=_frozen_counts(self._genres),
                artists=_frozen_counts(self._artists),
                albums=_frozen_counts(self._albums),
                years=_frozen_counts(self._years),
                entries=tuple(self._entries),
                errors=tuple(self._errors),
                warnings=tuple(self._warnings),
                playlists=self._playlists,
                playlists_removed=self._playlists_removed,
            )


__all__ = [
    "BatchSnapshot",
    "BatchStatistics",
    "ErrorEntry",
    "FileOutcome",
    "ManifestEntry",
    "WarningEntry",
]
