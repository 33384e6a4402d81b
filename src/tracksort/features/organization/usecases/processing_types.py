"""src/tracksort/features/organization/usecases/processing_types.py
Where: Organization feature usecases layer.
What: Shared enums and dataclasses for the batch organize flow.
Why: Keep the batch runner lean by centralising type definitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from tracksort.features.path.usecases.path_builder import DestinationPath
from tracksort.shared.track_metadata import CanonicalRecord, FieldOverrides, RawMetadataBundle


class ProcessingEvent(StrEnum):
    """Structured event identifiers for batch processing logs."""

    BATCH_START = "processing.batch.start"
    BATCH_COMPLETE = "processing.batch.complete"
    BATCH_CANCELLED = "processing.batch.cancelled"
    BATCH_NO_FILES = "processing.batch.no_files"
    FILE_START = "processing.file.start"
    FILE_SUCCESS = "processing.file.success"
    FILE_PLANNED = "processing.file.planned"
    FILE_ERROR = "processing.file.error"
    FILE_COPY = "processing.file.copy"
    ARTWORK_COPY = "processing.artwork.copy"
    ARTWORK_PLAN = "processing.artwork.plan"
    ARTWORK_SKIP_EXISTS = "processing.artwork.skip.exists"
    ARTWORK_ERROR = "processing.artwork.error"
    PLAYLIST_REMOVE = "processing.playlist.remove"
    PLAYLIST_PLAN = "processing.playlist.plan"


class ProcessingStage(StrEnum):
    """Where in the per-file pipeline an error happened."""

    EXTRACT = "extract"
    LOOKUP = "lookup"
    RESOLVE = "resolve"
    PATH = "path"
    COPY = "copy"
    ARTWORK = "artwork"


@dataclass
class ArtworkProcessingResult:
    """Outcome of copying one artwork file next to organized tracks."""

    source_path: Path
    target_path: Path
    copied: bool
    dry_run: bool
    reason: str | None = None


@dataclass
class PlannedTrack:
    """Everything computed for a file before anything is written.

    ``error_stage``/``error_message`` are set when planning stopped early; the
    fields after the failing stage stay ``None``.
    """

    source_path: Path
    bundle: RawMetadataBundle
    overrides: FieldOverrides | None = None
    record: CanonicalRecord | None = None
    destination: DestinationPath | None = None
    error_stage: ProcessingStage | None = None
    error_message: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error_stage is None and self.destination is not None


__all__ = [
    "ArtworkProcessingResult",
    "PlannedTrack",
    "ProcessingEvent",
    "ProcessingStage",
]
