"""src/tracksort/features/organization/usecases/batch_runner.py
What: Drive a whole batch: checks, discovery, planning, copying and statistics.
Why: Planning may run on a thread pool, but collisions, copies and statistics are
     applied by one consumer in discovery order so results stay deterministic.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from tracksort.features.metadata.usecases.extraction.bundle_extractor import TagReader, extract_bundle
from tracksort.features.metadata.usecases.extraction.tag_reader import read_embedded_tags
from tracksort.features.metadata.usecases.online.adapter import OnlineCorrectionAdapter
from tracksort.features.metadata.usecases.resolution.resolver import MetadataResolver
from tracksort.features.path.usecases.path_builder import PathBuilder
from tracksort.features.statistics.aggregator import BatchSnapshot, BatchStatistics, FileOutcome
from tracksort.platform.filesystem import is_within
from tracksort.shared.errors import OutputRootError, SourceRootError
from tracksort.shared.track_metadata import RawMetadataBundle

from .artwork import artwork_failures
from .asset_logging import ProcessLogger, log_processing
from .discovery import discover_audio_files, discover_playlists, remove_playlists
from .organizer import Organizer
from .processing_types import PlannedTrack, ProcessingEvent, ProcessingStage

ProgressCallback = Callable[[int, int, Path], None]


@dataclass(frozen=True, slots=True)
class BatchOptions:
    """Per-run switches for a batch."""

    output_root: Path
    dry_run: bool = False
    workers: int = 1
    remove_playlists: bool = False
    prefer_online: bool = False
    copy_artwork: bool = True

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError("workers must be at least 1")


class BatchContext:
    """State owned by one batch run: options, collaborators, statistics and the cancel flag."""

    def __init__(
        self,
        options: BatchOptions,
        *,
        resolver: MetadataResolver | None = None,
        path_builder: PathBuilder | None = None,
        online: OnlineCorrectionAdapter | None = None,
        tag_reader: TagReader = read_embedded_tags,
        log: ProcessLogger = log_processing,
    ) -> None:
        self.options: BatchOptions = options
        self.resolver: MetadataResolver = resolver or MetadataResolver(prefer_online=options.prefer_online)
        self.path_builder: PathBuilder = path_builder or PathBuilder()
        self.online: OnlineCorrectionAdapter | None = online
        self.tag_reader: TagReader = tag_reader
        self.log: ProcessLogger = log
        self.statistics: BatchStatistics = BatchStatistics(dry_run=options.dry_run)
        self.organizer: Organizer = Organizer(dry_run=options.dry_run, log=log)
        self._cancel_event: threading.Event = threading.Event()

    def cancel(self) -> None:
        """Ask the batch to stop after the file currently being committed."""

        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()


def _describe(exc: BaseException) -> str:
    return str(exc) if str(exc) else type(exc).__name__


def check_source_root(source_root: Path) -> Path:
    """Return the resolved source root.

    Raises:
        SourceRootError: If the path is missing or not a directory.
    """

    if not source_root.exists():
        raise SourceRootError(source_root, "does not exist")
    if not source_root.is_dir():
        raise SourceRootError(source_root, "is not a directory")
    return source_root.resolve()


def prepare_output_root(output_root: Path, source_root: Path, *, dry_run: bool) -> Path:
    """Validate (and outside dry runs create) the output root.

    Raises:
        OutputRootError: If the root is a file, equals the source root, or cannot be created.
    """

    resolved = output_root.expanduser().resolve()
    if resolved == source_root:
        raise OutputRootError(output_root, "must differ from the source root")
    if resolved.exists() and not resolved.is_dir():
        raise OutputRootError(output_root, "exists and is not a directory")

    if dry_run:
        ancestor = resolved
        while not ancestor.exists():
            ancestor = ancestor.parent
        if not ancestor.is_dir() or not os.access(ancestor, os.W_OK):
            raise OutputRootError(output_root, f"cannot be created under {ancestor}")
        return resolved

    try:
        resolved.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputRootError(output_root, _describe(exc)) from exc
    if not os.access(resolved, os.W_OK):
        raise OutputRootError(output_root, "is not writable")
    return resolved


class BatchRunner:
    """Organize every supported file under a source root."""

    def __init__(self, context: BatchContext, progress_callback: ProgressCallback | None = None) -> None:
        self.context: BatchContext = context
        self.progress_callback: ProgressCallback | None = progress_callback

    def run(self, source_root: Path) -> BatchSnapshot:
        """Run the batch and return its final snapshot.

        Raises:
            SourceRootError: Before any work when the source root is unusable.
            OutputRootError: Before any work when the output root is unusable.
        """

        context = self.context
        options = context.options
        stats = context.statistics

        source = check_source_root(source_root)
        output = prepare_output_root(options.output_root, source, dry_run=options.dry_run)
        exclude = output if is_within(output, source) else None

        files = discover_audio_files(source, exclude=exclude)
        stats.total_files = len(files)
        self._handle_playlists(source, exclude)

        if not files:
            context.log(
                logging.WARNING,
                ProcessingEvent.BATCH_NO_FILES,
                "No supported music files found [path=%s]",
                source,
                total_files=0,
                dry_run=options.dry_run,
                source_base_path=source,
            )
            return stats.snapshot()

        total = len(files)
        context.log(
            logging.INFO,
            ProcessingEvent.BATCH_START,
            "Batch started [files=%d, workers=%d, dry_run=%s, source=%s, target=%s]",
            total,
            options.workers,
            options.dry_run,
            source,
            output,
            total_files=total,
            dry_run=options.dry_run,
            source_base_path=source,
            target_base_path=output,
        )

        committed = 0
        executor: ThreadPoolExecutor | None = None
        if options.workers > 1:
            executor = ThreadPoolExecutor(max_workers=options.workers, thread_name_prefix="tracksort-plan")
            plans: Iterable[PlannedTrack] = executor.map(lambda path: self._plan(path, source, output), files)
        else:
            plans = self._plan_sequentially(files, source, output)

        try:
            for index, plan in enumerate(plans, start=1):
                if context.cancelled:
                    break
                self._commit(plan, index, total, source, output)
                committed = index
                if self.progress_callback is not None:
                    self.progress_callback(index, total, plan.source_path)
        finally:
            if executor is not None:
                executor.shutdown(wait=True, cancel_futures=True)

        if committed < total:
            stats.mark_cancelled()
            context.log(
                logging.WARNING,
                ProcessingEvent.BATCH_CANCELLED,
                "Batch cancelled [committed=%d, total=%d]",
                committed,
                total,
                total_files=total,
                source_base_path=source,
            )
        snapshot = stats.snapshot()
        if committed == total:
            context.log(
                logging.INFO,
                ProcessingEvent.BATCH_COMPLETE,
                "Batch completed [processed=%d, corrected=%d, failed=%d, duration=%.2fs]",
                snapshot.processed,
                snapshot.corrected,
                snapshot.failed,
                snapshot.duration_seconds,
                total_files=total,
                dry_run=options.dry_run,
                source_base_path=source,
            )
        return snapshot

    def _plan_sequentially(self, files: list[Path], source: Path, output: Path) -> Iterator[PlannedTrack]:
        for path in files:
            if self.context.cancelled:
                return
            yield self._plan(path, source, output)

    def _handle_playlists(self, source: Path, exclude: Path | None) -> None:
        context = self.context
        options = context.options
        playlists = discover_playlists(source, exclude=exclude)
        if not playlists:
            return
        if not options.remove_playlists:
            context.statistics.record_playlists(playlists, removed=False)
            return

        removed, failures = remove_playlists(
            playlists,
            dry_run=options.dry_run,
            log=context.log,
            source_root=source,
        )
        for playlist, message in failures:
            context.statistics.record_warning(playlist, f"Could not remove playlist: {message}")
        if options.dry_run:
            context.statistics.record_playlists(playlists, removed=True)
        else:
            context.statistics.record_playlists(removed, removed=bool(removed))

    def _plan(self, path: Path, source: Path, output: Path) -> PlannedTrack:
        """Compute everything for ``path`` without touching the output tree."""

        context = self.context
        try:
            bundle = extract_bundle(path, source_root=source, tag_reader=context.tag_reader)
        except Exception as exc:
            return PlannedTrack(
                source_path=path,
                bundle=RawMetadataBundle(source_path=path),
                error_stage=ProcessingStage.EXTRACT,
                error_message=_describe(exc),
            )

        plan = PlannedTrack(source_path=path, bundle=bundle)

        if context.online is not None:
            try:
                plan.overrides = context.online.lookup_bundle(
                    bundle, prefer_online=context.options.prefer_online
                )
            except Exception as exc:
                plan.warnings.append(f"Online lookup failed: {_describe(exc)}")

        try:
            plan.record = context.resolver.resolve(bundle, plan.overrides)
        except Exception as exc:
            plan.error_stage = ProcessingStage.RESOLVE
            plan.error_message = _describe(exc)
            return plan

        try:
            plan.destination = context.path_builder.build(plan.record, path.suffix, output)
        except Exception as exc:
            plan.error_stage = ProcessingStage.PATH
            plan.error_message = _describe(exc)
            return plan

        plan.warnings.extend(plan.destination.warnings)
        return plan

    def _fail(self, plan: PlannedTrack, stage: ProcessingStage, message: str, index: int, total: int, source: Path) -> None:
        stats = self.context.statistics
        stats.record_error(plan.source_path, stage.value, message)
        _ = stats.record(
            plan.bundle,
            plan.record,
            plan.destination,
            FileOutcome.FAILED,
            overrides=plan.overrides,
            warnings=plan.warnings,
        )
        self.context.log(
            logging.ERROR,
            ProcessingEvent.FILE_ERROR,
            "Error processing file #%d/%d [stage=%s, name=%s, error=%s]",
            index,
            total,
            stage.value,
            plan.source_path.name,
            message,
            sequence=index,
            total_files=total,
            source_path=plan.source_path,
            source_base_path=source,
            error_message=message,
        )

    def _commit(self, plan: PlannedTrack, index: int, total: int, source: Path, output: Path) -> None:
        """Claim, copy and record one planned file (copy first, then record)."""

        context = self.context
        stats = context.statistics
        dry_run = context.options.dry_run

        context.log(
            logging.DEBUG,
            ProcessingEvent.FILE_START,
            "Processing file #%d/%d [name=%s]",
            index,
            total,
            plan.source_path.name,
            sequence=index,
            total_files=total,
            source_path=plan.source_path,
            source_base_path=source,
        )

        if not plan.ok or plan.destination is None:
            self._fail(
                plan,
                plan.error_stage or ProcessingStage.PATH,
                plan.error_message or "No destination computed",
                index,
                total,
                source,
            )
            return

        destination = plan.destination.full_path
        for warning in plan.warnings:
            stats.record_warning(plan.source_path, warning)

        previous = context.organizer.claim(destination, plan.source_path)
        if previous is not None:
            self._fail(
                plan,
                ProcessingStage.COPY,
                f"Destination {destination} already taken by {previous}",
                index,
                total,
                source,
            )
            return

        try:
            context.organizer.copy_track(plan.source_path, destination)
        except OSError as exc:
            self._fail(plan, ProcessingStage.COPY, _describe(exc), index, total, source)
            return

        if context.options.copy_artwork:
            results = context.organizer.copy_artwork(
                plan.source_path.parent,
                destination.parent,
                sequence=index,
                total=total,
                source_root=source,
                target_root=output,
            )
            for failure in artwork_failures(results):
                stats.record_error(
                    failure.source_path,
                    ProcessingStage.ARTWORK.value,
                    failure.reason or "Artwork copy failed",
                )

        _ = stats.record(
            plan.bundle,
            plan.record,
            plan.destination,
            FileOutcome.SUCCESS,
            overrides=plan.overrides,
            warnings=plan.warnings,
        )
        context.log(
            logging.INFO,
            ProcessingEvent.FILE_PLANNED if dry_run else ProcessingEvent.FILE_SUCCESS,
            "%s file #%d/%d [src=%s, dest=%s]",
            "Planned" if dry_run else "Organized",
            index,
            total,
            plan.source_path,
            destination,
            sequence=index,
            total_files=total,
            source_path=plan.source_path,
            source_base_path=source,
            target_path=destination,
            target_base_path=output,
        )


__all__ = [
    "BatchContext",
    "BatchOptions",
    "BatchRunner",
    "ProgressCallback",
    "check_source_root",
    "prepare_output_root",
]
