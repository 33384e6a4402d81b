"""src/tracksort/features/organization/usecases/artwork.py
Where: Organization feature usecases layer.
What: Detect and copy artwork images that sit next to source tracks.
Why: Album covers should follow tracks into the organized tree.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from tracksort.config.settings import SUPPORTED_IMAGE_EXTENSIONS
from tracksort.platform.filesystem import copy_file_atomic, ensure_directory

from .asset_logging import ProcessLogger
from .processing_types import ArtworkProcessingResult, ProcessingEvent


def find_sibling_artwork(directory: Path) -> list[Path]:
    """Return the image files directly inside ``directory``, sorted."""

    if not directory.is_dir():
        return []
    try:
        entries = [candidate for candidate in directory.iterdir() if candidate.is_file()]
    except OSError:
        return []
    return sorted(entry for entry in entries if entry.suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS)


def copy_artwork_files(
    artwork_paths: Iterable[Path],
    target_dir: Path,
    *,
    dry_run: bool,
    log: ProcessLogger,
    sequence: int | None = None,
    total: int | None = None,
    source_root: Path | None = None,
    target_root: Path | None = None,
) -> list[ArtworkProcessingResult]:
    """Copy artwork into ``target_dir``; existing targets are left untouched."""

    results: list[ArtworkProcessingResult] = []

    for artwork_path in artwork_paths:
        target_artwork_path = target_dir / artwork_path.name

        if target_artwork_path.exists():
            log(
                logging.INFO,
                ProcessingEvent.ARTWORK_SKIP_EXISTS,
                "Artwork already present [src=%s, dest=%s]",
                artwork_path,
                target_artwork_path,
                sequence=sequence,
                total_files=total,
                source_path=artwork_path,
                source_base_path=source_root,
                target_path=target_artwork_path,
                target_base_path=target_root,
            )
            results.append(
                ArtworkProcessingResult(
                    source_path=artwork_path,
                    target_path=target_artwork_path,
                    copied=False,
                    dry_run=dry_run,
                    reason="target_exists",
                )
            )
            continue

        if dry_run:
            log(
                logging.INFO,
                ProcessingEvent.ARTWORK_PLAN,
                "Planned artwork copy [src=%s, dest=%s]",
                artwork_path,
                target_artwork_path,
                sequence=sequence,
                total_files=total,
                source_path=artwork_path,
                source_base_path=source_root,
                target_path=target_artwork_path,
                target_base_path=target_root,
                dry_run=dry_run,
            )
            results.append(
                ArtworkProcessingResult(
                    source_path=artwork_path,
                    target_path=target_artwork_path,
                    copied=False,
                    dry_run=True,
                )
            )
            continue

        try:
            _ = ensure_directory(target_dir)
            copy_file_atomic(artwork_path, target_artwork_path)
        except OSError as exc:
            error_message = str(exc) if str(exc) else type(exc).__name__
            log(
                logging.ERROR,
                ProcessingEvent.ARTWORK_ERROR,
                "Error copying artwork [src=%s, dest=%s, error=%s]",
                artwork_path,
                target_artwork_path,
                error_message,
                sequence=sequence,
                total_files=total,
                source_path=artwork_path,
                source_base_path=source_root,
                target_path=target_artwork_path,
                target_base_path=target_root,
                error_message=error_message,
            )
            results.append(
                ArtworkProcessingResult(
                    source_path=artwork_path,
                    target_path=target_artwork_path,
                    copied=False,
                    dry_run=dry_run,
                    reason=error_message,
                )
            )
            continue

        log(
            logging.INFO,
            ProcessingEvent.ARTWORK_COPY,
            "Artwork copied [src=%s, dest=%s]",
            artwork_path,
            target_artwork_path,
            sequence=sequence,
            total_files=total,
            source_path=artwork_path,
            source_base_path=source_root,
            target_path=target_artwork_path,
            target_base_path=target_root,
        )
        results.append(
            ArtworkProcessingResult(
                source_path=artwork_path,
                target_path=target_artwork_path,
                copied=True,
                dry_run=False,
            )
        )

    return results


def artwork_failures(results: Iterable[ArtworkProcessingResult]) -> list[ArtworkProcessingResult]:
    """Results that represent real errors (not skips or dry-run plans)."""

    return [
        result
        for result in results
        if not result.copied and result.reason not in (None, "target_exists")
    ]


__all__ = ["artwork_failures", "copy_artwork_files", "find_sibling_artwork"]
