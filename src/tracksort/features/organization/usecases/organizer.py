"""Where: src/tracksort/features/organization/usecases/organizer.py
What: Copy tracks and artwork into the output tree and police destination collisions.
Why: Sources are never modified; writes go through a partial file and an atomic replace.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Final

from tracksort.platform.filesystem import copy_file_atomic, ensure_parent_directory

from .artwork import copy_artwork_files, find_sibling_artwork
from .asset_logging import ProcessLogger, log_processing
from .processing_types import ArtworkProcessingResult


def _claim_key(path: Path) -> str:
    # Case-insensitive so collisions are caught on every filesystem.
    return str(path).casefold()


class Organizer:
    """Apply planned destinations for one batch."""

    def __init__(self, *, dry_run: bool, log: ProcessLogger = log_processing) -> None:
        self.dry_run: bool = dry_run
        self._log: ProcessLogger = log
        self._lock: Final[threading.Lock] = threading.Lock()
        self._claims: dict[str, Path] = {}
        self._artwork_pairs: set[tuple[Path, Path]] = set()

    def claim(self, destination: Path, source: Path) -> Path | None:
        """Reserve ``destination`` for ``source``.

        Returns:
            The source that already holds the destination when it is a
            different file, otherwise None.
        """

        key = _claim_key(destination)
        with self._lock:
            existing = self._claims.get(key)
            if existing is not None and existing != source:
                return existing
            self._claims[key] = source
            return None

    def copy_track(self, source: Path, destination: Path) -> None:
        """Copy ``source`` to ``destination``, overwriting it. No-op in dry run.

        Raises:
            OSError: If the directory tree or the copy cannot be written.
        """

        if self.dry_run:
            return
        _ = ensure_parent_directory(destination)
        copy_file_atomic(source, destination)

    def copy_artwork(
        self,
        source_dir: Path,
        target_dir: Path,
        *,
        sequence: int | None = None,
        total: int | None = None,
        source_root: Path | None = None,
        target_root: Path | None = None,
    ) -> list[ArtworkProcessingResult]:
        """Copy sibling images once per (source dir, target dir) pair."""

        pair = (source_dir, target_dir)
        with self._lock:
            if pair in self._artwork_pairs:
                return []
            self._artwork_pairs.add(pair)

        return copy_artwork_files(
            find_sibling_artwork(source_dir),
            target_dir,
            dry_run=self.dry_run,
            log=self._log,
            sequence=sequence,
            total=total,
            source_root=source_root,
            target_root=target_root,
        )


__all__ = ["Organizer"]
