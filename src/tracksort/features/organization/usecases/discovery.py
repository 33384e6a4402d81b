"""Source tree discovery and playlist cleanup."""

from __future__ import annotations

import logging
from collections.abc import Collection
from pathlib import Path

from tracksort.config.settings import PLAYLIST_EXTENSIONS, SUPPORTED_AUDIO_EXTENSIONS
from tracksort.platform.filesystem import is_within

from .asset_logging import ProcessLogger
from .processing_types import ProcessingEvent


def _discover(root: Path, extensions: Collection[str], exclude: Path | None) -> list[Path]:
    found: list[Path] = []
    for path in root.rglob("*"):
        if path.suffix.lower() not in extensions or not path.is_file():
            continue
        if exclude is not None and is_within(path, exclude):
            continue
        found.append(path)
    return sorted(found)


def discover_audio_files(
    root: Path,
    *,
    exclude: Path | None = None,
    extensions: Collection[str] = SUPPORTED_AUDIO_EXTENSIONS,
) -> list[Path]:
    """Return supported audio files under ``root`` in sorted order, skipping ``exclude``."""

    return _discover(root, extensions, exclude)


def discover_playlists(root: Path, *, exclude: Path | None = None) -> list[Path]:
    return _discover(root, PLAYLIST_EXTENSIONS, exclude)


def remove_playlists(
    playlists: list[Path],
    *,
    dry_run: bool,
    log: ProcessLogger,
    source_root: Path | None = None,
) -> tuple[list[Path], list[tuple[Path, str]]]:
    """Delete ``playlists`` unless ``dry_run``.

    Returns:
        The removed paths and ``(path, error)`` pairs for deletions that failed.
    """

    removed: list[Path] = []
    failures: list[tuple[Path, str]] = []
    for playlist in playlists:
        if dry_run:
            log(
                logging.INFO,
                ProcessingEvent.PLAYLIST_PLAN,
                "Would remove playlist [path=%s]",
                playlist,
                source_path=playlist,
                source_base_path=source_root,
            )
            continue
        try:
            playlist.unlink()
        except OSError as exc:
            failures.append((playlist, str(exc) or type(exc).__name__))
            continue
        removed.append(playlist)
        log(
            logging.INFO,
            ProcessingEvent.PLAYLIST_REMOVE,
            "Removed playlist [path=%s]",
            playlist,
            source_path=playlist,
            source_base_path=source_root,
        )
    return removed, failures


__all__ = ["discover_audio_files", "discover_playlists", "remove_playlists"]
