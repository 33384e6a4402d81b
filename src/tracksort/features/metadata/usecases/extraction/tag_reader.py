"""Embedded tag reader.

Where: src/tracksort/features/metadata/usecases/extraction/tag_reader.py
What: Read title/artist/album/year/genre/track/duration from audio containers via mutagen.
Why: Tags are the highest-priority metadata source; failures must degrade, never raise.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import mutagen
from mutagen import MutagenError

from tracksort.platform.logging import logger
from tracksort.shared.track_metadata import ExtractionError, ExtractionErrorKind, RawFields

from ._tag_utils import first_tag_value

__all__ = ["read_embedded_tags"]


def _open_audio(path: Path) -> Any:
    """Thin wrapper kept for tests patching the mutagen boundary."""

    return mutagen.File(path, easy=True)


def _duration(audio: Any) -> float | None:
    info = getattr(audio, "info", None)
    length = getattr(info, "length", None)
    if isinstance(length, (int, float)) and length > 0:
        return float(length)
    return None


def read_embedded_tags(path: Path) -> RawFields | ExtractionError:
    """Read the embedded tag namespace of ``path``.

    Returns:
        The populated fields, or an ``ExtractionError`` describing why the
        container could not be read.
    """

    if not path.is_file():
        return ExtractionError(ExtractionErrorKind.MISSING_FILE, f"File not found: {path}")

    try:
        audio = _open_audio(path)
    except (MutagenError, OSError) as exc:
        return ExtractionError(ExtractionErrorKind.UNREADABLE, str(exc) or type(exc).__name__)

    if audio is None:
        return ExtractionError(
            ExtractionErrorKind.UNSUPPORTED_FORMAT,
            f"Unrecognised audio container: {path.suffix.lower() or path.name}",
        )

    tags = getattr(audio, "tags", None)
    duration = _duration(audio)
    if tags is None:
        logger.debug("No embedded tags in %s", path)
        return RawFields(duration=duration)

    fields = RawFields(
        title=first_tag_value(tags, "title"),
        artist=first_tag_value(tags, "artist"),
        album=first_tag_value(tags, "album"),
        year=first_tag_value(tags, "year"),
        genre=first_tag_value(tags, "genre"),
        track=first_tag_value(tags, "track"),
        duration=duration,
    )
    logger.debug("Extracted tags from %s: %s", path, fields)
    return fields
