"""Tag utility helpers.

Where: src/tracksort/features/metadata/usecases/extraction/_tag_utils.py
What: Pure helpers coercing mutagen tag values into plain optional strings.
Why: Each container format wraps values differently (lists, ID3 frames, APE/ASF values).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final, cast

__all__ = [
    "CANDIDATE_KEYS",
    "blank_to_none",
    "coerce_first_text",
    "first_tag_value",
]

# Candidate keys per field: easy ID3 / easy MP4 / Vorbis first, then APEv2,
# ASF (WMA) and raw ID3 frames as found in WAV and AIFF containers.
CANDIDATE_KEYS: Final[dict[str, tuple[str, ...]]] = {
    "title": ("title", "Title", "TITLE", "TIT2"),
    "artist": ("artist", "Artist", "ARTIST", "Author", "TPE1", "albumartist", "WM/AlbumArtist", "TPE2"),
    "album": ("album", "Album", "ALBUM", "WM/AlbumTitle", "TALB"),
    "year": ("date", "year", "Year", "DATE", "originaldate", "WM/Year", "TDRC", "TYER", "TDOR"),
    "genre": ("genre", "Genre", "GENRE", "WM/Genre", "TCON"),
    "track": ("tracknumber", "Track", "TRACKNUMBER", "WM/TrackNumber", "TRCK"),
}


def blank_to_none(value: str | None) -> str | None:
    """Return ``value`` stripped, or None when it is blank."""

    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def coerce_first_text(value: object) -> str | None:
    """Reduce a mutagen tag value to its first textual element."""

    if value is None:
        return None
    if isinstance(value, bytes):
        return blank_to_none(value.decode("utf-8", errors="replace"))
    if isinstance(value, str):
        return blank_to_none(value)
    if isinstance(value, (list, tuple)):
        items = cast(list[object], list(cast(Any, value)))
        for item in items:
            text = coerce_first_text(item)
            if text is not None:
                return text
        return None
    # ID3 text frames expose their values through ``.text``.
    frame_text = getattr(value, "text", None)
    if isinstance(frame_text, list):
        return coerce_first_text(cast(list[object], frame_text))
    # APEv2 and ASF values, ID3 timestamps and MP4 (track, total) pairs stringify cleanly.
    return blank_to_none(str(value))


def first_tag_value(tags: Mapping[str, object] | Any, field_name: str) -> str | None:
    """Return the first non-blank value among the candidate keys for ``field_name``."""

    for key in CANDIDATE_KEYS[field_name]:
        try:
            raw = tags[key]
        except (KeyError, ValueError, TypeError):
            continue
        text = coerce_first_text(raw)
        if text is not None:
            return text
    return None
