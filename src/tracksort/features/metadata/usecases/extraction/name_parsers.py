"""Folder and file name parsers.

Where: src/tracksort/features/metadata/usecases/extraction/name_parsers.py
What: Recover artist/album/year from album folder names and track/title from file stems.
Why: Untagged rips usually encode their identity in the directory layout.
"""

from __future__ import annotations

import re
from typing import Final

from tracksort.shared.track_metadata import RawFields

from ._tag_utils import blank_to_none

__all__ = ["find_year", "parse_file_name", "parse_folder_name"]

_YEAR: Final[str] = r"(?:19|20)\d{2}"

_PAREN_YEAR: Final[re.Pattern[str]] = re.compile(rf"\(\s*({_YEAR})\s*\)")
_BARE_YEAR: Final[re.Pattern[str]] = re.compile(rf"(?<!\d)({_YEAR})(?!\d)")
_TRAILING_TAGS: Final[re.Pattern[str]] = re.compile(r"(?:\s*\[[^\]]*\])+\s*$")

# Ordered: the first matching pattern wins.
_FOLDER_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(rf"^\(\s*(?P<year>{_YEAR})\s*\)\s*-\s*(?P<artist>.+?)\s+-\s+(?P<album>.+)$"),
    re.compile(rf"^(?P<year>{_YEAR})\s*-\s*(?P<artist>.+?)\s+-\s+(?P<album>.+)$"),
    re.compile(rf"^\(?\s*(?P<year>{_YEAR})\s*\)?\s*-\s*(?P<album>.+)$"),
    re.compile(r"^(?P<artist>.+?)\s+-\s+(?P<album>.+)$"),
)

_TRACK_PREFIX: Final[re.Pattern[str]] = re.compile(r"^\s*(?P<track>\d{1,3})\s*(?:-|\.|_)\s*(?P<title>.+)$")


def find_year(text: str) -> str | None:
    """Return the year token in ``text``; ``(YYYY)`` beats a bare ``YYYY``."""

    paren = _PAREN_YEAR.search(text)
    if paren:
        return paren.group(1)
    bare = _BARE_YEAR.search(text)
    return bare.group(1) if bare else None


def parse_folder_name(name: str) -> RawFields:
    """Parse an album directory name.

    Recognised shapes, in priority order::

        (1991) - Nirvana - Nevermind [FLAC]
        1991 - Nirvana - Nevermind
        (1989) - Bleach / 1989 - Bleach
        Nirvana - Nevermind [320]

    Trailing ``[...]`` tags never end up in the album. A name matching none of
    the shapes contributes only its year, if any.
    """

    year = find_year(name)
    stripped = _TRAILING_TAGS.sub("", name).strip()
    for pattern in _FOLDER_PATTERNS:
        match = pattern.match(stripped)
        if match is None:
            continue
        groups = match.groupdict()
        return RawFields(
            artist=blank_to_none(groups.get("artist")),
            album=blank_to_none(groups.get("album")),
            year=year,
        )
    return RawFields(year=year)


def parse_file_name(stem: str) -> RawFields:
    """Split a ``NN - Title`` / ``NN. Title`` / ``NN_Title`` stem into track and title."""

    match = _TRACK_PREFIX.match(stem)
    if match is None:
        return RawFields(title=blank_to_none(stem))
    return RawFields(
        title=blank_to_none(match.group("title")),
        track=match.group("track"),
    )
