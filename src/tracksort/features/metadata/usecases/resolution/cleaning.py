"""Text normalisation rules applied to resolved metadata fields.

Where: src/tracksort/features/metadata/usecases/resolution/cleaning.py
What: Pure functions cleaning artist/album/title text and parsing year/track values.
Why: Folder names must not fragment on articles, guest credits or edition suffixes.
"""

from __future__ import annotations

import re
from typing import Final

__all__ = [
    "clean_album",
    "clean_artist",
    "clean_text",
    "extract_year",
    "normalize_track",
]

_WHITESPACE: Final[re.Pattern[str]] = re.compile(r"\s+")
_LEADING_ARTICLE: Final[re.Pattern[str]] = re.compile(r"^(?:the|a|an)\s+", re.IGNORECASE)
_FEATURING: Final[re.Pattern[str]] = re.compile(
    r"(?:\s*[\(\[]\s*|\s+)(?:featuring|feat|ft)\b\.?.*$",
    re.IGNORECASE,
)
_TRAILING_PARENTHETICAL: Final[re.Pattern[str]] = re.compile(r"\s*\([^()]*\)\s*$")
_EDITION_SUFFIX: Final[re.Pattern[str]] = re.compile(
    r"\s*[\(\[]\s*(?:(?:19|20)\d{2}\s+)?(?:deluxe|remaster|special|expanded)[^\)\]]*[\)\]]\s*$",
    re.IGNORECASE,
)
_YEAR_TOKEN: Final[re.Pattern[str]] = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")
_DIGITS: Final[re.Pattern[str]] = re.compile(r"\d+")


def clean_text(value: str) -> str:
    """Collapse runs of whitespace and trim."""

    return _WHITESPACE.sub(" ", value).strip()


def _strip_repeatedly(pattern: re.Pattern[str], value: str) -> str:
    previous = None
    while previous != value:
        previous = value
        value = pattern.sub("", value).strip()
    return value


def clean_artist(value: str) -> str:
    """Drop guest credits, trailing parentheticals and a leading article."""

    text = clean_text(value)
    text = _FEATURING.sub("", text).strip()
    text = _strip_repeatedly(_TRAILING_PARENTHETICAL, text)
    text = _LEADING_ARTICLE.sub("", text)
    return clean_text(text)


def clean_album(value: str) -> str:
    """Drop deluxe/remaster/special/expanded edition suffixes."""

    return clean_text(_strip_repeatedly(_EDITION_SUFFIX, clean_text(value)))


def extract_year(value: str) -> str | None:
    """Return the first ``19xx``/``20xx`` token of ``value``."""

    match = _YEAR_TOKEN.search(value)
    return match.group(1) if match else None


def normalize_track(value: str) -> str | None:
    """Zero-pad the first digit run of ``value`` when it lies in ``1..99``."""

    match = _DIGITS.search(value)
    if match is None:
        return None
    number = int(match.group(0))
    if not 1 <= number <= 99:
        return None
    return f"{number:02d}"
