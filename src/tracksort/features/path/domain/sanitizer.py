"""File and path name sanitization functionality."""

import re
import unicodedata
from typing import ClassVar, final


@final
class Sanitizer:
    """Sanitize single path components for every mainstream filesystem."""

    # Characters illegal on Windows or used as separators, plus brackets and control characters
    FORBIDDEN: ClassVar[re.Pattern[str]] = re.compile(r'[\\/:*?"<>|\[\](){}\x00-\x1f\x7f-\x9f]')

    # Runs of whitespace
    WHITESPACE: ClassVar[re.Pattern[str]] = re.compile(r"\s+")

    RESERVED_NAMES: ClassVar[frozenset[str]] = frozenset(
        {"CON", "PRN", "AUX", "NUL"}
        | {f"COM{index}" for index in range(1, 10)}
        | {f"LPT{index}" for index in range(1, 10)}
    )

    REPLACEMENT: ClassVar[str] = "_"

    @classmethod
    def sanitize_component(cls, text: str) -> str:
        """Make ``text`` safe to use as one directory or file name.

        Args:
            text: Raw component text.

        Returns:
            str: Text with:
                - Normalized Unicode characters (NFKC)
                - Forbidden and control characters replaced with ``_``
                - Whitespace collapsed and trimmed
                - No trailing dots or spaces
                - Windows device names (``CON``, ``NUL``, ``COM1`` ...) suffixed with ``_``

            Applying it twice gives the same result as applying it once.
        """
        text = unicodedata.normalize("NFKC", text)
        text = cls.FORBIDDEN.sub(cls.REPLACEMENT, text)
        text = cls.WHITESPACE.sub(" ", text).strip()
        text = text.rstrip(" .")

        stem, dot, rest = text.partition(".")
        if stem.upper() in cls.RESERVED_NAMES:
            text = f"{stem}{cls.REPLACEMENT}{dot}{rest}"

        return text
