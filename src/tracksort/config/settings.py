"""Where: src/tracksort/config/settings.py
What: Fixed runtime settings shared by the feature layers.
Why: Expose validated constants to feature layers without file I/O.
"""

from __future__ import annotations

from typing import Final

# Audio formats picked up by directory discovery.
SUPPORTED_AUDIO_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".mp3", ".flac", ".wav", ".m4a", ".aac", ".ogg", ".wma", ".ape", ".wv"}
)

# Sibling images copied next to organized tracks.
SUPPORTED_IMAGE_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".jpg", ".jpeg", ".png", ".bmp", ".gif", ".tiff"}
)

PLAYLIST_EXTENSIONS: Final[frozenset[str]] = frozenset({".m3u"})

# Path length ceiling used when the configuration does not override it.
DEFAULT_PATH_MAX_LENGTH: Final[int] = 250

# Titles are not truncated below this many characters.
MIN_TRUNCATED_TITLE_LENGTH: Final[int] = 10

# Artist, album and title values shorter than this fall back to defaults.
MIN_FIELD_LENGTH: Final[int] = 2

PARTIAL_COPY_SUFFIX: Final[str] = ".partial"

# MusicBrainz recommends a User-Agent of the form:
#   "AppName/AppVersion (contact-url-or-email)"
# See: https://musicbrainz.org/doc/MusicBrainz_API/Best_Practices#User-Agent
MB_APP_NAME: Final[str] = "tracksort"
MB_APP_VERSION: Final[str] = "0.1.0"
MB_CONTACT: Final[str] = ""


__all__ = [
    "DEFAULT_PATH_MAX_LENGTH",
    "MB_APP_NAME",
    "MB_APP_VERSION",
    "MB_CONTACT",
    "MIN_FIELD_LENGTH",
    "MIN_TRUNCATED_TITLE_LENGTH",
    "PARTIAL_COPY_SUFFIX",
    "PLAYLIST_EXTENSIONS",
    "SUPPORTED_AUDIO_EXTENSIONS",
    "SUPPORTED_IMAGE_EXTENSIONS",
]
