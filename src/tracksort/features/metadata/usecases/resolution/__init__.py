"""Metadata resolution: source priority, cleaning and validation."""

from .cleaning import clean_album, clean_artist, clean_text, extract_year, normalize_track
from .resolver import MetadataResolver, was_corrected

__all__ = [
    "MetadataResolver",
    "clean_album",
    "clean_artist",
    "clean_text",
    "extract_year",
    "normalize_track",
    "was_corrected",
]
