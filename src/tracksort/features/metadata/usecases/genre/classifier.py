"""Genre classification into the canonical taxonomy."""

from __future__ import annotations

from typing import final

from tracksort.shared.track_metadata import UNKNOWN_ALBUM, UNKNOWN_ARTIST

from .taxonomy import GenreTaxonomy, default_taxonomy

_PLACEHOLDERS: frozenset[str] = frozenset({UNKNOWN_ARTIST.casefold(), UNKNOWN_ALBUM.casefold()})


@final
class GenreClassifier:
    """Map free-form genre, artist, album and folder text to one canonical genre.

    Stages, first match wins:

    1. ``existing_genre`` already canonical (exact match).
    2. Keyword scan of ``existing_genre``.
    3. Keyword scan of artist, then album, then folder text.
    4. Artist table (exact, then containment either way).
    5. The taxonomy default.
    """

    def __init__(self, taxonomy: GenreTaxonomy | None = None) -> None:
        self.taxonomy: GenreTaxonomy = taxonomy or default_taxonomy()

    def classify(
        self,
        existing_genre: str | None,
        artist: str | None,
        album: str | None = None,
        folder_text: str | None = None,
    ) -> str:
        if existing_genre is not None and existing_genre in self.taxonomy.canonical:
            return existing_genre

        for text in (existing_genre, artist, album, folder_text):
            if text is None or text.strip().casefold() in _PLACEHOLDERS:
                continue
            match = self._scan_keywords(text)
            if match is not None:
                return match

        if artist is not None and artist.strip().casefold() not in _PLACEHOLDERS:
            match = self._match_artist(artist)
            if match is not None:
                return match

        return self.taxonomy.default

    def _scan_keywords(self, text: str) -> str | None:
        haystack = text.casefold()
        for genre, keywords in self.taxonomy.keywords:
            if any(keyword in haystack for keyword in keywords):
                return genre
        return None

    def _match_artist(self, artist: str) -> str | None:
        needle = artist.strip().casefold()
        if not needle:
            return None
        for name, genre in self.taxonomy.artists:
            if name.casefold() == needle:
                return genre
        for name, genre in self.taxonomy.artists:
            mapped = name.casefold()
            if mapped in needle or needle in mapped:
                return genre
        return None


__all__ = ["GenreClassifier"]
