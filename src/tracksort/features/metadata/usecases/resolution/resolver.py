"""Where: src/tracksort/features/metadata/usecases/resolution/resolver.py
What: Pick one value per field from the raw sources and produce a ``CanonicalRecord``.
Why: Destination paths need complete, cleaned and deterministic metadata.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Final, final

from tracksort.config.settings import MIN_FIELD_LENGTH
from tracksort.shared.track_metadata import (
    DEFAULT_TRACK,
    UNKNOWN_ALBUM,
    UNKNOWN_ARTIST,
    UNKNOWN_TITLE,
    UNKNOWN_YEAR,
    CanonicalRecord,
    FieldOverrides,
    RawFields,
    RawMetadataBundle,
)

from ..genre.classifier import GenreClassifier
from .cleaning import clean_album, clean_artist, clean_text, extract_year, normalize_track

_COMPARED_FIELDS: Final[tuple[str, ...]] = ("artist", "album", "title", "year", "genre", "track")


def _default_title(bundle: RawMetadataBundle) -> str:
    # Parsed file title first so a track prefix never lands in the title.
    for candidate in (bundle.from_file.title, bundle.source_path.stem):
        if candidate is None:
            continue
        cleaned = clean_text(candidate)
        if len(cleaned) >= MIN_FIELD_LENGTH:
            return cleaned
    return UNKNOWN_TITLE


@final
class MetadataResolver:
    """Resolve raw metadata into a canonical record.

    Per field the sources are consulted in the order tag, online override,
    folder name, file name and finally the default. With ``prefer_online`` the
    online override is consulted before the tag.
    """

    def __init__(self, classifier: GenreClassifier | None = None, *, prefer_online: bool = False) -> None:
        self.classifier: GenreClassifier = classifier or GenreClassifier()
        self.prefer_online: bool = prefer_online

    def _candidates(
        self,
        bundle: RawMetadataBundle,
        overrides: FieldOverrides | None,
        field_name: str,
    ) -> Iterator[str]:
        namespaces: list[RawFields | FieldOverrides | None]
        if self.prefer_online:
            namespaces = [overrides, bundle.tag, bundle.from_folder, bundle.from_file]
        else:
            namespaces = [bundle.tag, overrides, bundle.from_folder, bundle.from_file]
        for namespace in namespaces:
            if namespace is None:
                continue
            value = getattr(namespace, field_name)
            if value is not None:
                yield value

    def _first_text(
        self,
        bundle: RawMetadataBundle,
        overrides: FieldOverrides | None,
        field_name: str,
        cleaner: Callable[[str], str],
        default: str,
    ) -> str:
        for value in self._candidates(bundle, overrides, field_name):
            cleaned = cleaner(value)
            return cleaned if len(cleaned) >= MIN_FIELD_LENGTH else default
        return default

    def _first_parsed(
        self,
        bundle: RawMetadataBundle,
        overrides: FieldOverrides | None,
        field_name: str,
        parser: Callable[[str], str | None],
    ) -> str | None:
        for value in self._candidates(bundle, overrides, field_name):
            parsed = parser(value)
            if parsed is not None:
                return parsed
        return None

    def resolve(self, bundle: RawMetadataBundle, overrides: FieldOverrides | None = None) -> CanonicalRecord:
        """Build the canonical record for ``bundle``.

        ``overrides`` holds values suggested by online providers; they are
        merged before cleaning, so the returned record is final.
        """

        artist = self._first_text(bundle, overrides, "artist", clean_artist, UNKNOWN_ARTIST)
        album = self._first_text(bundle, overrides, "album", clean_album, UNKNOWN_ALBUM)
        title = self._first_text(bundle, overrides, "title", clean_text, _default_title(bundle))
        year = self._first_parsed(bundle, overrides, "year", extract_year) or UNKNOWN_YEAR
        track = self._first_parsed(bundle, overrides, "track", normalize_track)

        genre_text = next(iter(self._candidates(bundle, overrides, "genre")), None)
        genre = self.classifier.classify(
            clean_text(genre_text) if genre_text is not None else None,
            artist,
            album,
            bundle.folder_text,
        )

        return CanonicalRecord(
            artist=artist,
            album=album,
            title=title,
            year=year,
            genre=genre,
            track=track or DEFAULT_TRACK,
        )


def was_corrected(bundle: RawMetadataBundle, record: CanonicalRecord) -> bool:
    """Return True when any resolved field differs from the embedded tag value."""

    return any(getattr(bundle.tag, name) != getattr(record, name) for name in _COMPARED_FIELDS)


__all__ = ["MetadataResolver", "was_corrected"]
