# Where: tracksort.shared.track_metadata
# What: Typed metadata records shared across extraction, resolution and path building.
# Why: Keep one definition of raw and canonical track identities for every feature.

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from enum import StrEnum
from pathlib import Path
from typing import Any, Final

UNKNOWN_ARTIST: Final[str] = "Unknown Artist"
UNKNOWN_ALBUM: Final[str] = "Unknown Album"
UNKNOWN_TITLE: Final[str] = "Unknown Title"
UNKNOWN_YEAR: Final[str] = "Unknown"
DEFAULT_GENRE: Final[str] = "Pop"
DEFAULT_TRACK: Final[str] = "01"

# Fields an online provider may override.
OVERRIDABLE_FIELDS: Final[tuple[str, ...]] = ("artist", "album", "title", "year", "genre", "track")


@dataclass(frozen=True, slots=True)
class RawFields:
    """One namespace of raw metadata; ``None`` means absent."""

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    year: str | None = None
    genre: str | None = None
    track: str | None = None
    duration: float | None = None

    def is_empty(self) -> bool:
        """Return True when no field is present."""

        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ExtractionErrorKind(StrEnum):
    """Why the embedded tag namespace could not be read."""

    UNSUPPORTED_FORMAT = "unsupported_format"
    UNREADABLE = "unreadable"
    MISSING_FILE = "missing_file"


@dataclass(frozen=True, slots=True)
class ExtractionError:
    """Failure reading embedded tags for a file."""

    kind: ExtractionErrorKind
    message: str


@dataclass(frozen=True, slots=True)
class RawMetadataBundle:
    """Raw metadata for one file collected from tags, folder name and file name."""

    source_path: Path
    tag: RawFields = field(default_factory=RawFields)
    from_folder: RawFields = field(default_factory=RawFields)
    from_file: RawFields = field(default_factory=RawFields)
    folder_text: str | None = None
    tag_error: ExtractionError | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the bundle for manifests."""

        return {
            "source_path": str(self.source_path),
            "tag": self.tag.to_dict(),
            "from_folder": self.from_folder.to_dict(),
            "from_file": self.from_file.to_dict(),
            "folder_text": self.folder_text,
            "tag_error": (
                {"kind": self.tag_error.kind.value, "message": self.tag_error.message}
                if self.tag_error is not None
                else None
            ),
        }


@dataclass(frozen=True, slots=True)
class FieldOverrides:
    """Partial field values supplied by online metadata providers.

    Attributes:
        sources: Maps each populated field name to the provider that supplied it.
    """

    artist: str | None = None
    album: str | None = None
    title: str | None = None
    year: str | None = None
    genre: str | None = None
    track: str | None = None
    sources: dict[str, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in OVERRIDABLE_FIELDS)

    def merge_missing(self, other: FieldOverrides, provider: str) -> FieldOverrides:
        """Return a copy filled with ``other``'s values for fields still unset here."""

        updates: dict[str, Any] = {}
        sources = dict(self.sources)
        for name in OVERRIDABLE_FIELDS:
            if getattr(self, name) is not None:
                continue
            value = getattr(other, name)
            if value is None:
                continue
            updates[name] = value
            sources[name] = other.sources.get(name, provider)
        if not updates:
            return self
        return replace(self, sources=sources, **updates)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class CanonicalRecord:
    """Resolved, filesystem-ready identity of a track. Every field is populated."""

    artist: str = UNKNOWN_ARTIST
    album: str = UNKNOWN_ALBUM
    title: str = UNKNOWN_TITLE
    year: str = UNKNOWN_YEAR
    genre: str = DEFAULT_GENRE
    track: str = DEFAULT_TRACK

    @property
    def has_year(self) -> bool:
        return self.year != UNKNOWN_YEAR

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


__all__ = [
    "CanonicalRecord",
    "DEFAULT_GENRE",
    "DEFAULT_TRACK",
    "ExtractionError",
    "ExtractionErrorKind",
    "FieldOverrides",
    "OVERRIDABLE_FIELDS",
    "RawFields",
    "RawMetadataBundle",
    "UNKNOWN_ALBUM",
    "UNKNOWN_ARTIST",
    "UNKNOWN_TITLE",
    "UNKNOWN_YEAR",
]
