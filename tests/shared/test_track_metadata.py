"""Tests for the shared metadata records."""

from __future__ import annotations

from pathlib import Path

from tracksort.shared.track_metadata import (
    CanonicalRecord,
    ExtractionError,
    ExtractionErrorKind,
    FieldOverrides,
    RawFields,
    RawMetadataBundle,
)


def test_merge_missing_keeps_earlier_values_and_tracks_sources() -> None:
    first = FieldOverrides(artist="Nirvana", sources={"artist": "musicbrainz"})
    second = FieldOverrides(artist="NIRVANA", album="Bleach", year="1989")

    merged = first.merge_missing(second, "itunes")

    assert merged.artist == "Nirvana"
    assert merged.album == "Bleach"
    assert merged.year == "1989"
    assert merged.sources == {"artist": "musicbrainz", "album": "itunes", "year": "itunes"}


def test_merge_missing_returns_self_when_nothing_new() -> None:
    first = FieldOverrides(artist="Nirvana")
    assert first.merge_missing(FieldOverrides(), "itunes") is first


def test_emptiness_checks() -> None:
    assert RawFields().is_empty()
    assert not RawFields(duration=3.0).is_empty()
    assert FieldOverrides().is_empty()
    assert not FieldOverrides(track="3").is_empty()


def test_canonical_record_defaults_are_complete() -> None:
    record = CanonicalRecord()
    assert all(record.to_dict().values())
    assert not record.has_year
    assert CanonicalRecord(year="1991").has_year


def test_bundle_serializes_tag_error() -> None:
    bundle = RawMetadataBundle(
        source_path=Path("a.mp3"),
        tag_error=ExtractionError(ExtractionErrorKind.UNREADABLE, "boom"),
    )
    data = bundle.to_dict()
    assert data["tag_error"] == {"kind": "unreadable", "message": "boom"}
    assert data["tag"]["title"] is None
