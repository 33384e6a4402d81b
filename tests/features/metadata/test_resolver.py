"""Tests for the metadata resolver's priority chain and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from tracksort.features.metadata.usecases.resolution.resolver import MetadataResolver, was_corrected
from tracksort.shared.track_metadata import (
    CanonicalRecord,
    FieldOverrides,
    RawFields,
    RawMetadataBundle,
)


def _bundle(
    *,
    tag: RawFields | None = None,
    folder: RawFields | None = None,
    file: RawFields | None = None,
    folder_text: str | None = None,
    name: str = "track.mp3",
) -> RawMetadataBundle:
    return RawMetadataBundle(
        source_path=Path("/music") / name,
        tag=tag or RawFields(),
        from_folder=folder or RawFields(),
        from_file=file or RawFields(),
        folder_text=folder_text,
    )


@pytest.fixture
def resolver() -> MetadataResolver:
    return MetadataResolver()


def test_priority_chain_per_field(resolver: MetadataResolver) -> None:
    bundle = _bundle(
        tag=RawFields(artist="Tag Artist"),
        folder=RawFields(artist="Folder Artist", album="Folder Album", year="1994"),
        file=RawFields(title="File Title", track="4"),
    )
    overrides = FieldOverrides(artist="Online Artist", album="Online Album")

    record = resolver.resolve(bundle, overrides)

    assert record.artist == "Tag Artist"
    assert record.album == "Online Album"
    assert record.year == "1994"
    assert record.title == "File Title"
    assert record.track == "04"


def test_prefer_online_consults_overrides_first() -> None:
    bundle = _bundle(tag=RawFields(artist="Nirvanna", title="Blew"))
    overrides = FieldOverrides(artist="Nirvana")

    assert MetadataResolver(prefer_online=True).resolve(bundle, overrides).artist == "Nirvana"
    assert MetadataResolver().resolve(bundle, overrides).artist == "Nirvanna"


def test_empty_bundle_gets_complete_defaults(resolver: MetadataResolver) -> None:
    record = resolver.resolve(_bundle(name="x.mp3"))

    assert record == CanonicalRecord(
        artist="Unknown Artist",
        album="Unknown Album",
        title="Unknown Title",
        year="Unknown",
        genre="Pop",
        track="01",
    )


def test_title_defaults_to_file_stem(resolver: MetadataResolver) -> None:
    assert resolver.resolve(_bundle(name="Interlude.flac")).title == "Interlude"


def test_short_title_defaults_to_parsed_file_title(resolver: MetadataResolver) -> None:
    bundle = _bundle(
        tag=RawFields(title="X", artist="Prince"),
        file=RawFields(title="Something", track="03"),
        name="03 - Something.mp3",
    )

    record = resolver.resolve(bundle)

    assert record.title == "Something"
    assert record.track == "03"


def test_too_short_values_become_defaults(resolver: MetadataResolver) -> None:
    bundle = _bundle(
        tag=RawFields(artist="X", album=" ", title="Real Title"),
        folder=RawFields(artist="Folder Artist"),
    )

    record = resolver.resolve(bundle)

    assert record.artist == "Unknown Artist"
    assert record.album == "Unknown Album"
    assert record.title == "Real Title"


def test_year_and_track_fall_through_unparseable_candidates(resolver: MetadataResolver) -> None:
    bundle = _bundle(
        tag=RawFields(year="unknown", track="0"),
        folder=RawFields(year="1991"),
        file=RawFields(track="03"),
    )

    record = resolver.resolve(bundle)

    assert record.year == "1991"
    assert record.track == "03"


def test_cleaning_applies_to_resolved_values(resolver: MetadataResolver) -> None:
    bundle = _bundle(
        tag=RawFields(
            artist="The Prodigy feat. Someone",
            album="The Fat of the Land (Expanded Edition)",
            title="  Breathe  ",
            year="1997-06-30",
            track="2/10",
        )
    )

    record = resolver.resolve(bundle)

    assert record.artist == "Prodigy"
    assert record.album == "The Fat of the Land"
    assert record.title == "Breathe"
    assert record.year == "1997"
    assert record.track == "02"


def test_genre_uses_folder_text(resolver: MetadataResolver) -> None:
    bundle = _bundle(tag=RawFields(artist="Some Band", title="Song"), folder_text="Jazz/Late Night")
    assert resolver.resolve(bundle).genre == "Jazz"


def test_resolution_is_deterministic(resolver: MetadataResolver) -> None:
    bundle = _bundle(
        tag=RawFields(title="Polly", genre="grunge"),
        folder=RawFields(artist="Nirvana", album="Nevermind", year="1991"),
        folder_text="(1991) - Nirvana - Nevermind",
    )
    overrides = FieldOverrides(track="6")

    assert resolver.resolve(bundle, overrides) == resolver.resolve(bundle, overrides)
    assert MetadataResolver().resolve(bundle, overrides) == resolver.resolve(bundle, overrides)


def test_was_corrected_compares_against_tags(resolver: MetadataResolver) -> None:
    tagged = RawFields(
        artist="Nirvana", album="Bleach", title="Blew", year="1989", genre="Alternative", track="01"
    )
    untouched = _bundle(tag=tagged)
    assert not was_corrected(untouched, resolver.resolve(untouched))

    cleaned = _bundle(tag=RawFields(artist="The Nirvana", title="Blew"))
    assert was_corrected(cleaned, resolver.resolve(cleaned))
