"""Tests for genre classification and taxonomy overrides."""

from __future__ import annotations

import pytest

from tracksort.features.metadata.usecases.genre.classifier import GenreClassifier
from tracksort.features.metadata.usecases.genre.taxonomy import (
    CANONICAL_GENRES,
    DEFAULT_KEYWORDS,
    GenreTaxonomy,
    default_taxonomy,
)
from tracksort.shared.errors import ConfigError


@pytest.fixture
def classifier() -> GenreClassifier:
    return GenreClassifier()


def test_canonical_genre_is_returned_unchanged(classifier: GenreClassifier) -> None:
    assert classifier.classify("Jazz", "Metallica") == "Jazz"


@pytest.mark.parametrize(
    ("existing", "expected"),
    [
        ("Alternative Rock", "Alternative"),
        ("Melodic Death Metal", "Metal"),
        ("Reggaeton", "Latin"),
        ("Roots Reggae", "Reggae"),
        ("Deep House", "Electronic"),
        ("Neo-Soul", "R&B"),
        ("Synthpop", "Pop"),
        ("Dancehall", "Reggae"),
        ("Rocksteady", "Reggae"),
        ("Dance-Pop", "Pop"),
        ("Chamber Pop", "Pop"),
        ("K-Pop", "World"),
        ("Original Motion Picture Soundtrack", "Soundtrack"),
    ],
)
def test_keyword_scan_of_existing_genre(classifier: GenreClassifier, existing: str, expected: str) -> None:
    assert classifier.classify(existing, None) == expected


def test_existing_genre_scan_runs_before_artist(classifier: GenreClassifier) -> None:
    assert classifier.classify("bebop", "Metallica") == "Jazz"


def test_artist_album_and_folder_are_scanned_in_order(classifier: GenreClassifier) -> None:
    assert classifier.classify(None, "Some Band", "Nocturnes", "Jazz Classics/Nocturnes") == "Jazz"
    assert classifier.classify("Misc", "Some Band", "Symphony No. 5", "Jazz Classics") == "Classical"


def test_artist_table_exact_then_containment(classifier: GenreClassifier) -> None:
    assert classifier.classify(None, "Radiohead") == "Alternative"
    assert classifier.classify(None, "Miles Davis Quintet") == "Jazz"


def test_placeholders_fall_back_to_default(classifier: GenreClassifier) -> None:
    assert classifier.classify(None, "Unknown Artist", "Unknown Album", None) == "Pop"
    assert classifier.classify(None, None) == "Pop"


def test_result_is_always_canonical(classifier: GenreClassifier) -> None:
    samples = [
        (None, None, None, None),
        ("", "", "", ""),
        ("Schlager", "Helene Fischer", "Farbenspiel", "Deutsch/2013"),
        ("Vaporwave", "Macintosh Plus", "Floral Shoppe", None),
        ("Metal", None, None, None),
        ("garage rock revival", "The Strokes", None, None),
        ("???", "!!!", "###", "///"),
    ]
    for existing, artist, album, folder in samples:
        assert classifier.classify(existing, artist, album, folder) in CANONICAL_GENRES


def test_user_tables_are_consulted() -> None:
    taxonomy = default_taxonomy().with_overrides(
        keywords={"Electronic": ["Chiptune"]},
        artists={"Burial": "Electronic", "Drake": "R&B"},
    )
    classifier = GenreClassifier(taxonomy)

    assert classifier.classify("chiptune", None) == "Electronic"
    assert classifier.classify(None, "Burial") == "Electronic"
    # User artist mappings come before the built-in ones.
    assert classifier.classify(None, "Drake") == "R&B"
    assert GenreClassifier().classify(None, "Drake") == "Hip-Hop"


def test_overrides_must_target_canonical_genres() -> None:
    with pytest.raises(ConfigError):
        _ = default_taxonomy().with_overrides(artists={"Someone": "Vaporwave"})
    with pytest.raises(ConfigError):
        _ = default_taxonomy().with_overrides(keywords={"Vaporwave": ["vapor"]})


def test_taxonomy_rejects_non_canonical_default() -> None:
    with pytest.raises(ConfigError):
        _ = GenreTaxonomy(default="Polka")


def test_no_keyword_is_shadowed_by_an_earlier_genre() -> None:
    shadowed: list[tuple[str, str]] = []
    for index, (genre, keywords) in enumerate(DEFAULT_KEYWORDS):
        for keyword in keywords:
            for earlier_genre, earlier_keywords in DEFAULT_KEYWORDS[:index]:
                if earlier_genre == genre:
                    continue
                shadowed.extend((earlier, keyword) for earlier in earlier_keywords if earlier in keyword)
    assert shadowed == []


def test_user_keywords_extend_the_broad_entry() -> None:
    taxonomy = default_taxonomy().with_overrides(keywords={"Pop": ["schlager"]})

    pop_entries = [words for genre, words in taxonomy.keywords if genre == "Pop"]
    assert "schlager" not in pop_entries[0]
    assert pop_entries[-1][-1] == "schlager"
    assert GenreClassifier(taxonomy).classify("Schlager", None) == "Pop"
