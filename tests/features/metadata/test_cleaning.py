"""Tests for metadata text cleaning rules."""

from __future__ import annotations

import pytest

from tracksort.features.metadata.usecases.resolution.cleaning import (
    clean_album,
    clean_artist,
    clean_text,
    extract_year,
    normalize_track,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("The Beatles", "Beatles"),
        ("  A   Tribe Called Quest ", "Tribe Called Quest"),
        ("Eminem feat. Rihanna", "Eminem"),
        ("Santana (feat. Rob Thomas)", "Santana"),
        ("Calvin Harris ft Rihanna", "Calvin Harris"),
        ("Artist Name (Live) (Remastered)", "Artist Name"),
        ("Daft Punk", "Daft Punk"),
        ("Taylor Swift", "Taylor Swift"),
        ("Theatre of Tragedy", "Theatre of Tragedy"),
    ],
)
def test_clean_artist(raw: str, expected: str) -> None:
    assert clean_artist(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Nevermind (Deluxe Edition)", "Nevermind"),
        ("OK Computer [2017 Remaster]", "OK Computer"),
        ("Nevermind (Remastered) (Deluxe)", "Nevermind"),
        ("Abbey Road (Special Edition)", "Abbey Road"),
        ("Live at Leeds (Expanded)", "Live at Leeds"),
        ("Bleach", "Bleach"),
    ],
)
def test_clean_album(raw: str, expected: str) -> None:
    assert clean_album(raw) == expected


def test_clean_text_collapses_whitespace() -> None:
    assert clean_text("  About \t a\nGirl  ") == "About a Girl"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1989-06-15", "1989"), ("(2000)", "2000"), ("Unknown", None), ("12345", None), ("1899", None)],
)
def test_extract_year(raw: str, expected: str | None) -> None:
    assert extract_year(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1/13", "01"), ("7", "07"), ("A3", "03"), ("12", "12"), ("0", None), ("100", None), ("", None)],
)
def test_normalize_track(raw: str, expected: str | None) -> None:
    assert normalize_track(raw) == expected
