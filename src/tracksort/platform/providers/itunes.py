"""iTunes Search API provider.

Free and unauthenticated. Results carry a primary genre which the classifier
folds into the canonical taxonomy.
"""

from __future__ import annotations

from typing import Any, Final, cast

from tracksort.shared.track_metadata import FieldOverrides

from .base import LookupFailure, LookupFailureKind, ProviderResult, not_found, text_or_none, year_from_date
from .http_client import HTTPClient

ITUNES_SEARCH_URL: Final[str] = "https://itunes.apple.com/search"


def parse_song(item: dict[str, Any]) -> FieldOverrides:
    """Convert one ``wrapperType == track`` search result into overrides."""

    return FieldOverrides(
        artist=text_or_none(item.get("artistName")),
        album=text_or_none(item.get("collectionName")),
        title=text_or_none(item.get("trackName")),
        year=year_from_date(item.get("releaseDate")),
        genre=text_or_none(item.get("primaryGenreName")),
        track=text_or_none(item.get("trackNumber")),
    )


class ITunesProvider:
    """Search songs on the iTunes Store catalogue."""

    name: str = "itunes"

    def __init__(self, http: HTTPClient, *, country: str = "us", limit: int = 5) -> None:
        self._http = http
        self._country = country
        self._limit = limit

    def lookup(self, artist: str | None, album: str | None, title: str | None) -> ProviderResult:
        if not title:
            return not_found("iTunes lookup needs a title")

        term = " ".join(part for part in (artist, title) if part)
        result = self._http.get_json(
            ITUNES_SEARCH_URL,
            {
                "term": term,
                "entity": "song",
                "media": "music",
                "country": self._country,
                "limit": str(self._limit),
            },
        )
        if result.failure is not None:
            return result.failure
        if result.data is None:
            return LookupFailure(LookupFailureKind.MALFORMED, "Empty response body")

        raw_results = result.data.get("results")
        if not isinstance(raw_results, list):
            return LookupFailure(LookupFailureKind.MALFORMED, "Missing results list")

        songs = [
            cast(dict[str, Any], item)
            for item in cast(list[object], raw_results)
            if isinstance(item, dict) and cast(dict[str, Any], item).get("wrapperType") == "track"
        ]
        if not songs:
            return not_found(f"No iTunes song matched {term!r}")

        chosen = songs[0]
        if album:
            wanted = album.casefold()
            for song in songs:
                collection = song.get("collectionName")
                if isinstance(collection, str) and collection.casefold() == wanted:
                    chosen = song
                    break

        return parse_song(chosen)


__all__ = ["ITUNES_SEARCH_URL", "ITunesProvider", "parse_song"]
