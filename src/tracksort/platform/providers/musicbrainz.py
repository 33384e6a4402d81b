"""Where: src/tracksort/platform/providers/musicbrainz.py
What: MusicBrainz WS2 recording search provider.
Why: Suggest artist, album, year and track number for files with weak tags.
"""

from __future__ import annotations

from typing import Any, Final, cast

from tracksort.shared.track_metadata import FieldOverrides

from .base import LookupFailure, LookupFailureKind, ProviderResult, not_found, text_or_none, year_from_date
from .http_client import HTTPClient

MB_RECORDING_URL: Final[str] = "https://musicbrainz.org/ws/2/recording/"
MIN_SCORE: Final[int] = 90

_LUCENE_SPECIAL: Final[str] = '\\+-!(){}[]^"~*?:/'


def _escape(value: str) -> str:
    return "".join(f"\\{char}" if char in _LUCENE_SPECIAL else char for char in value)


def build_query(artist: str | None, album: str | None, title: str | None) -> str | None:
    """Return a Lucene query for the recording search, or None without a title."""

    if not title:
        return None
    parts = [f'recording:"{_escape(title)}"']
    if artist:
        parts.append(f'artist:"{_escape(artist)}"')
    if album:
        parts.append(f'release:"{_escape(album)}"')
    return " AND ".join(parts)


def _as_dicts(value: object) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [cast(dict[str, Any], item) for item in cast(list[object], value) if isinstance(item, dict)]


def _artist_credit(recording: dict[str, Any]) -> str | None:
    credits = _as_dicts(recording.get("artist-credit"))
    if not credits:
        return None
    pieces: list[str] = []
    for credit in credits:
        name = text_or_none(credit.get("name"))
        if name is None:
            artist = credit.get("artist")
            if isinstance(artist, dict):
                name = text_or_none(cast(dict[str, Any], artist).get("name"))
        if name is None:
            continue
        pieces.append(name + str(credit.get("joinphrase") or ""))
    joined = "".join(pieces).strip()
    return joined or None


def _track_number(release: dict[str, Any]) -> str | None:
    for medium in _as_dicts(release.get("media")):
        for track in _as_dicts(medium.get("track")):
            number = text_or_none(track.get("number"))
            if number:
                return number
    return None


def _top_tag(recording: dict[str, Any]) -> str | None:
    tags = _as_dicts(recording.get("tags"))
    if not tags:
        return None
    best = max(tags, key=lambda tag: int(tag.get("count") or 0))
    return text_or_none(best.get("name"))


def parse_recording(recording: dict[str, Any]) -> FieldOverrides:
    """Convert one recording search hit into field overrides."""

    releases = _as_dicts(recording.get("releases"))
    release = releases[0] if releases else {}
    year = year_from_date(recording.get("first-release-date")) or year_from_date(release.get("date"))
    return FieldOverrides(
        artist=_artist_credit(recording),
        album=text_or_none(release.get("title")),
        title=text_or_none(recording.get("title")),
        year=year,
        genre=_top_tag(recording),
        track=_track_number(release),
    )


class MusicBrainzProvider:
    """Look up recordings through the MusicBrainz WS2 search API."""

    name: str = "musicbrainz"

    def __init__(self, http: HTTPClient, *, min_score: int = MIN_SCORE) -> None:
        self._http = http
        self._min_score = min_score

    def lookup(self, artist: str | None, album: str | None, title: str | None) -> ProviderResult:
        query = build_query(artist, album, title)
        if query is None:
            return not_found("MusicBrainz lookup needs a title")

        result = self._http.get_json(MB_RECORDING_URL, {"query": query, "fmt": "json", "limit": "5"})
        if result.failure is not None:
            return result.failure
        if result.data is None:
            return LookupFailure(LookupFailureKind.MALFORMED, "Empty response body")

        recordings = _as_dicts(result.data.get("recordings"))
        if not recordings:
            return not_found(f"No recording matched {title!r}")

        best = max(recordings, key=lambda item: int(item.get("score") or 0))
        if int(best.get("score") or 0) < self._min_score:
            return not_found(f"Best MusicBrainz score below {self._min_score}")

        overrides = parse_recording(best)
        if overrides.is_empty():
            return not_found("MusicBrainz recording had no usable fields")
        return overrides


__all__ = ["MB_RECORDING_URL", "MusicBrainzProvider", "build_query", "parse_recording"]
