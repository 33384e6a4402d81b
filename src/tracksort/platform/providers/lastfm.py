"""Last.fm ``track.getInfo`` provider (requires an API key)."""

from __future__ import annotations

from typing import Any, Final, cast

from tracksort.shared.track_metadata import FieldOverrides

from .base import LookupFailure, LookupFailureKind, ProviderResult, not_found, text_or_none
from .http_client import HTTPClient

LASTFM_API_URL: Final[str] = "https://ws.audioscrobbler.com/2.0/"

# Last.fm error codes meaning "no such track".
_NOT_FOUND_CODES: Final[frozenset[int]] = frozenset({6})
_RATE_LIMIT_CODES: Final[frozenset[int]] = frozenset({29})


def _nested(payload: dict[str, Any], *keys: str) -> object:
    current: object = payload
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = cast(dict[str, Any], current).get(key)
    return current


def parse_track(track: dict[str, Any]) -> FieldOverrides:
    """Convert a ``track`` object into overrides; the first top tag becomes the genre."""

    genre: str | None = None
    tags = _nested(track, "toptags", "tag")
    if isinstance(tags, list) and tags:
        first = cast(list[object], tags)[0]
        if isinstance(first, dict):
            genre = text_or_none(cast(dict[str, Any], first).get("name"))

    position = _nested(track, "album", "@attr", "position")
    return FieldOverrides(
        artist=text_or_none(_nested(track, "artist", "name")),
        album=text_or_none(_nested(track, "album", "title")),
        title=text_or_none(track.get("name")),
        genre=genre,
        track=text_or_none(position),
    )


class LastFmProvider:
    """Query Last.fm for a track by artist and title."""

    name: str = "lastfm"

    def __init__(self, http: HTTPClient, api_key: str) -> None:
        self._http = http
        self._api_key = api_key

    def lookup(self, artist: str | None, album: str | None, title: str | None) -> ProviderResult:
        if not self._api_key:
            return LookupFailure(LookupFailureKind.DISABLED, "Last.fm API key not configured")
        if not artist or not title:
            return not_found("Last.fm lookup needs artist and title")

        result = self._http.get_json(
            LASTFM_API_URL,
            {
                "method": "track.getInfo",
                "api_key": self._api_key,
                "artist": artist,
                "track": title,
                "autocorrect": "1",
                "format": "json",
            },
        )
        if result.failure is not None:
            return result.failure
        if result.data is None:
            return LookupFailure(LookupFailureKind.MALFORMED, "Empty response body")

        error_code = result.data.get("error")
        if isinstance(error_code, int):
            message = str(result.data.get("message") or f"Last.fm error {error_code}")
            if error_code in _NOT_FOUND_CODES:
                return not_found(message)
            if error_code in _RATE_LIMIT_CODES:
                return LookupFailure(LookupFailureKind.RATE_LIMITED, message)
            return LookupFailure(LookupFailureKind.HTTP_ERROR, message)

        track = result.data.get("track")
        if not isinstance(track, dict):
            return LookupFailure(LookupFailureKind.MALFORMED, "Missing track object")

        overrides = parse_track(cast(dict[str, Any], track))
        if overrides.is_empty():
            return not_found("Last.fm track had no usable fields")
        return overrides


__all__ = ["LASTFM_API_URL", "LastFmProvider", "parse_track"]
