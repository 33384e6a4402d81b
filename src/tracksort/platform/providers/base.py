"""Where: src/tracksort/platform/providers/base.py
What: Capability protocol and failure type shared by online metadata providers.
Why: The correction adapter holds an ordered list of providers, not a class tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable

from tracksort.shared.track_metadata import FieldOverrides


class LookupFailureKind(StrEnum):
    """Reasons a provider lookup produced no data."""

    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    RATE_LIMITED = "rate_limited"
    MALFORMED = "malformed"
    DISABLED = "disabled"


@dataclass(frozen=True, slots=True)
class LookupFailure:
    """A provider lookup that returned nothing usable."""

    kind: LookupFailureKind
    message: str = ""


ProviderResult = FieldOverrides | LookupFailure


@runtime_checkable
class MetadataProvider(Protocol):
    """An online source able to suggest field values for a track."""

    name: str

    def lookup(self, artist: str | None, album: str | None, title: str | None) -> ProviderResult:
        ...


def not_found(message: str = "") -> LookupFailure:
    return LookupFailure(kind=LookupFailureKind.NOT_FOUND, message=message)


def year_from_date(value: object) -> str | None:
    """Return the leading four-digit year of an ISO-like date string."""

    if not isinstance(value, str):
        return None
    candidate = value.strip()[:4]
    return candidate if len(candidate) == 4 and candidate.isdigit() else None


def text_or_none(value: object) -> str | None:
    """Return a stripped string, or None for blanks and non-strings."""

    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


__all__ = [
    "LookupFailure",
    "LookupFailureKind",
    "MetadataProvider",
    "ProviderResult",
    "not_found",
    "text_or_none",
    "year_from_date",
]
