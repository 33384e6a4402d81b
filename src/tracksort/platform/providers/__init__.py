"""Online metadata providers and their shared HTTP plumbing."""

from .base import LookupFailure, LookupFailureKind, MetadataProvider, ProviderResult
from .http_client import HTTPClient, HTTPResult, ProviderHTTPClient
from .itunes import ITunesProvider
from .lastfm import LastFmProvider
from .musicbrainz import MusicBrainzProvider
from .rate_limit import ProviderGate, RateLimiter
from .user_agent import format_user_agent, resolve_user_agent

__all__ = [
    "HTTPClient",
    "HTTPResult",
    "ITunesProvider",
    "LastFmProvider",
    "LookupFailure",
    "LookupFailureKind",
    "MetadataProvider",
    "MusicBrainzProvider",
    "ProviderGate",
    "ProviderHTTPClient",
    "ProviderResult",
    "RateLimiter",
    "format_user_agent",
    "resolve_user_agent",
]
