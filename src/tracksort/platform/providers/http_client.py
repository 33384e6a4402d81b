"""Where: src/tracksort/platform/providers/http_client.py
What: Single-attempt JSON GET adapter shared by every online provider.
Why: Decouple network concerns from payload parsing; lookups are never retried.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol, cast

import requests

from tracksort.platform.logging import logger

from .base import LookupFailure, LookupFailureKind
from .user_agent import resolve_user_agent


@dataclass(slots=True)
class HTTPResult:
    """Represent an HTTP response payload relevant to provider parsing.

    ``data`` is set only for 2xx responses with a JSON object body; otherwise
    ``failure`` explains what went wrong.
    """

    status: int
    headers: dict[str, str]
    data: dict[str, Any] | None
    failure: LookupFailure | None = None


class HTTPClient(Protocol):
    """Protocol for HTTP clients able to fetch JSON payloads."""

    def get_json(self, url: str, params: dict[str, str]) -> HTTPResult:
        ...


class ProviderHTTPClient:
    """Perform one GET request per call with ``requests``."""

    def __init__(self, timeout: float = 10.0, user_agent: str | None = None) -> None:
        self.timeout: float = timeout
        self.user_agent: str = user_agent or resolve_user_agent()

    def get_json(self, url: str, params: dict[str, str]) -> HTTPResult:
        headers = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
        try:
            response = requests.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.Timeout as exc:
            logger.warning("Provider request timed out: %s", url)
            return _failed(0, {}, LookupFailureKind.TIMEOUT, str(exc))
        except requests.RequestException as exc:
            logger.warning("Provider request error: %s", exc)
            return _failed(0, {}, LookupFailureKind.HTTP_ERROR, str(exc))

        status = int(response.status_code)
        header_items = cast(Iterable[tuple[str, str]], response.headers.items())
        response_headers = {str(key): str(value) for key, value in header_items}

        if status == 429 or status == 503:
            logger.warning("Provider rate-limited (status=%s): %s", status, url)
            return _failed(status, response_headers, LookupFailureKind.RATE_LIMITED, f"HTTP {status}")
        if status == 404:
            return _failed(status, response_headers, LookupFailureKind.NOT_FOUND, "HTTP 404")
        if not 200 <= status < 300:
            logger.warning("Provider HTTP error: status=%s", status)
            return _failed(status, response_headers, LookupFailureKind.HTTP_ERROR, f"HTTP {status}")

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Provider JSON parse error: %s", exc)
            return _failed(status, response_headers, LookupFailureKind.MALFORMED, str(exc))

        if not isinstance(data, dict):
            return _failed(
                status, response_headers, LookupFailureKind.MALFORMED, "Expected a JSON object"
            )

        return HTTPResult(status=status, headers=response_headers, data=cast(dict[str, Any], data))


def _failed(
    status: int, headers: dict[str, str], kind: LookupFailureKind, message: str
) -> HTTPResult:
    return HTTPResult(
        status=status,
        headers=headers,
        data=None,
        failure=LookupFailure(kind=kind, message=message),
    )


__all__ = ["HTTPClient", "HTTPResult", "ProviderHTTPClient"]
