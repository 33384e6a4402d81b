"""Where: src/tracksort/platform/providers/user_agent.py
What: Build User-Agent strings for outbound provider requests.
Why: MusicBrainz rejects anonymous clients; every provider shares the same identity.
"""

from __future__ import annotations

import os

from tracksort.config.settings import MB_APP_NAME, MB_APP_VERSION, MB_CONTACT


def format_user_agent(app_name: str, app_version: str, contact: str) -> str:
    """Return ``App/Version (contact)`` when contact information is available."""

    stripped = contact.strip()
    if stripped:
        return f"{app_name}/{app_version} ({stripped})"
    return f"{app_name}/{app_version}"


def resolve_user_agent(
    app_name: str | None = None,
    app_version: str | None = None,
    contact: str | None = None,
) -> str:
    """Provide the user agent outbound HTTP calls should send.

    Explicit values win, then ``TRACKSORT_USER_AGENT``, then built-in defaults.
    """

    if app_name or app_version or contact:
        return format_user_agent(
            app_name or MB_APP_NAME,
            app_version or MB_APP_VERSION,
            contact or MB_CONTACT,
        )
    env = os.getenv("TRACKSORT_USER_AGENT")
    if env:
        return env
    return format_user_agent(MB_APP_NAME, MB_APP_VERSION, MB_CONTACT)


__all__ = ["format_user_agent", "resolve_user_agent"]
