"""Where: tracksort.shared.errors
What: Exception hierarchy for conditions that abort a run or reject configuration.
Why: Per-file failures are recorded, not raised; only these escape to callers.
"""

from __future__ import annotations

from pathlib import Path


class TracksortError(Exception):
    """Base class for application errors."""


class SourceRootError(TracksortError):
    """Raised when the source root is missing or not a directory."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid source root {path}: {reason}")
        self.path: Path = path
        self.reason: str = reason


class OutputRootError(TracksortError):
    """Raised when the output root cannot be created or used."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid output root {path}: {reason}")
        self.path: Path = path
        self.reason: str = reason


class ConfigError(TracksortError):
    """Raised for invalid configuration values."""


class TemplateError(ConfigError):
    """Raised when a naming template uses unknown or misplaced placeholders."""


__all__ = [
    "ConfigError",
    "OutputRootError",
    "SourceRootError",
    "TemplateError",
    "TracksortError",
]
