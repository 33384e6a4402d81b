"""Where: src/tracksort/features/path/usecases/path_builder.py
What: Render the destination path for a canonical record under an output root.
Why: Keep naming rules (templates, sanitisation, length bound) in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import final

from tracksort.config.settings import DEFAULT_PATH_MAX_LENGTH, MIN_TRUNCATED_TITLE_LENGTH
from tracksort.platform.logging import logger
from tracksort.shared.track_metadata import CanonicalRecord

from ..domain.sanitizer import Sanitizer
from ..domain.templates import FOLDER_SEPARATOR, PathTemplates

_EMPTY_COMPONENT = "_"


@dataclass(frozen=True, slots=True)
class DestinationPath:
    """Where a track lands.

    Attributes:
        folder_path: Folder relative to the output root.
        file_name: File name including the extension.
        full_path: Output root joined with folder and file name.
        truncated: Whether the title was shortened to respect the length bound.
        warnings: Human readable notes, e.g. when the bound could not be met.
    """

    folder_path: Path
    file_name: str
    full_path: Path
    truncated: bool = False
    warnings: tuple[str, ...] = ()

    @property
    def relative_path(self) -> Path:
        return self.folder_path / self.file_name


def normalize_extension(extension: str) -> str:
    """Return ``extension`` as ``.ext`` keeping its case (empty stays empty)."""

    stripped = extension.strip()
    if not stripped:
        return ""
    return stripped if stripped.startswith(".") else f".{stripped}"


@final
class PathBuilder:
    """Build ``<root>/<Genre>/<Artist>/<Year - Album>/<NN - Title>.<ext>`` style paths."""

    def __init__(
        self,
        *,
        max_length: int = DEFAULT_PATH_MAX_LENGTH,
        templates: PathTemplates | None = None,
    ) -> None:
        self.max_length: int = max_length
        self.templates: PathTemplates = templates or PathTemplates()

    @staticmethod
    def _sanitized_values(record: CanonicalRecord) -> dict[str, str]:
        values: dict[str, str] = {}
        for name, value in record.to_dict().items():
            values[name] = Sanitizer.sanitize_component(value) or _EMPTY_COMPONENT
        return values

    def _render_folder(self, record: CanonicalRecord, values: dict[str, str]) -> Path:
        template = self.templates.folder_for(record.has_year)
        segments = [
            segment.format(**values).strip() or _EMPTY_COMPONENT
            for segment in template.split(FOLDER_SEPARATOR)
        ]
        return Path(*segments)

    def _render_file(self, values: dict[str, str], extension: str) -> str:
        stem = self.templates.file.format(**values).strip() or _EMPTY_COMPONENT
        return f"{stem}{extension}"

    def build(self, record: CanonicalRecord, extension: str, base_path: Path) -> DestinationPath:
        """Return the destination for ``record``.

        When the full path exceeds ``max_length`` the title is cut to the
        longest prefix that fits. A title is never cut below
        ``MIN_TRUNCATED_TITLE_LENGTH`` characters; in that case the path is
        returned anyway with a warning attached.
        """

        ext = normalize_extension(extension)
        values = self._sanitized_values(record)
        folder = self._render_folder(record, values)
        file_name = self._render_file(values, ext)
        full_path = base_path / folder / file_name

        if len(str(full_path)) <= self.max_length:
            return DestinationPath(folder_path=folder, file_name=file_name, full_path=full_path)

        title = values["title"]
        occurrences = self.templates.file.count("{title}")
        warnings: list[str] = []
        truncated = False

        if occurrences and len(title) > MIN_TRUNCATED_TITLE_LENGTH:
            overhead = len(str(base_path / folder / self._render_file({**values, "title": ""}, ext)))
            available = (self.max_length - overhead) // occurrences
            keep = max(available, MIN_TRUNCATED_TITLE_LENGTH)
            if keep < len(title):
                short_title = title[:keep].rstrip(" .") or title[:keep]
                file_name = self._render_file({**values, "title": short_title}, ext)
                full_path = base_path / folder / file_name
                truncated = True

        if len(str(full_path)) > self.max_length:
            message = (
                f"Path exceeds {self.max_length} characters "
                f"({len(str(full_path))}) even after shortening the title"
            )
            logger.warning("%s: %s", message, full_path)
            warnings.append(message)

        return DestinationPath(
            folder_path=folder,
            file_name=file_name,
            full_path=full_path,
            truncated=truncated,
            warnings=tuple(warnings),
        )


__all__ = ["DestinationPath", "PathBuilder", "normalize_extension"]
