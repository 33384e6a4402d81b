# Where: tracksort.features.path.domain.templates
# What: Validated folder and file naming templates.
# Why: User templates are configuration; mistakes must surface before any file is touched.

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Final

from tracksort.config.config import (
    DEFAULT_FILE_TEMPLATE,
    DEFAULT_FOLDER_TEMPLATE,
    DEFAULT_FOLDER_TEMPLATE_NO_YEAR,
)
from tracksort.shared.errors import TemplateError

PLACEHOLDERS: Final[frozenset[str]] = frozenset({"genre", "artist", "album", "year", "track", "title"})
FOLDER_SEPARATOR: Final[str] = "/"


def template_fields(template: str) -> list[str]:
    """Return the placeholder names used in ``template``.

    Raises:
        TemplateError: On malformed braces, format specs, conversions or unknown names.
    """

    names: list[str] = []
    try:
        parsed = list(string.Formatter().parse(template))
    except ValueError as exc:
        raise TemplateError(f"Malformed template {template!r}: {exc}") from exc

    for _, field_name, format_spec, conversion in parsed:
        if field_name is None:
            continue
        if field_name not in PLACEHOLDERS:
            raise TemplateError(
                f"Unknown placeholder {{{field_name}}} in {template!r}; "
                f"allowed: {', '.join(sorted(PLACEHOLDERS))}"
            )
        if format_spec or conversion:
            raise TemplateError(f"Format options are not supported in {template!r}")
        names.append(field_name)
    return names


@dataclass(frozen=True, slots=True)
class PathTemplates:
    """Folder template (with and without a known year) and file name template."""

    folder: str = DEFAULT_FOLDER_TEMPLATE
    folder_no_year: str = DEFAULT_FOLDER_TEMPLATE_NO_YEAR
    file: str = DEFAULT_FILE_TEMPLATE

    def __post_init__(self) -> None:
        for template in (self.folder, self.folder_no_year):
            if not template.strip():
                raise TemplateError("Folder template must not be empty")
            if template.startswith(FOLDER_SEPARATOR) or "\\" in template:
                raise TemplateError(f"Folder template must be relative: {template!r}")
            if any(not segment.strip() for segment in template.split(FOLDER_SEPARATOR)):
                raise TemplateError(f"Folder template has an empty segment: {template!r}")
            if "title" in template_fields(template):
                raise TemplateError(f"{{title}} may only appear in the file template: {template!r}")

        if not self.file.strip():
            raise TemplateError("File template must not be empty")
        if FOLDER_SEPARATOR in self.file or "\\" in self.file:
            raise TemplateError(f"File template must not contain separators: {self.file!r}")
        _ = template_fields(self.file)

    def folder_for(self, has_year: bool) -> str:
        return self.folder if has_year else self.folder_no_year


__all__ = ["FOLDER_SEPARATOR", "PLACEHOLDERS", "PathTemplates", "template_fields"]
