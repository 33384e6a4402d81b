"""Rich console handler for structured processing events."""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class ProcessingRichHandler(RichHandler):
    """Rich handler that renders processing events with icons and compact paths."""

    _PROCESSING_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "processing.batch.start": ("🚀", "cyan"),
        "processing.batch.complete": ("✅", "green"),
        "processing.batch.cancelled": ("⏹️", "yellow"),
        "processing.batch.no_files": ("ℹ️", "yellow"),
        "processing.file.start": ("🎧", "blue"),
        "processing.file.success": ("🎉", "green"),
        "processing.file.planned": ("📝", "cyan"),
        "processing.file.error": ("⛔", "red"),
        "processing.file.copy": ("📦", "magenta"),
        "processing.artwork.copy": ("🖼️", "magenta"),
        "processing.artwork.plan": ("🖼️", "cyan"),
        "processing.artwork.skip.exists": ("↪️", "yellow"),
        "processing.artwork.error": ("❌", "red"),
        "processing.playlist.remove": ("🗑️", "yellow"),
        "processing.playlist.plan": ("🗑️", "cyan"),
    }
    _FILE_PREFIXES: ClassVar[dict[str, str]] = {
        "processing.file.start": "Processing ",
        "processing.file.success": "Organized ",
        "processing.file.planned": "Planned ",
        "processing.file.error": "Failed ",
        "processing.file.copy": "Copying ",
        "processing.artwork.copy": "Artwork ",
        "processing.artwork.plan": "Planned artwork ",
        "processing.artwork.skip.exists": "Artwork exists ",
        "processing.artwork.error": "Artwork failed ",
        "processing.playlist.remove": "Removed playlist ",
        "processing.playlist.plan": "Would remove playlist ",
    }
    _ARROW_EVENTS: ClassVar[frozenset[str]] = frozenset(
        {
            "processing.file.success",
            "processing.file.planned",
            "processing.file.copy",
            "processing.artwork.copy",
            "processing.artwork.plan",
        }
    )
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str, base: str | None = None) -> Text:
        """Format a path relative to ``base`` with at most a few trailing segments."""

        pure_path = self._to_pure_path(path)
        base_path = self._to_pure_path(base) if base else None

        display_path: PurePath = pure_path
        if base_path is not None and pure_path.is_relative_to(base_path):
            relative_path = pure_path.relative_to(base_path)
            if str(relative_path) not in {"", "."}:
                display_path = relative_path

        separator = "\\" if isinstance(display_path, PureWindowsPath) else "/"
        anchor = display_path.anchor
        body_parts = [part for part in display_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display_string = ""
        if anchor and not truncated:
            display_string = anchor.rstrip("\\/") + separator
        if truncated:
            display_string += "…" + separator
        display_string += separator.join(body_parts)

        text = Text()
        for char in display_string or ".":
            color = "magenta" if char in {separator, "…"} else "white"
            _ = text.append(char, style=Style(color=color))
        return text

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    def _render_processing_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured processing events with dedicated styling."""

        event = getattr(record, "processing_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._PROCESSING_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        body = Text(style=Style(color=color))

        if event.startswith("processing.batch"):
            _ = body.append(record.getMessage())
            _ = text.append_text(body)
            return text

        sequence = getattr(record, "sequence", None)
        total_files = getattr(record, "total_files", None)
        if isinstance(sequence, int) and sequence > 0:
            if isinstance(total_files, int) and total_files > 0:
                _ = body.append(f"[{sequence}/{total_files}] ")
            else:
                _ = body.append(f"[{sequence}] ")

        prefix = self._FILE_PREFIXES.get(event)
        if prefix:
            _ = body.append(prefix)

        source_path = getattr(record, "source_path", None)
        target_path = getattr(record, "target_path", None)
        if source_path:
            _ = body.append_text(
                self._format_path(str(source_path), base=getattr(record, "source_base_path", None))
            )
        if event in self._ARROW_EVENTS and target_path:
            _ = body.append(" → ")
            _ = body.append_text(
                self._format_path(str(target_path), base=getattr(record, "target_base_path", None))
            )

        error_message = getattr(record, "error_message", None)
        if error_message:
            _ = body.append(f" ({error_message})")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        processing_text = self._render_processing_message(record)
        if processing_text is not None:
            return processing_text
        return super().render_message(record, message)


__all__ = ["ProcessingRichHandler"]
