"""Tests for the ``ProcessingRichHandler`` rendering of structured events."""

from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Iterator
from io import StringIO
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from rich.text import Text

from tracksort.platform.logging import LOGGER_NAME, ProcessingRichHandler, setup_logger


def _make_handler() -> ProcessingRichHandler:
    """Create a handler instance with an in-memory console."""

    console = Console(file=StringIO(), force_terminal=True, soft_wrap=True)
    return ProcessingRichHandler(console=console)


def _build_record(msg: str = "", **extras: Any) -> logging.LogRecord:
    """Create a ``LogRecord`` populated with processing extras for testing."""

    record = logging.LogRecord(
        name=LOGGER_NAME,
        level=logging.INFO,
        pathname="test",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


def test_file_success_shows_sequence_and_relative_paths() -> None:
    handler = _make_handler()
    record = _build_record(
        processing_event="processing.file.success",
        sequence=3,
        total_files=13,
        source_path="/music/in/1989 - Bleach/01 - Blew.mp3",
        source_base_path="/music/in",
        target_path="/music/out/Pop/Unknown Artist/1989 - Bleach/01 - Blew.mp3",
        target_base_path="/music/out",
    )

    rendered = handler.render_message(record, "")
    assert isinstance(rendered, Text)

    plain = rendered.plain
    assert "[3/13] Organized 1989 - Bleach/01 - Blew.mp3" in plain
    assert "→ Pop/Unknown Artist/1989 - Bleach/01 - Blew.mp3" in plain
    assert "/music/in" not in plain


def test_long_absolute_paths_are_abbreviated() -> None:
    handler = _make_handler()
    record = _build_record(
        processing_event="processing.file.error",
        sequence=1,
        source_path="/home/user/music/incoming/Various/2019 - Soundtrack/Disc 1/13 - Night.flac",
        error_message="Destination already taken",
    )

    plain = handler.render_message(record, "").plain  # type: ignore[attr-defined]

    assert "[1] Failed …/Various/2019 - Soundtrack/Disc 1/13 - Night.flac" in plain
    assert plain.endswith("(Destination already taken)")


def test_windows_paths_keep_backslashes() -> None:
    handler = _make_handler()
    record = _build_record(
        processing_event="processing.artwork.copy",
        source_path="C:\\media\\incoming\\Artist\\Album\\cover.jpg",
        source_base_path="C:\\media\\incoming",
        target_path="D:\\archive\\Rock\\Artist\\Album\\cover.jpg",
        target_base_path="D:\\archive",
    )

    plain = handler.render_message(record, "").plain  # type: ignore[attr-defined]

    assert "Artist\\Album\\cover.jpg" in plain
    assert "C:\\media" not in plain


def test_batch_events_render_the_message() -> None:
    handler = _make_handler()
    record = _build_record("Batch completed [processed=2]", processing_event="processing.batch.complete")

    plain = handler.render_message(record, "").plain  # type: ignore[attr-defined]

    assert plain.endswith("Batch completed [processed=2]")


def test_plain_records_fall_back_to_rich_rendering() -> None:
    handler = _make_handler()
    record = _build_record("hello")

    rendered = handler.render_message(record, "hello")

    assert isinstance(rendered, Text)
    assert rendered.plain == "hello"


@pytest.fixture
def restore_logger() -> Iterator[None]:
    yield
    _ = setup_logger()


def test_setup_logger_adds_rotating_file_handler(tmp_path: Path, restore_logger: None) -> None:
    log_file = tmp_path / "logs" / "tracksort.log"

    configured = setup_logger(log_file=log_file, console_level=logging.ERROR)
    configured.info("written to the file only")
    for handler in configured.handlers:
        handler.flush()

    handlers = configured.handlers
    assert isinstance(handlers[0], ProcessingRichHandler)
    assert handlers[0].level == logging.ERROR
    rotating = handlers[1]
    assert isinstance(rotating, logging.handlers.RotatingFileHandler)
    assert rotating.maxBytes == 10 * 1024 * 1024
    assert rotating.backupCount == 5
    assert "written to the file only" in log_file.read_text(encoding="utf-8")


def test_setup_logger_replaces_previous_handlers(restore_logger: None) -> None:
    _ = setup_logger()
    configured = setup_logger()
    assert len(configured.handlers) == 1
