"""JSON manifest export for batch snapshots."""

from __future__ import annotations

import json
from pathlib import Path

from tracksort.config.file_ops import write_text_file
from tracksort.platform.logging import logger

from .aggregator import BatchSnapshot


def render_manifest(snapshot: BatchSnapshot) -> str:
    return json.dumps(snapshot.to_dict(), indent=2, ensure_ascii=False)


def write_manifest(snapshot: BatchSnapshot, path: Path) -> Path:
    """Write ``snapshot`` as UTF-8 JSON to ``path`` and return the path."""

    write_text_file(path, render_manifest(snapshot) + "\n")
    logger.info("Manifest written to %s", path)
    return path


__all__ = ["render_manifest", "write_manifest"]
