"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from tracksort.config.settings import PARTIAL_COPY_SUFFIX


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    return ensure_directory(path.parent)


def copy_file_atomic(src_path: Path, dest_path: Path) -> None:
    """Copy ``src_path`` over ``dest_path`` without leaving a truncated destination.

    The data is written to a sibling ``.partial`` file first and then moved into
    place, so an interrupted copy never replaces an existing destination.
    """

    partial = dest_path.with_name(dest_path.name + PARTIAL_COPY_SUFFIX)
    try:
        _ = shutil.copy2(src_path, partial)
        os.replace(partial, dest_path)
    except BaseException:
        partial.unlink(missing_ok=True)
        raise


def is_within(path: Path, root: Path) -> bool:
    """Return whether ``path`` is ``root`` or lies beneath it."""

    try:
        return path.resolve().is_relative_to(root.resolve())
    except OSError:
        return False


__all__ = ["copy_file_atomic", "ensure_directory", "ensure_parent_directory", "is_within"]
