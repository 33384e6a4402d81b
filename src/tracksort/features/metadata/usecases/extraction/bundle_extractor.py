"""Raw metadata bundle assembly.

Where: src/tracksort/features/metadata/usecases/extraction/bundle_extractor.py
What: Combine embedded tags, folder name and file name into one ``RawMetadataBundle``.
Why: The resolver reads every source from a single immutable value.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from tracksort.platform.logging import logger
from tracksort.shared.track_metadata import ExtractionError, ExtractionErrorKind, RawFields, RawMetadataBundle

from .name_parsers import parse_file_name, parse_folder_name
from .tag_reader import read_embedded_tags

__all__ = ["TagReader", "extract_bundle", "folder_text_for"]

TagReader = Callable[[Path], RawFields | ExtractionError]


def folder_text_for(path: Path, source_root: Path | None) -> str | None:
    """Return the parent directory relative to ``source_root`` as POSIX text."""

    parent = path.parent
    if source_root is None:
        return parent.name or None
    try:
        relative = parent.relative_to(source_root)
    except ValueError:
        return parent.name or None
    text = relative.as_posix()
    return None if text in {"", "."} else text


def extract_bundle(
    path: Path,
    *,
    source_root: Path | None = None,
    tag_reader: TagReader = read_embedded_tags,
) -> RawMetadataBundle:
    """Collect every raw metadata namespace for ``path``.

    Never raises for unreadable tags: the failure is logged, kept on the
    bundle and the tag namespace is left empty.
    """

    try:
        tag_result = tag_reader(path)
    except Exception as exc:
        # Malformed containers can trip parser errors outside MutagenError.
        tag_result = ExtractionError(ExtractionErrorKind.UNREADABLE, str(exc) or type(exc).__name__)
    tag_error: ExtractionError | None = None
    if isinstance(tag_result, ExtractionError):
        logger.warning("Could not read tags from %s (%s): %s", path, tag_result.kind, tag_result.message)
        tag_error = tag_result
        tag_fields = RawFields()
    else:
        tag_fields = tag_result

    folder_fields = RawFields()
    if source_root is None or path.parent != source_root:
        folder_fields = parse_folder_name(path.parent.name)

    return RawMetadataBundle(
        source_path=path,
        tag=tag_fields,
        from_folder=folder_fields,
        from_file=parse_file_name(path.stem),
        folder_text=folder_text_for(path, source_root),
        tag_error=tag_error,
    )
