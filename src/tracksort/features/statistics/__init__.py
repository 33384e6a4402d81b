"""Batch statistics, snapshots and manifest export."""

from .aggregator import (
    BatchSnapshot,
    BatchStatistics,
    ErrorEntry,
    FileOutcome,
    ManifestEntry,
    WarningEntry,
)
from .manifest import render_manifest, write_manifest

__all__ = [
    "BatchSnapshot",
    "BatchStatistics",
    "ErrorEntry",
    "FileOutcome",
    "ManifestEntry",
    "WarningEntry",
    "render_manifest",
    "write_manifest",
]
