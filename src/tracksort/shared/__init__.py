# Where: tracksort.shared.__init__
# What: Provide a concise import surface for shared records and errors.
# Why: Encourage consistent reuse of shared types across features.

"""Shared cross-cutting records and errors exposed at the package level."""

from .errors import (
    ConfigError,
    OutputRootError,
    SourceRootError,
    TemplateError,
    TracksortError,
)
from .track_metadata import (
    CanonicalRecord,
    ExtractionError,
    ExtractionErrorKind,
    FieldOverrides,
    RawFields,
    RawMetadataBundle,
)

__all__ = [
    "CanonicalRecord",
    "ConfigError",
    "ExtractionError",
    "ExtractionErrorKind",
    "FieldOverrides",
    "OutputRootError",
    "RawFields",
    "RawMetadataBundle",
    "SourceRootError",
    "TemplateError",
    "TracksortError",
]
