"""Destination path building: templates, sanitisation and the length bound."""

from .domain.sanitizer import Sanitizer
from .domain.templates import PLACEHOLDERS, PathTemplates
from .usecases.path_builder import DestinationPath, PathBuilder, normalize_extension

__all__ = [
    "DestinationPath",
    "PLACEHOLDERS",
    "PathBuilder",
    "PathTemplates",
    "Sanitizer",
    "normalize_extension",
]
