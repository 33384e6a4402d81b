"""Canonical genre taxonomy and classifier."""

from .classifier import GenreClassifier
from .taxonomy import CANONICAL_GENRES, GenreTaxonomy, default_taxonomy

__all__ = ["CANONICAL_GENRES", "GenreClassifier", "GenreTaxonomy", "default_taxonomy"]
