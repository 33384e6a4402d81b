"""Metadata feature: extraction, genre classification, resolution and online correction."""
