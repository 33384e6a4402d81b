"""Metadata extraction from tags, folder names and file names."""

from .bundle_extractor import TagReader, extract_bundle, folder_text_for
from .name_parsers import find_year, parse_file_name, parse_folder_name
from .tag_reader import read_embedded_tags

__all__ = [
    "TagReader",
    "extract_bundle",
    "find_year",
    "folder_text_for",
    "parse_file_name",
    "parse_folder_name",
    "read_embedded_tags",
]
