"""Online metadata correction through pluggable providers."""

from .adapter import OnlineCorrectionAdapter, lookup_terms
from .cache import LookupCache, make_key, normalize_key_part

__all__ = ["LookupCache", "OnlineCorrectionAdapter", "lookup_terms", "make_key", "normalize_key_part"]
