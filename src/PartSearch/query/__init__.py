"""Search string compiler: grammar, normalization and relaxation queries."""

from __future__ import annotations

from PartSearch.query.normalize import (
    escape_special_chars,
    normalize,
    sanitize_search_term,
    search_str_to_term_map,
)
from PartSearch.query.parser import parse_search_str
from PartSearch.query.relaxation import build_text_query, search_str_to_query

__all__ = [
    "build_text_query",
    "escape_special_chars",
    "normalize",
    "parse_search_str",
    "sanitize_search_term",
    "search_str_to_query",
    "search_str_to_term_map",
]
