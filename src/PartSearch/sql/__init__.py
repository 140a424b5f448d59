"""SQL compilation for part searches."""

from __future__ import annotations

from PartSearch.sql.compiler import PARAMSTYLES, compile_statement
from PartSearch.sql.filters import FILTERS, FilterSpec, registered_filter_names

__all__ = [
    "FILTERS",
    "PARAMSTYLES",
    "FilterSpec",
    "compile_statement",
    "registered_filter_names",
]
