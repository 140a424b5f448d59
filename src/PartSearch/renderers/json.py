"""JSON output renderers.

Renders prepared searches and parse errors into JSON-serializable objects.
"""

from __future__ import annotations

from typing import Any, Mapping

from PartSearch.core.query import FilterValue, Negated, ParseError
from PartSearch.services.search import PreparedSearch


def render_json(prepared: PreparedSearch) -> dict[str, Any]:
    """Render a prepared search as a JSON-serializable dict.

    Negated filter values are rendered as `{"not": value}`.
    """
    statement = prepared.statement
    return {
        "text_query": prepared.query.text_query,
        "filters": filters_payload(prepared.query.filters),
        "sql": statement.sql if statement else None,
        "params": list(statement.params) if statement else [],
    }


def render_error_json(error: ParseError) -> dict[str, Any]:
    """Render a parse error in the shape returned to API clients."""
    return {
        "error": {
            "message": error.message,
            "position": error.position,
            "fragment": error.fragment,
        }
    }


def filters_payload(filters: Mapping[str, tuple[FilterValue, ...]]) -> dict[str, list[Any]]:
    return {
        name: [{"not": v.value} if isinstance(v, Negated) else v for v in values]
        for name, values in filters.items()
    }
