"""Console output renderers."""

from __future__ import annotations

from PartSearch.core.query import Negated, NormalizedQuery, ParseError
from PartSearch.services.search import PreparedSearch


def render_text(prepared: PreparedSearch) -> str:
    """Render a compiled statement and its parameters as plain text."""
    statement = prepared.statement
    if statement is None:
        return "(no statement: nothing to search for)"
    lines = [statement.sql, "", "params:"]
    lines.extend(f"  {idx}: {param}" for idx, param in enumerate(statement.params, start=1))
    return "\n".join(lines)


def render_explain(normalized: NormalizedQuery, text_query: str | None) -> str:
    """Render the normalized terms, negations, filters and text query."""
    lines = ["terms:"]
    lines.extend(f"  - {' | '.join(alternatives)}" for alternatives in normalized.terms)
    lines.append("negations:")
    lines.extend(f"  - {negation}" for negation in normalized.negations)
    lines.append("filters:")
    for name, values in normalized.filters.items():
        shown = ", ".join(f"-{v.value}" if isinstance(v, Negated) else v for v in values)
        lines.append(f"  {name}: {shown}")
    lines.append("text query:")
    lines.append(f"  {text_query}" if text_query else "  (none)")
    return "\n".join(lines)


def render_error(error: ParseError) -> str:
    """Render a parse error with a caret under the offending position."""
    source = error.fragment
    return f"Invalid search: {error.describe()}\n  {source}\n  ^"
