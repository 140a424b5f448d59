"""Parse tree normalization.

Folds a parse tree into a `NormalizedQuery`:

- terms are sanitized, then shaped into their alternatives
  (`{term}` for exact matches, `%term%` for wildcard matches);
- negated terms keep only their exact form and go to `negations`;
- filter values accumulate per filter name, negated ones wrapped in
  `Negated`.

Search terms lose the characters `"'()[]{},.*?_`. The characters
`&=\\-;~|$!>` have special meaning in Oracle text queries and are escaped in
the wildcard alternative.
"""

from __future__ import annotations

import re

from PartSearch.core.query import (
    FilterClause,
    FilterValue,
    Negated,
    NormalizedQuery,
    ParseError,
    ParseTree,
    Term,
)
from PartSearch.query.parser import parse_search_str

_RE_SANITIZE = re.compile(r"[\"'()\[\]{},.*?_]+")
_RE_SPECIAL = re.compile(r"([&=\\\-;~|$!>])")


def sanitize_search_term(text: str) -> str:
    """Remove unsupported characters from a search term."""
    return _RE_SANITIZE.sub("", text)


def escape_special_chars(text: str) -> str:
    """Backslash-escape Oracle text operator characters."""
    return _RE_SPECIAL.sub(r"\\\1", text)


def term_alternatives(term: Term) -> tuple[str, ...]:
    """Return the match alternatives for a term, most specific first.

    Negated and literal terms only ever match exactly.
    """
    value = sanitize_search_term(term.text)
    exact = "{" + value + "}"
    if term.literal or term.negated:
        return (exact,)
    return (exact, "%" + escape_special_chars(value) + "%")


def normalize(tree: ParseTree) -> NormalizedQuery:
    """Fold a parse tree into terms, negations and filters.

    Args:
        tree: Parser output.

    Returns:
        Normalized query; `EMPTY_QUERY` equivalent for an empty tree.
    """
    terms: list[tuple[str, ...]] = []
    negations: list[str] = []
    filters: dict[str, list[FilterValue]] = {}

    for node in tree:
        if isinstance(node, FilterClause):
            values: list[FilterValue] = (
                [Negated(v) for v in node.values] if node.negated else list(node.values)
            )
            filters.setdefault(node.name, []).extend(values)
        elif node.negated:
            negations.append(term_alternatives(node)[0])
        else:
            terms.append(term_alternatives(node))

    return NormalizedQuery(
        terms=tuple(terms),
        negations=tuple(negations),
        filters={name: tuple(values) for name, values in filters.items()},
    )


def search_str_to_term_map(raw: str, *, max_terms: int | None = None) -> NormalizedQuery | ParseError:
    """Parse and normalize a search string."""
    tree = parse_search_str(raw, max_terms=max_terms)
    if isinstance(tree, ParseError):
        return tree
    return normalize(tree)
