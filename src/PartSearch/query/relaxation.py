"""Oracle text relaxation query builder.

Produces a [relaxation template] that ranks results from most to least
specific: combinations of exact (`{term}`) and wildcard (`%term%`) term
alternatives, each searched first with `NEAR` and then with `AND`.

Two relaxation strategies are supported:

- `exhaustive`: every combination of alternatives, first term varying
  slowest. Parts matching all terms exactly rank highest, then those
  matching all but the last term exactly, and so on until every term is a
  wildcard. For `n` unquoted terms this emits `2^n` combinations and up to
  `2^(n+1)` `<seq>` clauses; callers bound `n` through the parser's
  `max_terms`.
- `tiered`: only the all-exact and the all-wildcard combinations.

[relaxation template]: http://docs.oracle.com/cd/B19306_01/text.102/b14218/csql.htm#sthref134
"""

from __future__ import annotations

from typing import Callable, Iterator, Sequence

from PartSearch.core.query import NormalizedQuery, ParseError, SearchQuery
from PartSearch.query.normalize import search_str_to_term_map

NEAR_DISTANCE = 100

_QUERY_OPEN = '<query><textquery lang="ENGLISH" grammar="CONTEXT"><progression>'
_QUERY_CLOSE = "</progression></textquery></query>"

Combinations = Callable[[Sequence[Sequence[str]]], Iterator[tuple[str, ...]]]


def negations_to_not_clause(negations: Sequence[str]) -> str | None:
    """Return a `NOT (a | b)` clause excluding all negations, or None."""
    if not negations:
        return None
    return "NOT (" + " | ".join(negations) + ")"


def term_combinations(terms: Sequence[Sequence[str]]) -> Iterator[tuple[str, ...]]:
    """Yield every combination of term alternatives, most specific first.

    The first term varies slowest and the last fastest, so the first
    combination is all exact forms and the last all wildcards.
    """
    if not terms:
        yield ()
        return
    head, rest = terms[0], terms[1:]
    for alternative in head:
        for tail in term_combinations(rest):
            yield (alternative, *tail)


def tiered_combinations(terms: Sequence[Sequence[str]]) -> Iterator[tuple[str, ...]]:
    """Yield one combination per alternative tier: all exact, then all wildcard.

    Literal terms have a single alternative and repeat it in every tier.
    """
    tiers = max((len(alternatives) for alternatives in terms), default=1)
    for tier in range(tiers):
        yield tuple(alternatives[min(tier, len(alternatives) - 1)] for alternatives in terms)


RELAXATIONS: dict[str, Combinations] = {
    "exhaustive": term_combinations,
    "tiered": tiered_combinations,
}


def _seq(clause: str) -> str:
    return f"<seq>{clause}</seq>"


def terms_to_query_seqs(
    terms: Sequence[Sequence[str]],
    fmt: Callable[[str], str] | None = None,
    *,
    combinations: Combinations = term_combinations,
) -> list[str]:
    """Return `NEAR` and `AND` search strings for every term combination.

    Args:
        terms: Term alternatives, as in `NormalizedQuery.terms`.
        fmt: Formatter applied to each search string; the default wraps it
            in `<seq>` tags. A custom formatter must add them itself.
        combinations: Combination generator, see `RELAXATIONS`.

    Returns:
        Search strings in ranking order.
    """
    fmt = fmt or _seq
    out: list[str] = []
    for combination in combinations(terms):
        if len(combination) > 1:
            out.append(fmt(f"NEAR(({', '.join(combination)}), {NEAR_DISTANCE}, TRUE)"))
        out.append(fmt(" AND ".join(combination)))
    return out


def build_text_query(query: NormalizedQuery, *, relaxation: str = "exhaustive") -> str | None:
    """Build the relaxation template for a normalized query.

    Args:
        query: Normalized search.
        relaxation: Strategy name, `exhaustive` or `tiered`.

    Returns:
        The Oracle text query, or None when there are no positive terms;
        negations and filters alone never drive a text search.

    Raises:
        ValueError: If `relaxation` is unknown.
    """
    combinations = RELAXATIONS.get(relaxation)
    if combinations is None:
        raise ValueError(f"Unsupported relaxation: {relaxation}")
    if not query.terms:
        return None

    not_clause = negations_to_not_clause(query.negations)

    def fmt(clause: str) -> str:
        if not_clause:
            clause = f"{clause} {not_clause}"
        return f"<seq>({clause})</seq>"

    seqs = terms_to_query_seqs(query.terms, fmt, combinations=combinations)
    return _QUERY_OPEN + "".join(seqs) + _QUERY_CLOSE


def search_str_to_query(
    raw: str,
    *,
    max_terms: int | None = None,
    relaxation: str = "exhaustive",
) -> SearchQuery | ParseError:
    """Turn a search string into an Oracle text query and its filters.

    Args:
        raw: Search string as typed by the user.
        max_terms: Optional cap on unquoted terms.
        relaxation: Strategy name, `exhaustive` or `tiered`.

    Returns:
        `SearchQuery` (with `text_query=None` when there is nothing to search
        for), or the `ParseError` for malformed input.
    """
    normalized = search_str_to_term_map(raw, max_terms=max_terms)
    if isinstance(normalized, ParseError):
        return normalized
    return SearchQuery(
        text_query=build_text_query(normalized, relaxation=relaxation),
        filters=normalized.filters,
    )
