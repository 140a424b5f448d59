from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union


@dataclass(frozen=True, slots=True)
class Term:
    """A search term node from the parse tree.

    Attributes:
        text: Raw term text, without quotes or the negation prefix.
        literal: True when the term was quoted in the search string.
        negated: True when the term was prefixed with `-`.
    """

    text: str
    literal: bool = False
    negated: bool = False


@dataclass(frozen=True, slots=True)
class FilterClause:
    """A search operator node from the parse tree (e.g. `planner:jelliott`).

    `values` keeps the order given in the search string, empty slots from
    consecutive commas are already dropped.
    """

    name: str
    values: tuple[str, ...]
    negated: bool = False


ParseNode = Union[Term, FilterClause]
ParseTree = tuple[ParseNode, ...]


@dataclass(frozen=True, slots=True)
class ParseError:
    """Structured failure returned by the parser instead of raising.

    Attributes:
        message: Human readable reason.
        position: 0-based offset into the search string.
        fragment: Remaining input starting at `position`.
    """

    message: str
    position: int
    fragment: str

    def describe(self) -> str:
        """Return a one-line description suitable for client-facing errors."""
        return f"{self.message} at position {self.position}: {self.fragment!r}"


@dataclass(frozen=True, slots=True)
class Negated:
    """A filter value that must not match."""

    value: str


FilterValue = Union[str, Negated]


@dataclass(frozen=True, slots=True)
class NormalizedQuery:
    """Terms, negations and filters extracted from a search string.

    Attributes:
        terms: One tuple of alternatives per positive term, most specific
            first: `("{term}",)` for literals, `("{term}", "%term%")` otherwise.
        negations: Braced literal forms of the negated terms.
        filters: Filter name to values, in order of first appearance.
    """

    terms: tuple[tuple[str, ...], ...] = ()
    negations: tuple[str, ...] = ()
    filters: Mapping[str, tuple[FilterValue, ...]] = field(default_factory=dict)


EMPTY_QUERY = NormalizedQuery()


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """Oracle text query plus filters, ready for SQL compilation.

    `text_query` is None when the search string has no positive terms; such
    a query never produces a statement.
    """

    text_query: str | None
    filters: Mapping[str, tuple[FilterValue, ...]] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class CompiledStatement:
    """SQL text with its positional parameters."""

    sql: str
    params: tuple[str, ...]
