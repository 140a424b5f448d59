"""Search string grammar.

Parses Google-style search strings into a parse tree of terms and filters:

    bias "orbit 900" -stage planner:jelliott

- Space separated words are non-literal terms (matched exactly and by
  wildcard).
- Quoted text is a literal term; it may contain spaces.
- A leading `-` negates a term or a filter.
- `name:value,value` is a filter for registered names only. Anything else
  that looks like a filter (`unknown:x`, `planner: x`) is read as terms.

Grammar:

    search        := sep* (term | filter) (sep+ (term | filter))* sep*
    sep           := ' '
    term          := '-' positive-term | positive-term
    positive-term := '"' [^"]+ '"' | [^" -]+
    filter        := '-'? filter-name ':' value (',' value?)*
    value         := [A-Za-z]+

Failures are returned as `ParseError` values, never raised.
"""

from __future__ import annotations

import re
from typing import Sequence

from PartSearch.core.query import FilterClause, ParseError, ParseNode, ParseTree, Term
from PartSearch.sql.filters import registered_filter_names

_SEPARATOR = " "
_NEGATOR = "-"
_QUOTE = '"'
_FILTER_SEPARATOR = ":"
_VALUE_SEPARATOR = ","

_RE_NON_LITERAL = re.compile(r'[^" \-]+')
_RE_FILTER_VALUE = re.compile(r"[A-Za-z]+")


class _SyntaxFailure(Exception):
    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.message = message
        self.position = position


class _SearchParser:
    """Recursive-descent parser over one search string."""

    def __init__(self, text: str, filter_names: Sequence[str]) -> None:
        self.text = text
        self.pos = 0
        self.filter_names = tuple(filter_names)
        self.positions: list[int] = []

    def parse(self) -> ParseTree:
        nodes: list[ParseNode] = []
        self._skip_separators()
        while self.pos < len(self.text):
            self.positions.append(self.pos)
            nodes.append(self._item())
            if not self._at_boundary():
                raise _SyntaxFailure("expected a space between search terms", self.pos)
            self._skip_separators()
        return tuple(nodes)

    def _skip_separators(self) -> None:
        while self.text.startswith(_SEPARATOR, self.pos):
            self.pos += 1

    def _at_boundary(self) -> bool:
        return self.pos >= len(self.text) or self.text[self.pos] == _SEPARATOR

    def _item(self) -> ParseNode:
        start = self.pos
        node = self._filter()
        if node is not None and self._at_boundary():
            return node
        # Not a (complete) filter: re-read the token as a term.
        self.pos = start
        return self._term()

    def _filter(self) -> FilterClause | None:
        i = self.pos
        negated = self.text.startswith(_NEGATOR, i)
        if negated:
            i += 1

        name = next(
            (n for n in self.filter_names if self.text.startswith(n + _FILTER_SEPARATOR, i)),
            None,
        )
        if name is None:
            return None
        i += len(name) + len(_FILTER_SEPARATOR)

        m = _RE_FILTER_VALUE.match(self.text, i)
        if m is None:
            return None
        values = [m.group()]
        i = m.end()

        while self.text.startswith(_VALUE_SEPARATOR, i):
            i += 1
            m = _RE_FILTER_VALUE.match(self.text, i)
            if m is not None:
                values.append(m.group())
                i = m.end()

        self.pos = i
        return FilterClause(name=name, values=tuple(values), negated=negated)

    def _term(self) -> Term:
        negated = self.text.startswith(_NEGATOR, self.pos)
        if negated:
            self.pos += 1
        if self.pos >= len(self.text) or self.text[self.pos] == _SEPARATOR:
            raise _SyntaxFailure("expected a search term", self.pos)

        if self.text[self.pos] == _QUOTE:
            close = self.text.find(_QUOTE, self.pos + 1)
            if close == -1:
                raise _SyntaxFailure("unterminated quoted term", self.pos)
            if close == self.pos + 1:
                raise _SyntaxFailure("empty quoted term", self.pos)
            value = self.text[self.pos + 1 : close]
            self.pos = close + 1
            return Term(text=value, literal=True, negated=negated)

        m = _RE_NON_LITERAL.match(self.text, self.pos)
        if m is None:
            raise _SyntaxFailure("expected a search term", self.pos)
        self.pos = m.end()
        return Term(text=m.group(), literal=False, negated=negated)


def parse_search_str(
    raw: str,
    *,
    max_terms: int | None = None,
    filter_names: Sequence[str] | None = None,
) -> ParseTree | ParseError:
    """Parse a search string into a parse tree.

    Args:
        raw: Search string as typed by the user.
        max_terms: Optional cap on positive non-literal terms. Each one
            doubles the number of relaxation combinations.
        filter_names: Recognized filter names, defaults to the registry.

    Returns:
        The parse tree (empty for blank input), or a `ParseError`.
    """
    if not raw.strip():
        return ()

    names = registered_filter_names() if filter_names is None else filter_names
    parser = _SearchParser(raw, names)
    try:
        tree = parser.parse()
    except _SyntaxFailure as failure:
        return ParseError(
            message=failure.message,
            position=failure.position,
            fragment=raw[failure.position :],
        )

    if max_terms is not None:
        expanding = 0
        for node, position in zip(tree, parser.positions):
            if isinstance(node, Term) and not node.literal and not node.negated:
                expanding += 1
                if expanding > max_terms:
                    return ParseError(
                        message=f"too many search terms (at most {max_terms} unquoted terms)",
                        position=position,
                        fragment=raw[position:],
                    )
    return tree
