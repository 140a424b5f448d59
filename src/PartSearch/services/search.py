"""Search service layer: search string in, part rows out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

from PartSearch.core.query import CompiledStatement, ParseError, SearchQuery
from PartSearch.query.relaxation import search_str_to_query
from PartSearch.sql.compiler import compile_statement
from PartSearch.utils.log import log


class QueryExecutor(Protocol):
    """Protocol for the collaborator that runs compiled statements."""

    def execute(self, sql: str, params: Sequence[str]) -> Sequence[Mapping[str, Any]]:
        """Run `sql` with positional `params` and return result rows."""
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class PreparedSearch:
    """A parsed search and its statement (None when nothing to search for)."""

    query: SearchQuery
    statement: CompiledStatement | None


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Outcome of one search request.

    Exactly one of these holds: `error` is set (malformed search string),
    `statement` is None (empty search, no rows), or `statement` was run and
    `rows` holds its result.
    """

    rows: tuple[dict[str, Any], ...] = ()
    error: ParseError | None = None
    statement: CompiledStatement | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class PartSearchService:
    """Application service that turns search strings into part rows."""

    executor: QueryExecutor | None = None
    max_terms: int | None = None
    relaxation: str = "exhaustive"
    paramstyle: str = "qmark"

    def prepare(self, raw: str) -> PreparedSearch | ParseError:
        """Parse and compile a search string without running it.

        Args:
            raw: Search string as typed by the user.

        Returns:
            The prepared search, or a `ParseError` for malformed input.
        """
        query = search_str_to_query(raw, max_terms=self.max_terms, relaxation=self.relaxation)
        if isinstance(query, ParseError):
            log.debug("Rejected search %r: %s", raw, query.describe())
            return query

        statement = compile_statement(query, paramstyle=self.paramstyle)
        log.debug(
            "Prepared search %r filters=%s statement=%s",
            raw,
            dict(query.filters),
            "none" if statement is None else f"{len(statement.params)} params",
        )
        return PreparedSearch(query=query, statement=statement)

    def search(self, raw: str) -> SearchResult:
        """Search for parts matching a search string.

        Args:
            raw: Search string as typed by the user.

        Returns:
            Search result; malformed input is reported through `error`.

        Raises:
            RuntimeError: If a statement must run but no executor is configured.
        """
        prepared = self.prepare(raw)
        if isinstance(prepared, ParseError):
            return SearchResult(error=prepared)
        if prepared.statement is None:
            return SearchResult()
        if self.executor is None:
            raise RuntimeError("No query executor is configured")

        rows = self.executor.execute(prepared.statement.sql, prepared.statement.params)
        log.info("Search %r matched %d parts", raw, len(rows))
        return SearchResult(
            rows=tuple({sane_column_key(k): v for k, v in row.items()} for row in rows),
            statement=prepared.statement,
        )


def sane_column_key(name: str) -> str:
    """Normalize a result column name (`STATUS_CODE` -> `status-code`)."""
    return name.replace("_", "-").lower()
