"""SQL compiler for part searches.

Compiles a `SearchQuery` into a parameterized SELECT over the IFS inventory
part tables, ranked by Oracle text score.

Rules
- The text query is always the first parameter.
- Filters add `IN` / `NOT IN` conditions in filter order; their values
  follow the text query in the parameter list, in emission order.
- A query without a text query compiles to None: there is nothing to rank,
  so callers return an empty result without touching the database.
"""

from __future__ import annotations

from typing import Callable

from PartSearch.core.query import CompiledStatement, SearchQuery
from PartSearch.sql.filters import filter_conditions

PARAMSTYLES = ("qmark", "numeric")

_SELECT_COLUMNS = (
    "ip.part_no AS id",
    "ipcp.cust_part_no AS customer_part",
    "ipcp.issue",
    "ipcp.description",
    "ip.description AS full_description",
    "decode(ip.type_code_db, 3, 'Raw', ip.type_code) AS type",
    "ip.part_status AS status_code",
    "initcap(ps.description) AS status",
)

_FROM = (
    "FROM ifsapp.inventory_part ip"
    " INNER JOIN ifsinfo.inv_part_cust_part_no ipcp"
    " ON ip.part_no = ipcp.part_no"
    " INNER JOIN ifsapp.inventory_part_status_par ps"
    " ON ip.part_status = ps.part_status"
)

_ORDER_BY = "ORDER BY score(1) DESC, ip.description DESC"


def _placeholders(paramstyle: str) -> Callable[[], str]:
    """Return a callable producing successive bind placeholders."""
    if paramstyle not in PARAMSTYLES:
        raise ValueError(f"Unsupported paramstyle: {paramstyle}")
    counter = 0

    def next_placeholder() -> str:
        nonlocal counter
        counter += 1
        return "?" if paramstyle == "qmark" else f":{counter}"

    return next_placeholder


def compile_statement(query: SearchQuery, *, paramstyle: str = "qmark") -> CompiledStatement | None:
    """Compile a search query into SQL text and parameters.

    Args:
        query: Text query plus filters.
        paramstyle: `qmark` (`?`) or `numeric` (`:1`, `:2`, ...).

    Returns:
        The compiled statement, or None when `query.text_query` is None.

    Raises:
        ValueError: If `paramstyle` is unsupported.
        KeyError: If a filter name is not registered.
    """
    if query.text_query is None:
        return None

    placeholder = _placeholders(paramstyle)
    contains = f"contains(ip.text_id$, {placeholder()}, 1) > 0"

    conditions: list[str] = []
    params: list[str] = [query.text_query]
    for name, values in query.filters.items():
        compiled = filter_conditions(name, values, placeholder)
        if not compiled.clauses:
            continue
        if len(compiled.clauses) == 1:
            conditions.append(compiled.clauses[0])
        else:
            conditions.append("(" + " AND ".join(compiled.clauses) + ")")
        params.extend(compiled.params)

    where = contains
    if conditions:
        where = "(" + " AND ".join([contains, *conditions]) + ")"

    sql = " ".join(
        [
            "SELECT " + ", ".join(_SELECT_COLUMNS),
            _FROM,
            "WHERE " + where,
            _ORDER_BY,
        ]
    )
    return CompiledStatement(sql=sql, params=tuple(params))
