"""Search operator registry.

Maps each supported search operator (the `planner` in `planner:jelliott`)
to the SQL column it restricts and the formatter applied to its values.

The registry is a closed, static table. The parser only recognizes names
listed here, so the compiler never sees anything else; looking up an
unregistered name is a programming error and raises `KeyError`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from PartSearch.core.query import FilterValue, Negated

_RE_FILTER_NAME = re.compile(r"^[a-z]+$")


@dataclass(frozen=True, slots=True)
class FilterSpec:
    """Column mapping and value formatter for one search operator."""

    column: str
    format_value: Callable[[str], str] = str


@dataclass(frozen=True, slots=True)
class FilterConditions:
    """SQL conditions for one filter plus the parameters they bind."""

    clauses: tuple[str, ...]
    params: tuple[str, ...]


FILTERS: Mapping[str, FilterSpec] = {
    "planner": FilterSpec(column="ip.planner_buyer", format_value=str.upper),
}


def registered_filter_names() -> tuple[str, ...]:
    """Return all search operator names, in registry order."""
    return tuple(FILTERS.keys())


def check_registry(filters: Mapping[str, FilterSpec] = FILTERS) -> None:
    """Validate the registry table.

    Args:
        filters: Registry to check.

    Raises:
        ValueError: If a name is not lower-case letters or a column is empty.
        TypeError: If a formatter is not callable.
    """
    for name, spec in filters.items():
        if not _RE_FILTER_NAME.match(name):
            raise ValueError(f"filter name must be lower-case letters: {name!r}")
        if not spec.column.strip():
            raise ValueError(f"filter {name!r} must map to a column")
        if not callable(spec.format_value):
            raise TypeError(f"filter {name!r} value formatter must be callable")


def separate_filter_values(values: Sequence[FilterValue]) -> tuple[list[str], list[str]]:
    """Split filter values into positive and negated groups, keeping order."""
    positive: list[str] = []
    negative: list[str] = []
    for value in values:
        if isinstance(value, Negated):
            negative.append(value.value)
        else:
            positive.append(value)
    return positive, negative


def filter_conditions(
    name: str,
    values: Sequence[FilterValue],
    placeholder: Callable[[], str],
) -> FilterConditions:
    """Build the IN / NOT IN conditions for one filter.

    Args:
        name: Registered filter name.
        values: Positive and negated values in search order.
        placeholder: Returns the next bind placeholder each time it is called.

    Returns:
        Conditions and their parameters, positive group first.
    """
    spec = FILTERS[name]
    positive, negative = separate_filter_values(values)

    clauses: list[str] = []
    params: list[str] = []
    for op, group in (("IN", positive), ("NOT IN", negative)):
        if not group:
            continue
        formatted = [spec.format_value(v) for v in group]
        marks = ", ".join(placeholder() for _ in formatted)
        clauses.append(f"({spec.column} {op} ({marks}))")
        params.extend(formatted)
    return FilterConditions(clauses=tuple(clauses), params=tuple(params))


check_registry()
