"""Search domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PartSearch.config.common import (
    expect_int,
    expect_str,
    get_optional_value,
    get_required_value,
    get_section,
)
from PartSearch.query.relaxation import RELAXATIONS


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Store validated search string settings.

    Attributes:
        max_terms: Most unquoted terms accepted in one search string; each
            one doubles the size of an exhaustive relaxation query.
        relaxation: Relaxation strategy, `exhaustive` or `tiered`.
    """

    max_terms: int
    relaxation: str


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load search domain config from raw mapping.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "search", required=True)
    return SearchConfig(
        max_terms=expect_int(get_required_value(section, "max_terms", "search.max_terms"), "search.max_terms"),
        relaxation=expect_str(
            get_optional_value(section, "relaxation", "exhaustive"),
            "search.relaxation",
        ).strip().lower(),
    )


def check_search(config: SearchConfig) -> None:
    """Validate search domain constraints."""
    if config.max_terms <= 0:
        raise ValueError("search.max_terms must be positive")
    if config.relaxation not in RELAXATIONS:
        raise ValueError(f"search.relaxation must be one of {sorted(RELAXATIONS)}")
