"""SQL domain configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PartSearch.config.common import expect_str, get_optional_value, get_section
from PartSearch.sql.compiler import PARAMSTYLES


@dataclass(frozen=True, slots=True)
class SqlConfig:
    """Store validated SQL compilation settings."""

    paramstyle: str


def load_sql(raw: Mapping[str, Any]) -> SqlConfig:
    """Load sql domain config from raw mapping."""
    section = get_section(raw, "sql", required=False)
    paramstyle = expect_str(get_optional_value(section, "paramstyle", "qmark"), "sql.paramstyle")
    return SqlConfig(paramstyle=paramstyle.strip().lower())


def check_sql(config: SqlConfig) -> None:
    """Validate sql domain constraints."""
    if config.paramstyle not in PARAMSTYLES:
        raise ValueError(f"sql.paramstyle must be one of {list(PARAMSTYLES)}")
