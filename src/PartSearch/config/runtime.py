"""Runtime domain configuration (logging, process behavior)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from PartSearch.config.common import (
    expect_bool,
    expect_str,
    get_optional_value,
    get_required_value,
    get_section,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

LOG_LEVEL_ENV = "PART_SEARCH_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Store validated runtime behavior settings."""

    level: str
    to_file: bool
    dir: str


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load runtime configuration from raw mapping.

    The `PART_SEARCH_LOG_LEVEL` environment variable, when set, takes
    precedence over `log.level`.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed runtime configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "log", required=True)
    level = os.getenv(LOG_LEVEL_ENV, "").strip() or expect_str(
        get_required_value(section, "level", "log.level"), "log.level"
    )
    return RuntimeConfig(
        level=level.upper(),
        to_file=expect_bool(get_optional_value(section, "to_file", False), "log.to_file"),
        dir=expect_str(get_optional_value(section, "dir", "log"), "log.dir"),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Validate runtime domain constraints.

    Raises:
        ValueError: If values violate runtime constraints.
    """
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {sorted(_ALLOWED_LOG_LEVELS)}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty")
