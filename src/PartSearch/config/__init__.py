from __future__ import annotations

"""Public configuration API for PartSearch."""

from PartSearch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from PartSearch.config.runtime import RuntimeConfig
from PartSearch.config.search import SearchConfig
from PartSearch.config.sql import SqlConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "SearchConfig",
    "SqlConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
