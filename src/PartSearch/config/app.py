from __future__ import annotations

"""Application config orchestration and YAML loading entrypoints."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from PartSearch.config.runtime import RuntimeConfig, check_runtime, load_runtime
from PartSearch.config.search import SearchConfig, check_search, load_search
from PartSearch.config.sql import SqlConfig, check_sql, load_sql

DEFAULT_CONFIG_PATH = Path(__file__).with_name("default.yml")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    runtime: RuntimeConfig
    search: SearchConfig
    sql: SqlConfig


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    runtime = load_runtime(raw)
    search = load_search(raw)
    sql = load_sql(raw)

    check_runtime(runtime)
    check_search(search)
    check_sql(sql)

    return AppConfig(runtime=runtime, search=search, sql=sql)


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return load_config_with_defaults(path, default_path=path)


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load config by merging defaults and optional override."""
    base = parse_yaml(default_path.read_text(encoding="utf-8"))
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
