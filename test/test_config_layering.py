"""Tests for layered config parsing and validation."""

import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PartSearch.config import DEFAULT_CONFIG_PATH, load_config, load_config_with_defaults, parse_config_dict
from PartSearch.config.runtime import LOG_LEVEL_ENV


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "search": {"max_terms": 10, "relaxation": "exhaustive"},
        "sql": {"paramstyle": "qmark"},
    }


class TestConfigLayering(unittest.TestCase):
    def setUp(self) -> None:
        patcher = patch.dict(os.environ, {}, clear=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop(LOG_LEVEL_ENV, None)

    def test_parse_success_nested_access(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "INFO")
        self.assertFalse(cfg.runtime.to_file)
        self.assertEqual(cfg.search.max_terms, 10)
        self.assertEqual(cfg.search.relaxation, "exhaustive")
        self.assertEqual(cfg.sql.paramstyle, "qmark")

    def test_default_file_parses(self) -> None:
        cfg = load_config(DEFAULT_CONFIG_PATH)
        self.assertEqual(cfg.search.max_terms, 10)
        self.assertEqual(cfg.sql.paramstyle, "qmark")

    def test_optional_sections_default(self) -> None:
        raw = {"log": {"level": "debug"}, "search": {"max_terms": 4}}
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.runtime.level, "DEBUG")
        self.assertEqual(cfg.search.relaxation, "exhaustive")
        self.assertEqual(cfg.sql.paramstyle, "qmark")

    def test_missing_search_section(self) -> None:
        raw = _base_raw_config()
        del raw["search"]
        with self.assertRaisesRegex(ValueError, "search"):
            parse_config_dict(raw)

    def test_max_terms_must_be_positive(self) -> None:
        raw = _base_raw_config()
        raw["search"]["max_terms"] = 0
        with self.assertRaisesRegex(ValueError, "search\\.max_terms"):
            parse_config_dict(raw)

    def test_max_terms_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["search"]["max_terms"] = "10"
        with self.assertRaisesRegex(TypeError, "search\\.max_terms"):
            parse_config_dict(raw)

    def test_unknown_relaxation(self) -> None:
        raw = _base_raw_config()
        raw["search"]["relaxation"] = "fuzzy"
        with self.assertRaisesRegex(ValueError, "search\\.relaxation"):
            parse_config_dict(raw)

    def test_unknown_paramstyle(self) -> None:
        raw = _base_raw_config()
        raw["sql"]["paramstyle"] = "format"
        with self.assertRaisesRegex(ValueError, "sql\\.paramstyle"):
            parse_config_dict(raw)

    def test_unknown_log_level(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "LOUD"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)

    def test_log_level_env_override(self) -> None:
        with patch.dict(os.environ, {LOG_LEVEL_ENV: "debug"}):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.runtime.level, "DEBUG")

    def test_override_merges_with_defaults(self) -> None:
        override_yaml = """
search:
  relaxation: tiered

sql:
  paramstyle: numeric
"""
        with tempfile.TemporaryDirectory() as tmp:
            override_path = Path(tmp) / "override.yml"
            override_path.write_text(override_yaml, encoding="utf-8")
            cfg = load_config_with_defaults(override_path)

        self.assertEqual(cfg.search.max_terms, 10)
        self.assertEqual(cfg.search.relaxation, "tiered")
        self.assertEqual(cfg.sql.paramstyle, "numeric")
        self.assertEqual(cfg.runtime.level, "INFO")

    def test_non_mapping_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.yml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaisesRegex(ValueError, "mapping"):
                load_config(path)


if __name__ == "__main__":
    unittest.main()
