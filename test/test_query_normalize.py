"""Tests for search term sanitization and normalization."""

import random
import string
import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PartSearch.core.query import EMPTY_QUERY, Negated, NormalizedQuery, ParseError
from PartSearch.query.normalize import (
    escape_special_chars,
    normalize,
    sanitize_search_term,
    search_str_to_term_map,
)

_SANITIZED_CHARS = "\"'()[]{},.*?_"
_SPECIAL_CHARS = "&=\\-;~|$!>"


def _insert_randomly(rng: random.Random, s: str, chars: str) -> str:
    out = s
    for _ in range(rng.randint(0, 8)):
        i = rng.randint(0, len(out))
        out = out[:i] + rng.choice(chars) + out[i:]
    return out


def _random_alnum(rng: random.Random) -> str:
    return "".join(rng.choice(string.ascii_letters + string.digits) for _ in range(rng.randint(0, 12)))


class TestSanitizeAndEscape(unittest.TestCase):
    def test_sanitization_removes_only_unsupported_chars(self) -> None:
        rng = random.Random(7)
        for _ in range(200):
            s = _random_alnum(rng)
            self.assertEqual(sanitize_search_term(_insert_randomly(rng, s, _SANITIZED_CHARS)), s)

    def test_special_chars_are_escaped(self) -> None:
        rng = random.Random(11)
        for _ in range(200):
            s = _insert_randomly(rng, _random_alnum(rng), _SPECIAL_CHARS)
            expected = "".join("\\" + c if c in _SPECIAL_CHARS else c for c in s)
            self.assertEqual(escape_special_chars(s), expected)

    def test_escape_examples(self) -> None:
        self.assertEqual(escape_special_chars("a&b"), "a\\&b")
        self.assertEqual(escape_special_chars("x\\y"), "x\\\\y")
        self.assertEqual(escape_special_chars("plain"), "plain")


class TestTermMap(unittest.TestCase):
    def test_empty_search(self) -> None:
        self.assertEqual(search_str_to_term_map(""), EMPTY_QUERY)
        self.assertEqual(normalize(()), NormalizedQuery(terms=(), negations=(), filters={}))

    def test_non_literal_terms_keep_order(self) -> None:
        self.assertEqual(
            search_str_to_term_map("bias unit 900").terms,
            (("{bias}", "%bias%"), ("{unit}", "%unit%"), ("{900}", "%900%")),
        )

    def test_literal_and_non_literal_terms(self) -> None:
        self.assertEqual(
            search_str_to_term_map('bias "unit" 900'),
            NormalizedQuery(terms=(("{bias}", "%bias%"), ("{unit}",), ("{900}", "%900%"))),
        )

    def test_sanitize_before_shaping(self) -> None:
        self.assertEqual(search_str_to_term_map("(bias)").terms, (("{bias}", "%bias%"),))
        self.assertEqual(search_str_to_term_map('"a.b, c"').terms, (("{ab c}",),))

    def test_only_wildcard_alternative_is_escaped(self) -> None:
        self.assertEqual(search_str_to_term_map("a&b").terms, (("{a&b}", "%a\\&b%"),))

    def test_term_negation(self) -> None:
        self.assertEqual(
            search_str_to_term_map("bias -orbit"),
            NormalizedQuery(terms=(("{bias}", "%bias%"),), negations=("{orbit}",)),
        )
        self.assertEqual(search_str_to_term_map('-"orbit"').negations, ("{orbit}",))

    def test_filter_accumulation(self) -> None:
        self.assertEqual(
            search_str_to_term_map("planner:sbennett planner:jelliott").filters,
            {"planner": ("sbennett", "jelliott")},
        )
        self.assertEqual(
            search_str_to_term_map("planner:jelliott -planner:sbennett").filters,
            {"planner": ("jelliott", Negated("sbennett"))},
        )

    def test_filter_concatenation(self) -> None:
        self.assertEqual(
            search_str_to_term_map("planner:sbennett planner:sfernandez,jelliott -planner:mgibson").filters,
            {"planner": ("sbennett", "sfernandez", "jelliott", Negated("mgibson"))},
        )

    def test_full_term_map(self) -> None:
        self.assertEqual(
            search_str_to_term_map('planner:sbennett,jelliott "bias" assy -orbit -planner:mgibson'),
            NormalizedQuery(
                terms=(("{bias}",), ("{assy}", "%assy%")),
                negations=("{orbit}",),
                filters={"planner": ("sbennett", "jelliott", Negated("mgibson"))},
            ),
        )

    def test_parse_error_is_passed_through(self) -> None:
        self.assertIsInstance(search_str_to_term_map('bias"'), ParseError)


if __name__ == "__main__":
    unittest.main()
