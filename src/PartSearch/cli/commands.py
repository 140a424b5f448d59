"""Command implementations for PartSearch CLI.

Encapsulates the work behind each command, separated from CLI parameter
handling. Commands return the text to print and whether the search string
was accepted.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from PartSearch.core.query import ParseError
from PartSearch.query.normalize import search_str_to_term_map
from PartSearch.query.relaxation import build_text_query
from PartSearch.renderers import render_error, render_error_json, render_explain, render_json, render_text
from PartSearch.services.search import PartSearchService
from PartSearch.utils.log import log


@dataclass(frozen=True, slots=True)
class CommandOutput:
    """Text to print and whether the search string parsed."""

    text: str
    ok: bool = True


@dataclass(slots=True)
class CompileCommand:
    """Compile a search string into SQL and parameters."""

    service: PartSearchService
    output_format: str = "text"

    def execute(self, raw: str) -> CommandOutput:
        prepared = self.service.prepare(raw)
        if isinstance(prepared, ParseError):
            log.warning("Search rejected: %s", prepared.describe())
            if self.output_format == "json":
                return CommandOutput(json.dumps(render_error_json(prepared), ensure_ascii=False), ok=False)
            return CommandOutput(render_error(prepared), ok=False)

        if self.output_format == "json":
            return CommandOutput(json.dumps(render_json(prepared), ensure_ascii=False, indent=2))
        return CommandOutput(render_text(prepared))


@dataclass(slots=True)
class ExplainCommand:
    """Show how a search string is interpreted."""

    max_terms: int | None = None
    relaxation: str = "exhaustive"

    def execute(self, raw: str) -> CommandOutput:
        normalized = search_str_to_term_map(raw, max_terms=self.max_terms)
        if isinstance(normalized, ParseError):
            log.warning("Search rejected: %s", normalized.describe())
            return CommandOutput(render_error(normalized), ok=False)
        return CommandOutput(render_explain(normalized, build_text_query(normalized, relaxation=self.relaxation)))
