"""Output renderers for the PartSearch CLI."""

from __future__ import annotations

from PartSearch.renderers.console import render_error, render_explain, render_text
from PartSearch.renderers.json import render_error_json, render_json

__all__ = [
    "render_error",
    "render_error_json",
    "render_explain",
    "render_json",
    "render_text",
]
