"""CLI package for PartSearch command orchestration."""

from __future__ import annotations

__all__ = ["CommandRunner", "cli", "main"]

from PartSearch.cli.runner import CommandRunner
from PartSearch.cli.ui import cli


def main() -> None:
    """Run PartSearch CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()
