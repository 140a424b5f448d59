"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation and error handling for
command execution.
"""

from __future__ import annotations

import click

from PartSearch.cli.commands import CommandOutput, CompileCommand, ExplainCommand
from PartSearch.config import AppConfig
from PartSearch.services import create_search_service
from PartSearch.utils.log import configure_logging, log

# Exit status for a search string that does not parse.
EXIT_INVALID_SEARCH = 2


class CommandRunner:
    """Orchestrates command execution for the CLI."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run_compile(self, action: str, raw: str, *, output_format: str) -> int:
        """Compile a search string and print the statement.

        Args:
            action: The CLI command name (e.g., 'compile').
            raw: Search string.
            output_format: `text` or `json`.

        Returns:
            Process exit status.

        Raises:
            click.Abort: When compilation fails unexpectedly.
        """
        self._configure(action)
        command = CompileCommand(
            service=create_search_service(self.config),
            output_format=output_format,
        )
        return self._run(command.execute, raw)

    def run_explain(self, action: str, raw: str) -> int:
        """Print how a search string is interpreted.

        Raises:
            click.Abort: When the search cannot be explained.
        """
        self._configure(action)
        command = ExplainCommand(
            max_terms=self.config.search.max_terms,
            relaxation=self.config.search.relaxation,
        )
        return self._run(command.execute, raw)

    def _configure(self, action: str) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )

    def _run(self, execute, raw: str) -> int:
        try:
            output: CommandOutput = execute(raw)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Command failed: %s", e)
            raise click.Abort from e
        click.echo(output.text)
        return 0 if output.ok else EXIT_INVALID_SEARCH
