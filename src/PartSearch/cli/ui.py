"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from PartSearch.cli.runner import CommandRunner
from PartSearch.config import DEFAULT_CONFIG_PATH, load_config_with_defaults


@click.group(help="PartSearch: compile Google-style part searches into SQL.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to YAML config file, merged over the defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()
    ctx.obj = load_config_with_defaults(config_path)


@cli.command("compile")
@click.argument("query")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format.",
)
@click.pass_context
def compile_cmd(ctx: click.Context, query: str, output_format: str) -> None:
    """Print the SQL statement and parameters for QUERY."""
    runner = CommandRunner(ctx.obj)
    ctx.exit(runner.run_compile(ctx.command.name, query, output_format=output_format))


@cli.command("explain")
@click.argument("query")
@click.pass_context
def explain_cmd(ctx: click.Context, query: str) -> None:
    """Print the terms, negations, filters and text query for QUERY."""
    runner = CommandRunner(ctx.obj)
    ctx.exit(runner.run_explain(ctx.command.name, query))
