"""
multi-agent-config command line.

Commands:
- init: write a starter configuration
- validate: parse, expand and validate the configuration
- compile: write every tool's configuration file
- diff: preview what compile would change
"""

import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

import structlog
import typer

from .compiler import default_config_path, make_compiler
from .errors import ConfigValidationError, MultiAgentConfigError, exit_code_for, suggestion_for
from .models.config import ToolName
from .templates import init_config

app = typer.Typer(
    help="Compile one unified MCP server configuration into tool-specific config files.",
    no_args_is_help=True,
)

ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    envvar="MULTI_AGENT_CONFIG",
    help="Path to the unified config (default: <config dir>/multi-agent-config/config.toml)",
)
ToolOption = typer.Option(
    None, "--tool", "-t", help="Tool to compile for; repeat for several (default: all)"
)


def configure_logging(verbose: bool) -> None:
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show progress and debug logs"),
) -> None:
    configure_logging(verbose)


def _fail(exc: MultiAgentConfigError) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    if isinstance(exc, ConfigValidationError):
        for i, issue in enumerate(exc.issues, 1):
            typer.echo(f"  {i}. {issue}", err=True)
    hint = suggestion_for(exc)
    if hint:
        typer.echo(f"Hint: {hint}", err=True)
    raise typer.Exit(int(exit_code_for(exc)))


@app.command("init")
def init(
    config: Optional[Path] = ConfigOption,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Create a starter configuration file."""
    path = config or default_config_path()
    try:
        backup = init_config(path, force=force)
    except MultiAgentConfigError as e:
        _fail(e)
    if backup is not None:
        typer.echo(f"Backup: {backup}")
    typer.echo(f"Configuration initialized: {path}")
    typer.echo("Next: edit it, then run 'multi-agent-config validate' and 'multi-agent-config compile'.")


@app.command("validate")
def validate(config: Optional[Path] = ConfigOption) -> None:
    """Validate the configuration and list every problem found."""
    path = config or default_config_path()
    try:
        result = make_compiler().validate(path)
    except MultiAgentConfigError as e:
        _fail(e)
    for issue in result.warnings:
        typer.echo(f"Warning: {issue}", err=True)
    if not result.valid:
        _fail(ConfigValidationError(result.errors))
    typer.echo(f"Configuration is valid ({path})")


@app.command("compile")
def compile_(
    config: Optional[Path] = ConfigOption,
    tool: Optional[List[ToolName]] = ToolOption,
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be written"),
) -> None:
    """Write each tool's configuration file (with backup and state tracking)."""
    path = config or default_config_path()
    try:
        report = make_compiler().compile(path, tools=tool, dry_run=dry_run)
    except MultiAgentConfigError as e:
        _fail(e)
    if dry_run:
        for out in report.outputs:
            typer.echo(f"Would write {out.tool}: {out.path}")
        typer.echo("Dry run complete (no files written)")
        return
    for out in report.written:
        typer.echo(f"  {out.tool} -> {out.path}")
    typer.echo(f"Successfully compiled {len(report.written)} configuration(s)")


@app.command("diff")
def diff(
    config: Optional[Path] = ConfigOption,
    tool: Optional[List[ToolName]] = ToolOption,
) -> None:
    """Show a unified diff of what compile would change, without writing."""
    path = config or default_config_path()
    try:
        diffs = make_compiler().diff(path, tools=tool)
    except MultiAgentConfigError as e:
        _fail(e)
    for d in diffs:
        typer.echo(f"=== {d.tool} ({d.path}) ===")
        typer.echo(d.diff)


if __name__ == "__main__":
    app()
