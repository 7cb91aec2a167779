"""CLI entry point for lineage.

This module defines the Click-based command-line interface.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from lineage import __version__
from lineage.cli.commands.history import history
from lineage.cli.commands.show import show
from lineage.cli.context import CLIContext, ExitCode
from lineage.cli.output import format_error
from lineage.config import load_config
from lineage.exceptions import ConfigError
from lineage.logging import clear_context, configure_logging

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="lineage")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./lineage.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_file: str | None,
    verbose: int,
    quiet: bool,
) -> None:
    """lineage - file history from git, Perforce or Subversion."""
    ctx.ensure_object(dict)

    # p4 and svn read P4PORT, P4USER, SVN_* and friends from the environment;
    # a project .env may supply them. Existing variables win.
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    config_path = Path(config_file) if config_file else None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        details = []
        if e.field:
            details.append(f"Field: {e.field}")
        if e.value is not None:
            details.append(f"Value: {e.value}")
        click.echo(format_error(e.message, details=details), err=True)
        ctx.exit(ExitCode.FAILURE)

    ctx.obj["cli_ctx"] = CLIContext(config=config, quiet=quiet)

    # Priority: quiet > verbose > config
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = _VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)

    configure_logging(level=level)
    clear_context()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(history)
cli.add_command(show)

if __name__ == "__main__":
    cli()
