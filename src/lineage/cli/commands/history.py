from __future__ import annotations

from pathlib import Path

import click

from lineage.cli.common import cli_error_handler
from lineage.cli.console import console
from lineage.cli.context import CLIContext
from lineage.cli.output import OutputFormat, format_json, history_table
from lineage.logging import bind_context
from lineage.vcs.resolver import HistoryResolver


@click.command()
@click.argument(
    "path",
    type=click.Path(path_type=Path),
)
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format.",
)
@click.option(
    "-n",
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Show at most N entries (text format only).",
)
@click.pass_context
def history(ctx: click.Context, path: Path, fmt: str, limit: int | None) -> None:
    """Show the version-control history of a file.

    Tries git, then Perforce, then Subversion, and prints the history from
    the first one that tracks PATH.

    Examples:
        lineage history src/main.c
        lineage history --format json src/main.c
    """
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]

    target = path.expanduser().absolute()
    bind_context(command="history", path=str(target))
    resolver = HistoryResolver(cli_ctx.config)
    with cli_error_handler():
        result = resolver.resolve(target)

    if OutputFormat(fmt) is OutputFormat.JSON:
        click.echo(format_json(result.to_dict()))
        return

    if not result.entries:
        if not cli_ctx.quiet:
            click.echo(
                f"No history for {result.relative_path} "
                f"(provider: {result.provider.value})",
                err=True,
            )
        return

    console.print(history_table(result, limit=limit))
