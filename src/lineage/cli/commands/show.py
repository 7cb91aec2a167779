from __future__ import annotations

from pathlib import Path

import click

from lineage.cli.common import cli_error_handler
from lineage.cli.context import CLIContext, ExitCode
from lineage.cli.output import format_error
from lineage.logging import bind_context, get_logger
from lineage.vcs.resolver import HistoryResolver


@click.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.argument("revision")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write content to a file instead of stdout.",
)
@click.pass_context
def show(
    ctx: click.Context,
    path: Path,
    revision: str,
    output_path: Path | None,
) -> None:
    """Print a file as it was at REVISION.

    REVISION is a commit hash (a prefix is enough for git), a Perforce
    change number, or a Subversion revision number, as listed by
    ``lineage history``.

    Examples:
        lineage show src/main.c 1a2b3c4
        lineage show -o old.c src/main.c 12345
    """
    logger = get_logger(__name__)
    cli_ctx: CLIContext = ctx.obj["cli_ctx"]

    target = path.expanduser().absolute()
    bind_context(command="show", path=str(target))
    resolver = HistoryResolver(cli_ctx.config)
    with cli_error_handler():
        result = resolver.resolve(target)
        entry = result.find(revision)
        if entry is None:
            click.echo(
                format_error(
                    f"Revision {revision} not found in the history of "
                    f"{result.relative_path}",
                    suggestion=f"Run 'lineage history {path}' to list revisions",
                ),
                err=True,
            )
            raise SystemExit(ExitCode.INVALID_INPUT)
        if entry.deleted:
            click.echo(
                format_error(f"{entry.display_id} deleted {entry.path}"), err=True
            )
            raise SystemExit(ExitCode.FAILURE)
        content = resolver.fetch_entry_content(entry, result, target)

    logger.info("content_fetched", label=entry.label, size=len(content))
    if output_path is not None:
        output_path.write_bytes(content)
        if not cli_ctx.quiet:
            click.echo(f"Wrote {entry.label} to {output_path}", err=True)
        return

    stream = click.get_binary_stream("stdout")
    stream.write(content)
    stream.flush()
