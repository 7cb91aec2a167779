from __future__ import annotations

import contextlib
from collections.abc import Generator

import click

from lineage.cli.context import ExitCode
from lineage.cli.output import format_error
from lineage.exceptions import (
    HistoryResolutionError,
    InvalidInputError,
    LineageError,
)
from lineage.logging import get_logger

__all__ = ["cli_error_handler"]


@contextlib.contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Context manager for common CLI error handling.

    Handles common error patterns across CLI commands:
    - KeyboardInterrupt: Exit with code 130
    - HistoryResolutionError: One detail line per backend, exit 1
    - InvalidInputError: Bad path or revision, exit 2
    - LineageError: Format error with message, exit 1
    - Generic exceptions: Log and format error

    Example:
        >>> with cli_error_handler():
        >>>     result = resolver.resolve(path)
    """
    logger = get_logger(__name__)

    try:
        yield
    except KeyboardInterrupt:
        click.echo("\n\nInterrupted by user.", err=True)
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except HistoryResolutionError as e:
        error_msg = format_error(
            "No backend could read this file's history",
            details=e.message.splitlines(),
        )
        click.echo(error_msg, err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except InvalidInputError as e:
        click.echo(format_error(e.message), err=True)
        raise SystemExit(ExitCode.INVALID_INPUT) from e
    except LineageError as e:
        click.echo(format_error(e.message), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except Exception as e:
        logger.exception("unexpected_cli_error")
        click.echo(f"Error: {e!s}", err=True)
        raise SystemExit(ExitCode.FAILURE) from e
