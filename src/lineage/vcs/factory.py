"""History backend factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lineage.runners.command import CommandRunner
from lineage.vcs.models import Provider

if TYPE_CHECKING:
    from lineage.config import LineageConfig
    from lineage.vcs.protocol import HistoryBackend

#: Order in which the resolver tries backends.
DEFAULT_PROVIDER_ORDER: tuple[Provider, ...] = (
    Provider.GIT,
    Provider.P4,
    Provider.SVN,
)


def create_backend(
    provider: Provider | str,
    config: LineageConfig,
    runner: CommandRunner | None = None,
) -> HistoryBackend:
    """Create the backend for *provider*.

    Args:
        provider: ``"git"``, ``"p4"`` or ``"svn"``.
        config: Loaded configuration.
        runner: Runner shared by the CLI-driven backends (p4, svn).

    Returns:
        A :class:`HistoryBackend` implementation.

    Raises:
        ValueError: If *provider* is unknown or ``"none"``.
    """
    selected = Provider(provider)

    if selected is Provider.GIT:
        from lineage.git.backend import GitBackend

        return GitBackend(config.git, preview_chars=config.preview_chars)

    if selected is Provider.P4:
        from lineage.p4.backend import P4Backend

        return P4Backend(config.p4, runner, preview_chars=config.preview_chars)

    if selected is Provider.SVN:
        from lineage.svn.backend import SvnBackend

        return SvnBackend(config.svn, runner, preview_chars=config.preview_chars)

    msg = f"No backend for provider: {selected.value!r}"
    raise ValueError(msg)


def create_backends(
    config: LineageConfig,
    runner: CommandRunner | None = None,
    order: tuple[Provider, ...] = DEFAULT_PROVIDER_ORDER,
) -> tuple[HistoryBackend, ...]:
    """Create every backend in trial order, sharing one runner."""
    shared = runner or CommandRunner()
    return tuple(create_backend(provider, config, shared) for provider in order)
