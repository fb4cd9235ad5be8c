"""Click context helpers: per-invocation CLI state and traceback flags."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import lib_cli_exit_tools
import rich_click as click
from lib_layered_config import Config

from director_config.application.current import ConfigHolder, active_config

if TYPE_CHECKING:
    from director_config.composition import AppServices

TracebackState = tuple[bool, bool]
"""Captured traceback configuration: (traceback_enabled, force_color)."""


def _process_holder() -> ConfigHolder:
    return active_config


@dataclass(slots=True)
class CLIContext:
    """State shared by every subcommand of one invocation.

    Attributes:
        traceback: Whether ``--traceback`` was given.
        config: The tool's layered settings after ``--set`` overrides.
        services: Adapter implementations from the composition root.
        profile: Settings profile requested on the root command.
        set_overrides: Raw ``--set`` strings, reapplied when a subcommand
            reloads settings for another profile.
        config_holder: Where validated director snapshots are published.
    """

    traceback: bool
    config: Config
    services: AppServices
    profile: str | None = None
    set_overrides: tuple[str, ...] = ()
    config_holder: ConfigHolder = field(default_factory=_process_holder)


def store_cli_context(
    ctx: click.Context,
    *,
    traceback: bool,
    config: Config,
    services: AppServices,
    profile: str | None = None,
    set_overrides: tuple[str, ...] = (),
    config_holder: ConfigHolder | None = None,
) -> None:
    """Replace ``ctx.obj`` (the services factory) with a :class:`CLIContext`.

    Without *config_holder* the process-wide
    :data:`~director_config.application.current.active_config` is used.

    Example:
        >>> from unittest.mock import MagicMock
        >>> from director_config.composition import build_testing
        >>> ctx = MagicMock()
        >>> store_cli_context(ctx, traceback=True, config=Config({}, {}), services=build_testing(), profile="test")
        >>> ctx.obj.traceback, ctx.obj.config_holder is active_config
        (True, True)
    """
    ctx.obj = CLIContext(
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
        config_holder=config_holder if config_holder is not None else active_config,
    )


def get_cli_context(ctx: click.Context) -> CLIContext:
    """Return the typed state stored by the root command.

    Raises:
        RuntimeError: When the root command did not run first.

    Example:
        >>> from unittest.mock import MagicMock
        >>> ctx = MagicMock()
        >>> ctx.obj = CLIContext(traceback=False, config=MagicMock(), services=MagicMock())
        >>> get_cli_context(ctx).traceback
        False
    """
    if not isinstance(ctx.obj, CLIContext):
        raise RuntimeError("CLI context not initialized. Call store_cli_context first.")
    return ctx.obj


def apply_traceback_preferences(enabled: bool) -> None:
    """Mirror *enabled* into ``lib_cli_exit_tools.config`` (traceback and colour).

    Example:
        >>> apply_traceback_preferences(True)
        >>> bool(lib_cli_exit_tools.config.traceback)
        True
    """
    lib_cli_exit_tools.config.traceback = bool(enabled)
    lib_cli_exit_tools.config.traceback_force_color = bool(enabled)


def snapshot_traceback_state() -> TracebackState:
    """Capture the traceback flags so :func:`restore_traceback_state` can undo changes.

    Example:
        >>> state = snapshot_traceback_state()
        >>> isinstance(state, tuple) and len(state) == 2
        True
    """
    return (
        bool(getattr(lib_cli_exit_tools.config, "traceback", False)),
        bool(getattr(lib_cli_exit_tools.config, "traceback_force_color", False)),
    )


def restore_traceback_state(state: TracebackState) -> None:
    """Reapply flags captured by :func:`snapshot_traceback_state`.

    Example:
        >>> original = snapshot_traceback_state()
        >>> apply_traceback_preferences(True)
        >>> restore_traceback_state(original)
        >>> lib_cli_exit_tools.config.traceback == original[0]
        True
    """
    lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = state


__all__ = [
    "CLIContext",
    "TracebackState",
    "apply_traceback_preferences",
    "get_cli_context",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
