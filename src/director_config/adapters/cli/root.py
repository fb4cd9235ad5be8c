"""The ``director-config`` command group.

Global options select the settings profile, patch individual settings with
``--set`` and switch full tracebacks on. Subcommands find the loaded settings
and the wired services in :class:`~.context.CLIContext`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import rich_click as click

from director_config import __init__conf__
from director_config.adapters.config.overrides import apply_overrides

from .constants import CLICK_CONTEXT_SETTINGS
from .context import apply_traceback_preferences, store_cli_context

if TYPE_CHECKING:
    from director_config.composition import AppServices


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option("--traceback/--no-traceback", default=False, help="Print full tracebacks for unexpected errors")
@click.option("--profile", default=None, help="Settings profile to load, e.g. 'staging'")
@click.option(
    "--set",
    "set_overrides",
    multiple=True,
    metavar="SECTION.KEY=VALUE",
    help="Replace one setting of the tool for this run; repeatable",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, profile: str | None, set_overrides: tuple[str, ...]) -> None:
    """Load settings, start logging and hand shared state to the subcommand.

    ``ctx.obj`` arrives as the services factory and leaves as a
    :class:`~.context.CLIContext`.

    Example:
        >>> from click.testing import CliRunner
        >>> from director_config.composition import build_testing
        >>> CliRunner().invoke(cli, ["--help"], obj=build_testing).exit_code
        0
    """
    factory = ctx.obj
    if not callable(factory):
        raise RuntimeError("cli needs a services factory as obj, e.g. composition.build_production")
    services: AppServices = factory()

    try:
        config = apply_overrides(services.get_config(profile=profile), set_overrides)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    services.init_logging(config)
    store_cli_context(
        ctx,
        traceback=traceback,
        config=config,
        services=services,
        profile=profile,
        set_overrides=set_overrides,
    )
    apply_traceback_preferences(traceback)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _register_commands() -> None:
    # Command modules import this package, so they are attached after ``cli`` exists.
    from .commands import (
        cli_authenticate,
        cli_check,
        cli_config,
        cli_db_params,
        cli_info,
        cli_ips,
        cli_show,
    )

    for command in (cli_check, cli_show, cli_db_params, cli_ips, cli_authenticate, cli_config, cli_info):
        cli.add_command(command)


_register_commands()


__all__ = ["cli"]
