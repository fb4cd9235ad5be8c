"""``config``: print the tool's own settings with their source layers.

This shows where director-config looks for the director document and how it
logs, never the director document itself; ``show`` covers that.
"""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click
from lib_layered_config import Config

from director_config.adapters.config.overrides import apply_overrides
from director_config.domain.enums import OutputFormat

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)


def _settings_for(cli_ctx: CLIContext, profile: str | None) -> tuple[Config, str | None]:
    # A subcommand profile rereads the layers; root --set values still apply.
    if not profile:
        return cli_ctx.config, cli_ctx.profile
    return apply_overrides(cli_ctx.services.get_config(profile=profile), cli_ctx.set_overrides), profile


@click.command("config", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([member.value for member in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="human (TOML with provenance) or json",
)
@click.option("--section", default=None, help="Limit output to one section, e.g. 'director'")
@click.option("--profile", default=None, help="Read this profile instead of the root command's")
@click.pass_context
def cli_config(ctx: click.Context, output_format: str, section: str | None, profile: str | None) -> None:
    """Print the merged settings of director-config.

    Later layers win: bundled defaults, app, host, user, .env, environment,
    then --set.
    """
    cli_ctx = get_cli_context(ctx)
    settings, active_profile = _settings_for(cli_ctx, profile)
    fmt = OutputFormat(output_format.lower())

    with lib_log_rich.runtime.bind(
        job_id="cli-config", extra={"command": "config", "format": fmt.value, "profile": active_profile}
    ):
        logger.info("Printing tool settings", extra={"section": section})
        try:
            cli_ctx.services.display_config(settings, output_format=fmt, section=section, profile=active_profile)
        except ValueError as exc:
            click.echo(f"Error: {exc}", err=True)
            raise SystemExit(ExitCode.INVALID_ARGUMENT) from exc


__all__ = ["cli_config"]
