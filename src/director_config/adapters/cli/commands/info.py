"""``info``: installed version and distribution details."""

from __future__ import annotations

import logging

import lib_log_rich.runtime
import rich_click as click

from director_config import __init__conf__

from ..constants import CLICK_CONTEXT_SETTINGS

logger = logging.getLogger(__name__)


@click.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Show the installed director-config version, homepage and author."""
    with lib_log_rich.runtime.bind(job_id="cli-info", extra={"command": "info"}):
        logger.debug("Printing distribution metadata")
        __init__conf__.print_info()


__all__ = ["cli_info"]
