"""CLI command implementations.

Contents:
    * Info command from :mod:`.info`
    * Settings display from :mod:`.config`
    * Director document commands from :mod:`.director`
"""

from __future__ import annotations

from .config import cli_config
from .director import cli_authenticate, cli_check, cli_db_params, cli_ips, cli_show
from .info import cli_info

__all__ = [
    "cli_authenticate",
    "cli_check",
    "cli_config",
    "cli_db_params",
    "cli_info",
    "cli_ips",
    "cli_show",
]
