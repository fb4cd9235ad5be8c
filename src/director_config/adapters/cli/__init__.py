"""Command-line surface for validating and inspecting director configuration."""

from __future__ import annotations

from .commands import (
    cli_authenticate,
    cli_check,
    cli_config,
    cli_db_params,
    cli_info,
    cli_ips,
    cli_show,
)
from .constants import CLICK_CONTEXT_SETTINGS, TRACEBACK_SUMMARY_LIMIT, TRACEBACK_VERBOSE_LIMIT
from .context import (
    CLIContext,
    TracebackState,
    apply_traceback_preferences,
    get_cli_context,
    restore_traceback_state,
    snapshot_traceback_state,
    store_cli_context,
)
from .exit_codes import ExitCode
from .main import main
from .root import cli

__all__ = [
    "CLICK_CONTEXT_SETTINGS",
    "CLIContext",
    "ExitCode",
    "TRACEBACK_SUMMARY_LIMIT",
    "TRACEBACK_VERBOSE_LIMIT",
    "TracebackState",
    "apply_traceback_preferences",
    "cli",
    "cli_authenticate",
    "cli_check",
    "cli_config",
    "cli_db_params",
    "cli_info",
    "cli_ips",
    "cli_show",
    "get_cli_context",
    "main",
    "restore_traceback_state",
    "snapshot_traceback_state",
    "store_cli_context",
]
