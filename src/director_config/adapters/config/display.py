"""Rendering settings and resolved director configuration.

Contents:
    * :func:`display_config` - the tool's layered settings, delegated to
      lib_layered_config's Rich display.
    * :func:`display_director_config` - a resolved director snapshot as a Rich
      table or JSON.
    * :func:`render_json` - orjson serialization shared by JSON outputs.

Pending log output is flushed first so log lines never interleave with the
rendered document.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import lib_log_rich.runtime
import orjson
from lib_layered_config import Config
from lib_layered_config import OutputFormat as LibOutputFormat
from lib_layered_config import display_config as _lib_display
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from director_config.application.snapshot import DirectorConfig
from director_config.domain.enums import OutputFormat
from director_config.domain.fingerprint import thaw


def _flush_logs() -> None:
    if lib_log_rich.runtime.is_initialised():
        lib_log_rich.runtime.flush()


def render_json(payload: Mapping[str, Any]) -> str:
    """Serialize *payload* as indented JSON with sorted keys.

    Read-only mappings and tuples anywhere in *payload* are accepted.

    Example:
        >>> print(render_json({"port": 25555, "flush_arp": False}))
        {
          "flush_arp": false,
          "port": 25555
        }
    """
    return orjson.dumps(thaw(payload), option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS).decode("utf-8")


def display_config(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    console: Console | None = None,
    profile: str | None = None,
) -> None:
    """Display the tool's layered settings with provenance comments.

    Args:
        config: Already-loaded layered configuration object to display.
        output_format: TOML-like human output or JSON.
        section: Optional section name to display only that section.
        console: Optional Rich Console for output, mainly for tests.
        profile: Optional profile name to include in provenance comments.

    Raises:
        ValueError: If a section was requested that doesn't exist.
    """
    _flush_logs()
    lib_format = LibOutputFormat(output_format.value)
    _lib_display(config, output_format=lib_format, section=section, profile=profile, console=console)


def _format_cell(value: Any) -> str:
    if value is None:
        return "[dim]-[/dim]"
    if isinstance(value, Mapping):
        return escape(render_json(value))
    if isinstance(value, list):
        return escape(", ".join(str(item) for item in value)) or "[dim](none)[/dim]"
    return escape(str(value))


def display_director_config(
    snapshot: DirectorConfig,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    console: Console | None = None,
) -> None:
    """Display the resolved values of *snapshot*.

    Args:
        snapshot: Validated director configuration.
        output_format: Rich table or JSON.
        console: Optional Rich Console for output, mainly for tests.
    """
    _flush_logs()
    out = console or Console()
    values = snapshot.to_dict()

    if output_format is OutputFormat.JSON:
        out.print(render_json(values), markup=False, highlight=False, soft_wrap=True)
        return

    table = Table(title="Director configuration", show_lines=False)
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")
    for key in sorted(values):
        table.add_row(key, _format_cell(values[key]))
    out.print(table)


__all__ = [
    "display_config",
    "display_director_config",
    "render_json",
]
