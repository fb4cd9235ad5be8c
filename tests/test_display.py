"""Rendering of resolved director snapshots and the tool's own settings."""

from __future__ import annotations

import io
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

import orjson
import pytest
from lib_layered_config import Config
from rich.console import Console

from director_config.adapters.config.display import display_config, display_director_config, render_json
from director_config.adapters.memory import StaticTokenDecoder, fixed_host_addresses
from director_config.application.snapshot import DirectorConfig, build_director_config
from director_config.domain.enums import OutputFormat


def _snapshot(document: dict[str, Any]) -> DirectorConfig:
    return build_director_config(
        document,
        addresses=fixed_host_addresses(("127.0.0.1", "10.0.0.5", "fd7a::")),
        build_token_decoder=StaticTokenDecoder().build,
    )


def _recording_console() -> Console:
    return Console(file=io.StringIO(), width=200, record=True, color_system=None)


# ======================== render_json ========================


@pytest.mark.os_agnostic
def test_render_json_sorts_keys_and_indents() -> None:
    """Output is stable regardless of insertion order."""
    assert render_json({"port": 25555, "name": "bosh"}) == '{\n  "name": "bosh",\n  "port": 25555\n}'


@pytest.mark.os_agnostic
def test_render_json_accepts_read_only_nested_values() -> None:
    """Mapping proxies and tuples from a frozen snapshot serialize like dicts and lists."""
    driver_options = MappingProxyType({"sslkey": "/k"})
    payload = MappingProxyType({"db": MappingProxyType({"driver_options": driver_options}), "ips": ("10.0.0.5",)})

    assert orjson.loads(render_json(payload)) == {"db": {"driver_options": {"sslkey": "/k"}}, "ips": ["10.0.0.5"]}


# ======================== display_director_config ========================


@pytest.mark.os_agnostic
def test_director_json_output_is_the_plain_snapshot(full_director_document: dict[str, Any]) -> None:
    """JSON output parses back to the snapshot's plain-data view."""
    snapshot = _snapshot(full_director_document)
    console = _recording_console()

    display_director_config(snapshot, output_format=OutputFormat.JSON, console=console)

    assert orjson.loads(console.export_text()) == snapshot.to_dict()


@pytest.mark.os_agnostic
def test_director_table_lists_settings_and_addresses(minimal_director_document: dict[str, Any]) -> None:
    """The human table shows one row per setting, with lists joined and nulls dashed."""
    console = _recording_console()

    display_director_config(_snapshot(minimal_director_document), console=console)
    text = console.export_text()

    assert "Director configuration" in text
    assert "max_vm_create_tries" in text
    assert "10.0.0.5, fd7a::" in text
    assert "127.0.0.1" not in text
    assert "health_monitor_port" in text


@pytest.mark.os_agnostic
def test_director_table_keeps_bracketed_values_literal(minimal_director_document: dict[str, Any]) -> None:
    """Values that look like Rich markup are printed as written."""
    document = {**minimal_director_document, "name": "[bold]director[/bold]"}
    console = _recording_console()

    display_director_config(_snapshot(document), console=console)

    assert "[bold]director[/bold]" in console.export_text()


# ======================== display_config ========================


@pytest.mark.os_agnostic
def test_settings_display_rejects_unknown_sections(config_factory: Callable[[dict[str, Any]], Config]) -> None:
    """Asking for a missing settings section is a ValueError."""
    config = config_factory({"director": {"config_file": "/var/vcap/jobs/director/config/director.yml"}})

    with pytest.raises(ValueError, match="not found"):
        display_config(config, output_format=OutputFormat.JSON, section="uaa")


@pytest.mark.os_agnostic
def test_settings_display_renders_as_json(capsys: pytest.CaptureFixture[str]) -> None:
    """The director section of the tool's settings renders as JSON."""
    config = Config({"director": {"config_file": "/etc/director.yml"}}, {})

    display_config(config, output_format=OutputFormat.JSON)

    assert '"config_file": "/etc/director.yml"' in capsys.readouterr().out
