"""Command-line overrides: ``--set`` for the tool's settings, ``--override`` for director documents."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner, Result
from hypothesis import given
from hypothesis import strategies as st
from lib_layered_config import Config

from director_config.adapters import cli as cli_mod
from director_config.adapters.config.overrides import (
    ConfigOverride,
    apply_document_overrides,
    apply_overrides,
    coerce_value,
    parse_override,
)

if TYPE_CHECKING:
    from conftest import DirectorCliContext

_names = st.from_regex(r"[a-z][a-z0-9_]{0,11}", fullmatch=True)

# ======================== coerce_value ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("true", True),
        ("false", False),
        ("25555", 25555),
        ("-1", -1),
        ("0.5", 0.5),
        ("null", None),
        ('["10.0.0.5", "10.0.0.6"]', ["10.0.0.5", "10.0.0.6"]),
        ('{"enabled": true}', {"enabled": True}),
        ("postgres", "postgres"),
        ("https://uaa.example.com:8443", "https://uaa.example.com:8443"),
        ("bosh director", "bosh director"),
        ("", ""),
    ],
)
def test_values_are_json_when_possible(raw: str, expected: Any) -> None:
    assert coerce_value(raw) == expected


@pytest.mark.os_agnostic
@given(st.integers(min_value=-(2**63), max_value=2**63 - 1))
def test_any_64_bit_integer_comes_back_as_itself(value: int) -> None:
    assert coerce_value(str(value)) == value


@pytest.mark.os_agnostic
@given(st.text(max_size=40))
def test_coercion_never_raises(raw: str) -> None:
    """Whatever the shell passes, the result is JSON data or the text itself."""
    result = coerce_value(raw)

    assert isinstance(result, (str, int, float, bool, list, dict, type(None)))


# ======================== parse_override ========================


@pytest.mark.os_agnostic
def test_nested_paths_and_equals_in_values() -> None:
    override = parse_override("db.connection_options.options=-c search_path=bosh")

    assert override == ConfigOverride(key_path=("db", "connection_options", "options"), value="-c search_path=bosh")
    assert override.section == "db"


@pytest.mark.os_agnostic
@given(st.lists(_names, min_size=2, max_size=5), st.text(max_size=20))
def test_key_path_is_the_dotted_name_before_the_first_equals(parts: list[str], value: str) -> None:
    override = parse_override(".".join(parts) + "=" + value)

    assert override.key_path == tuple(parts)
    assert override.value == coerce_value(value)


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ("director.config_file", "must contain '='"),
        ("config_file=/x.yml", "at least one dot"),
        ("=", "at least one dot"),
        (".config_file=/x.yml", "empty component"),
        ("director..config_file=/x.yml", "empty component"),
        ("director.=/x.yml", "empty component"),
    ],
)
def test_malformed_settings_overrides_are_rejected(raw: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        parse_override(raw)


@pytest.mark.os_agnostic
def test_document_overrides_may_name_a_top_level_key() -> None:
    assert parse_override("max_vm_create_tries=3", require_section=False).key_path == ("max_vm_create_tries",)


# ======================== apply_overrides (--set) ========================


@pytest.mark.os_agnostic
def test_no_settings_overrides_keep_the_same_config() -> None:
    settings = Config({"director": {"config_file": "/a.yml"}}, {})

    assert apply_overrides(settings, ()) is settings


@pytest.mark.os_agnostic
def test_settings_overrides_merge_into_existing_and_new_sections() -> None:
    settings = Config({"director": {"config_file": "/a.yml"}, "lib_log_rich": {"console_level": "INFO"}}, {})

    patched = apply_overrides(
        settings,
        ("director.config_file=/b.yml", "lib_log_rich.payload_limits.message_max_chars=8192", "uaa.verify=false"),
    )

    assert patched["director"]["config_file"] == "/b.yml"
    assert patched["lib_log_rich"]["console_level"] == "INFO"
    assert patched["lib_log_rich"]["payload_limits"]["message_max_chars"] == 8192
    assert patched["uaa"]["verify"] is False
    assert settings["director"]["config_file"] == "/a.yml"


@pytest.mark.os_agnostic
def test_settings_override_through_a_scalar_is_rejected() -> None:
    with pytest.raises(ValueError, match="director.config_file holds a str"):
        apply_overrides(Config({}, {}), ("director.config_file=/a.yml", "director.config_file.path=/b.yml"))


# ======================== apply_document_overrides (--override) ========================


@pytest.mark.os_agnostic
def test_document_overrides_leave_the_source_untouched() -> None:
    document = {"local_dns": {"enabled": False, "include_index": True}, "port": 25555}

    patched = apply_document_overrides(document, ("local_dns.enabled=true", "port=25556", "dns.domain_name=bosh1"))

    assert patched == {
        "local_dns": {"enabled": True, "include_index": True},
        "port": 25556,
        "dns": {"domain_name": "bosh1"},
    }
    assert document == {"local_dns": {"enabled": False, "include_index": True}, "port": 25555}


@pytest.mark.os_agnostic
def test_document_override_through_a_scalar_is_rejected() -> None:
    with pytest.raises(ValueError, match="local_dns holds a str"):
        apply_document_overrides({"local_dns": "on"}, ("local_dns.enabled=true",))


# ======================== Through the CLI ========================


@pytest.mark.os_agnostic
def test_set_values_reach_every_subcommand(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    factory = config_cli_context({"director": {"config_file": "/a.yml"}, "lib_log_rich": {"console_level": "INFO"}})

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "director.config_file=/b.yml", "--set", "lib_log_rich.console_level=DEBUG", "config", "--format", "json"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "/b.yml" in result.stdout
    assert "DEBUG" in result.stdout


@pytest.mark.os_agnostic
@pytest.mark.parametrize("raw", ["director.config_file", "config_file=/b.yml", ""])
def test_malformed_set_values_are_usage_errors(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
    raw: str,
) -> None:
    factory = config_cli_context({"director": {"config_file": "/a.yml"}})

    result: Result = cli_runner.invoke(cli_mod.cli, ["--set", raw, "config"], obj=factory)

    assert result.exit_code == 2
    assert "Invalid override" in result.output


@pytest.mark.os_agnostic
def test_document_override_changes_the_resolved_value(
    cli_runner: CliRunner,
    director_cli_context: Callable[..., DirectorCliContext],
    minimal_director_document: dict[str, Any],
) -> None:
    ctx = director_cli_context(minimal_director_document)

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["show", str(ctx.path), "--format", "json", "--override", "max_vm_create_tries=9"],
        obj=ctx.factory,
    )

    assert result.exit_code == 0
    assert '"max_vm_create_tries": 9' in result.stdout


@pytest.mark.os_agnostic
def test_malformed_document_override_is_a_usage_error(
    cli_runner: CliRunner,
    director_cli_context: Callable[..., DirectorCliContext],
    minimal_director_document: dict[str, Any],
) -> None:
    ctx = director_cli_context(minimal_director_document)

    result: Result = cli_runner.invoke(
        cli_mod.cli, ["check", str(ctx.path), "--override", "max_vm_create_tries"], obj=ctx.factory
    )

    assert result.exit_code != 0
    assert "must contain '='" in result.output
