"""The ``config`` command: the tool's own settings, never the director document."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from click.testing import CliRunner, Result
from lib_layered_config import Config

from director_config.adapters import cli as cli_mod

DIRECTOR_YML = "/var/vcap/jobs/director/config/director.yml"


@pytest.mark.os_agnostic
def test_bundled_defaults_name_the_director_document(
    cli_runner: CliRunner,
    production_factory: Callable[[], Any],
) -> None:
    result: Result = cli_runner.invoke(cli_mod.cli, ["config", "--format", "json"], obj=production_factory)

    assert result.exit_code == 0
    assert DIRECTOR_YML in result.stdout


@pytest.mark.os_agnostic
def test_human_output_lists_sections_with_nested_values(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    factory = config_cli_context(
        {
            "director": {"config_file": "/etc/bosh/director.yml"},
            "lib_log_rich": {"console_level": "DEBUG", "extra_fields": ["job_id", "command"]},
        }
    )

    result: Result = cli_runner.invoke(cli_mod.cli, ["config"], obj=factory)

    assert result.exit_code == 0
    assert "[director]" in result.stdout
    assert "[lib_log_rich]" in result.stdout
    assert "extra_fields" in result.stdout


@pytest.mark.os_agnostic
def test_section_filter_prints_only_the_director_section(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    factory = config_cli_context(
        {"director": {"config_file": "/etc/bosh/director.yml"}, "lib_log_rich": {"console_level": "DEBUG"}}
    )

    result: Result = cli_runner.invoke(
        cli_mod.cli, ["config", "--format", "json", "--section", "director"], obj=factory
    )

    assert result.exit_code == 0
    assert "/etc/bosh/director.yml" in result.stdout
    assert "console_level" not in result.stdout


@pytest.mark.os_agnostic
def test_unknown_section_is_an_invalid_argument(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    factory = config_cli_context({"director": {"config_file": DIRECTOR_YML}})

    result: Result = cli_runner.invoke(cli_mod.cli, ["config", "--section", "uaa"], obj=factory)

    assert result.exit_code == 22
    assert "not found" in result.stderr


@pytest.mark.os_agnostic
def test_secret_looking_settings_are_redacted(
    cli_runner: CliRunner,
    config_cli_context: Callable[[dict[str, Any]], Callable[[], Any]],
) -> None:
    factory = config_cli_context({"director": {"config_file": DIRECTOR_YML, "db_password": "hunter2"}})

    result: Result = cli_runner.invoke(cli_mod.cli, ["config", "--format", "json"], obj=factory)

    assert result.exit_code == 0
    assert "hunter2" not in result.stdout
    assert "REDACTED" in result.stdout


@pytest.mark.os_agnostic
@pytest.mark.parametrize(("args", "expected_profiles"), [([], [None]), (["--profile", "staging"], [None, "staging"])])
def test_subcommand_profile_rereads_settings(
    cli_runner: CliRunner,
    config_factory: Callable[[dict[str, Any]], Config],
    inject_config_with_profile_capture: Callable[[Config, list[str | None]], Callable[[], Any]],
    args: list[str],
    expected_profiles: list[str | None],
) -> None:
    profiles: list[str | None] = []
    factory = inject_config_with_profile_capture(config_factory({"director": {"config_file": "x"}}), profiles)

    result: Result = cli_runner.invoke(cli_mod.cli, ["config", *args], obj=factory)

    assert result.exit_code == 0
    assert profiles == expected_profiles


@pytest.mark.os_agnostic
@pytest.mark.parametrize("args", [[], ["--profile", "staging"]])
def test_root_set_values_survive_a_reread(
    cli_runner: CliRunner,
    config_factory: Callable[[dict[str, Any]], Config],
    inject_config_with_profile_capture: Callable[[Config, list[str | None]], Callable[[], Any]],
    args: list[str],
) -> None:
    factory = inject_config_with_profile_capture(config_factory({"director": {"config_file": DIRECTOR_YML}}), [])

    result: Result = cli_runner.invoke(
        cli_mod.cli,
        ["--set", "director.config_file=/tmp/director.yml", "config", *args, "--format", "json"],
        obj=factory,
    )

    assert result.exit_code == 0
    assert "/tmp/director.yml" in result.stdout
    assert DIRECTOR_YML not in result.stdout
