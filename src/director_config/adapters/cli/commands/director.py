"""Commands operating on a director configuration document.

Contents:
    * :func:`cli_check` - Validate a document and report the director addresses.
    * :func:`cli_show` - Display the resolved configuration.
    * :func:`cli_db_params` - Print derived database connection parameters.
    * :func:`cli_ips` - List the addresses eligible as director IPs.
    * :func:`cli_authenticate` - Check an Authorization header against the
      configured identity provider.

Every command that reads a document accepts an optional PATH (falling back to
``[director] config_file``) and repeatable ``--override KEY.PATH=VALUE``
options applied before validation.
"""

from __future__ import annotations

import logging
from pathlib import Path

import lib_log_rich.runtime
import rich_click as click

from director_config.adapters.config.director_file import resolve_director_file_path
from director_config.adapters.config.display import render_json
from director_config.adapters.config.overrides import apply_document_overrides
from director_config.application.snapshot import DirectorConfig, build_director_config
from director_config.domain.enums import OutputFormat
from director_config.domain.errors import AuthenticationError, ConfigurationError
from director_config.domain.network import select_director_ips

from ..constants import CLICK_CONTEXT_SETTINGS
from ..context import CLIContext, get_cli_context
from ..exit_codes import ExitCode

logger = logging.getLogger(__name__)

_path_argument = click.argument(
    "path",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
_override_option = click.option(
    "--override",
    "overrides",
    multiple=True,
    default=(),
    metavar="KEY.PATH=VALUE",
    help="Override a value in the director document before validation (repeatable).",
)


def _fail(message: str, code: ExitCode) -> SystemExit:
    click.echo(f"Error: {message}", err=True)
    return SystemExit(code)


def _load_snapshot(cli_ctx: CLIContext, path: Path | None, overrides: tuple[str, ...]) -> DirectorConfig:
    """Read, override, validate and publish the director document.

    Raises:
        click.UsageError: When an ``--override`` is malformed.
        SystemExit: With FILE_NOT_FOUND, PERMISSION_DENIED or CONFIG_ERROR.
    """
    services = cli_ctx.services
    try:
        document_path = resolve_director_file_path(cli_ctx.config, path)
        raw = services.load_director_file(document_path)
    except FileNotFoundError as exc:
        raise _fail(f"Director configuration not found: {exc.filename or path}", ExitCode.FILE_NOT_FOUND) from exc
    except PermissionError as exc:
        raise _fail(f"Cannot read director configuration: {exc}", ExitCode.PERMISSION_DENIED) from exc
    except ConfigurationError as exc:
        raise _fail(str(exc), ExitCode.CONFIG_ERROR) from exc

    try:
        raw = apply_document_overrides(raw, overrides)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    try:
        snapshot = build_director_config(
            raw,
            addresses=services.list_host_addresses(),
            build_token_decoder=services.build_token_decoder,
        )
    except ConfigurationError as exc:
        logger.error("Director configuration rejected", extra={"path": str(document_path), "error": str(exc)})
        raise _fail(str(exc), ExitCode.CONFIG_ERROR) from exc

    cli_ctx.config_holder.publish(snapshot)
    return snapshot


@click.command("check", context_settings=CLICK_CONTEXT_SETTINGS)
@_path_argument
@_override_option
@click.option(
    "--director-uuid",
    type=str,
    default=None,
    help="Record a director start event for this director UUID after validation.",
)
@click.pass_context
def cli_check(ctx: click.Context, path: Path | None, overrides: tuple[str, ...], director_uuid: str | None) -> None:
    """Validate a director configuration document.

    Exits with 78 (EX_CONFIG) when the document is rejected and with 2 when
    it does not exist.
    """
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-check", extra={"command": "check"}):
        snapshot = _load_snapshot(cli_ctx, path, overrides)
        if director_uuid:
            cli_ctx.services.record_event(snapshot.log_director_start(director_uuid))

        click.echo(f"Director configuration is valid (identity provider: {snapshot.identity_provider_kind.value})")
        click.echo(f"Director IPs: {', '.join(snapshot.director_ips) or '(none)'}")


@click.command("show", context_settings=CLICK_CONTEXT_SETTINGS)
@_path_argument
@_override_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=OutputFormat.HUMAN.value,
    help="Output format (human-readable or JSON)",
)
@click.pass_context
def cli_show(ctx: click.Context, path: Path | None, overrides: tuple[str, ...], output_format: str) -> None:
    """Display the resolved director configuration with defaults applied."""
    cli_ctx = get_cli_context(ctx)
    fmt = OutputFormat(output_format.lower())
    with lib_log_rich.runtime.bind(job_id="cli-show", extra={"command": "show", "format": fmt.value}):
        snapshot = _load_snapshot(cli_ctx, path, overrides)
        cli_ctx.services.display_director_config(snapshot, output_format=fmt)


@click.command("db-params", context_settings=CLICK_CONTEXT_SETTINGS)
@_path_argument
@_override_option
@click.option(
    "--engine",
    "build_engine",
    is_flag=True,
    default=False,
    help="Also build a SQLAlchemy engine from the parameters (no connection is opened).",
)
@click.pass_context
def cli_db_params(ctx: click.Context, path: Path | None, overrides: tuple[str, ...], build_engine: bool) -> None:
    """Print the database connection parameters derived from the ``db`` section."""
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-db-params", extra={"command": "db-params"}):
        snapshot = _load_snapshot(cli_ctx, path, overrides)
        try:
            parameters = snapshot.db_connection_parameters()
        except ConfigurationError as exc:
            raise _fail(str(exc), ExitCode.CONFIG_ERROR) from exc

        click.echo(render_json(parameters))
        if build_engine:
            engine = cli_ctx.services.create_database_engine(parameters)
            click.echo(f"Engine: {engine.dialect.name}+{engine.dialect.driver}")
            engine.dispose()


@click.command("ips", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_ips(ctx: click.Context) -> None:
    """List host addresses eligible as director IPs, one per line."""
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-ips", extra={"command": "ips"}):
        try:
            addresses = cli_ctx.services.list_host_addresses()
        except ConfigurationError as exc:
            raise _fail(str(exc), ExitCode.GENERAL_ERROR) from exc
        for address in select_director_ips(addresses):
            click.echo(address)


@click.command("authenticate", context_settings=CLICK_CONTEXT_SETTINGS)
@_path_argument
@_override_option
@click.option(
    "--authorization",
    required=True,
    envvar="DIRECTOR_AUTHORIZATION",
    metavar="HEADER",
    help="Authorization header value, e.g. 'Basic ...' or 'Bearer ...'.",
)
@click.pass_context
def cli_authenticate(ctx: click.Context, path: Path | None, overrides: tuple[str, ...], authorization: str) -> None:
    """Authenticate an Authorization header against the configured provider.

    Exits with 13 when the credentials are rejected.
    """
    cli_ctx = get_cli_context(ctx)
    with lib_log_rich.runtime.bind(job_id="cli-authenticate", extra={"command": "authenticate"}):
        snapshot = _load_snapshot(cli_ctx, path, overrides)
        try:
            user = snapshot.identity_provider.authenticate({"Authorization": authorization})
        except AuthenticationError as exc:
            logger.warning("Authentication rejected", extra={"reason": str(exc)})
            raise _fail(str(exc), ExitCode.PERMISSION_DENIED) from exc

        click.echo(f"Authenticated as {user.username}")
        if user.scopes:
            click.echo(f"Scopes: {' '.join(user.scopes)}")


__all__ = [
    "cli_authenticate",
    "cli_check",
    "cli_db_params",
    "cli_ips",
    "cli_show",
]
