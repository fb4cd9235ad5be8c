"""Ports: the signatures the director use cases expect from adapters.

Every port is a callable Protocol, so a plain function (or a bound method
of an in-memory fake) satisfies it without subclassing. ``Config`` and
``Engine`` are only imported for type checking; this layer never loads
lib_layered_config or SQLAlchemy itself.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.enums import OutputFormat
from ..domain.events import DirectorEvent
from ..domain.network import NetworkAddress

if TYPE_CHECKING:
    from lib_layered_config import Config
    from sqlalchemy.engine import Engine

    from .snapshot import DirectorConfig


class GetConfig(Protocol):
    """Read the tool's settings, optionally for a named profile."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class GetDefaultConfigPath(Protocol):
    """Where the bundled defaults live."""

    def __call__(self) -> Path: ...


class DisplayConfig(Protocol):
    """Print the tool's settings with their provenance."""

    def __call__(
        self, config: Config, *, output_format: OutputFormat = ..., section: str | None = ..., profile: str | None = ...
    ) -> None: ...


class InitLogging(Protocol):
    """Start logging from the ``[lib_log_rich]`` settings."""

    def __call__(self, config: Config) -> None: ...


class LoadDirectorFile(Protocol):
    """Read a director configuration document into a raw mapping."""

    def __call__(self, path: Path) -> Mapping[str, Any]: ...


class ListHostAddresses(Protocol):
    """Enumerate the IP addresses bound to the host's interfaces."""

    def __call__(self) -> Sequence[NetworkAddress]: ...


class TokenDecoder(Protocol):
    """Verify a bearer token and return its claims.

    Raises ``AuthenticationError`` for malformed, expired, or wrongly signed
    tokens.
    """

    def __call__(self, token: str) -> Mapping[str, Any]: ...


class BuildTokenDecoder(Protocol):
    """Create a token decoder from the ``user_management.uaa`` options."""

    def __call__(self, options: Mapping[str, Any], *, audience: str) -> TokenDecoder: ...


class RecordEvent(Protocol):
    """Persist or forward a director audit event."""

    def __call__(self, event: DirectorEvent) -> None: ...


class DisplayDirectorConfig(Protocol):
    """Render a resolved director configuration snapshot."""

    def __call__(self, snapshot: DirectorConfig, *, output_format: OutputFormat = ...) -> None: ...


class CreateDatabaseEngine(Protocol):
    """Hand derived connection parameters to a database driver."""

    def __call__(self, parameters: Mapping[str, Any]) -> Engine: ...


__all__ = [
    "BuildTokenDecoder",
    "CreateDatabaseEngine",
    "DisplayConfig",
    "DisplayDirectorConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "ListHostAddresses",
    "LoadDirectorFile",
    "RecordEvent",
    "TokenDecoder",
]
