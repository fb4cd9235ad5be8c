"""Type-safe domain enums for output formats, database adapters, and identity providers."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format options for configuration display.

    Inherits from str to allow direct string comparison and Click integration.

    Attributes:
        HUMAN: Human-readable TOML-like output format.
        JSON: Machine-readable JSON output format.

    Example:
        >>> OutputFormat.HUMAN.value
        'human'
        >>> OutputFormat.JSON == "json"
        True
    """

    HUMAN = "human"
    JSON = "json"


class DatabaseAdapter(str, Enum):
    """Database adapters with dedicated TLS parameter shapes.

    Any other adapter string is passed through untouched and receives no
    TLS-derived parameters.

    Attributes:
        POSTGRES: PostgreSQL; client certificates go into ``driver_options``.
        MYSQL2: MySQL; client certificates stay top-level.

    Example:
        >>> DatabaseAdapter("postgres") is DatabaseAdapter.POSTGRES
        True
        >>> DatabaseAdapter.MYSQL2 == "mysql2"
        True
    """

    POSTGRES = "postgres"
    MYSQL2 = "mysql2"


class IdentityProviderKind(str, Enum):
    """Authentication strategies selectable through ``user_management.provider``.

    Attributes:
        LOCAL: Users and passwords listed in the director configuration.
        UAA: Bearer tokens issued by a UAA server.

    Example:
        >>> IdentityProviderKind("uaa")
        <IdentityProviderKind.UAA: 'uaa'>
    """

    LOCAL = "local"
    UAA = "uaa"


__all__ = [
    "DatabaseAdapter",
    "IdentityProviderKind",
    "OutputFormat",
]
