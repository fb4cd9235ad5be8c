"""Translate director connection parameters into a SQLAlchemy engine.

The derived parameters use the director's adapter vocabulary (``postgres``,
``mysql2``, libpq-style ``ssl*`` keys). This module maps them onto a
SQLAlchemy URL, DBAPI ``connect_args`` and engine keyword arguments. No
connection is opened until the engine is first used.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Final

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine

from director_config.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

DRIVERS: Final[Mapping[str, str]] = {
    "postgres": "postgresql+psycopg2",
    "mysql2": "mysql+pymysql",
    "sqlite": "sqlite",
}

_URL_KEYS: Final = ("adapter", "host", "port", "user", "password", "database")

ENGINE_KEYWORDS: Final[Mapping[str, str]] = {
    "max_connections": "pool_size",
    "pool_timeout": "pool_timeout",
}

_MYSQL_TLS_KEYS: Final[Mapping[str, str]] = {
    "sslca": "ssl_ca",
    "sslcert": "ssl_cert",
    "sslkey": "ssl_key",
    "sslverify": "ssl_verify_cert",
}


@dataclass(frozen=True, slots=True)
class EngineArguments:
    """Everything :func:`sqlalchemy.create_engine` needs."""

    url: URL
    connect_args: dict[str, Any] = field(default_factory=dict)
    engine_kwargs: dict[str, Any] = field(default_factory=dict)


def _driver_name(adapter: object) -> str:
    if not isinstance(adapter, str) or not adapter:
        raise ConfigurationError("db.adapter is required to create a database engine")
    return DRIVERS.get(adapter, adapter)


def _port(value: object) -> int | None:
    if value is None:
        return None
    try:
        return int(str(value))
    except ValueError as exc:
        raise ConfigurationError(f"db.port must be an integer, got {value!r}") from exc


def engine_arguments(parameters: Mapping[str, Any]) -> EngineArguments:
    """Split derived connection parameters into URL, driver, and pool settings.

    Example:
        >>> args = engine_arguments({
        ...     "adapter": "postgres", "host": "127.0.0.1", "port": 5432, "database": "bosh",
        ...     "sslmode": "verify-full", "sslrootcert": "/ca",
        ...     "driver_options": {"sslcert": "/cert", "sslkey": "/key"},
        ...     "max_connections": 32,
        ... })
        >>> args.url.drivername, args.url.port
        ('postgresql+psycopg2', 5432)
        >>> sorted(args.connect_args)
        ['sslcert', 'sslkey', 'sslmode', 'sslrootcert']
        >>> args.engine_kwargs
        {'pool_size': 32}
    """
    adapter = parameters.get("adapter")
    url = URL.create(
        drivername=_driver_name(adapter),
        username=parameters.get("user"),
        password=parameters.get("password"),
        host=parameters.get("host"),
        port=_port(parameters.get("port")),
        database=parameters.get("database"),
    )

    connect_args: dict[str, Any] = {}
    engine_kwargs: dict[str, Any] = {}
    for key, value in parameters.items():
        if key in _URL_KEYS:
            continue
        if key in ENGINE_KEYWORDS:
            engine_kwargs[ENGINE_KEYWORDS[key]] = value
        elif key == "driver_options" and isinstance(value, Mapping):
            connect_args.update(value)
        elif adapter == "mysql2" and key == "ssl_mode":
            connect_args["ssl_verify_identity"] = value == "verify_identity"
        elif adapter == "mysql2" and key in _MYSQL_TLS_KEYS:
            connect_args[_MYSQL_TLS_KEYS[key]] = value
        else:
            connect_args[key] = value

    return EngineArguments(url=url, connect_args=connect_args, engine_kwargs=engine_kwargs)


def create_database_engine(parameters: Mapping[str, Any]) -> Engine:
    """Create a lazily connecting engine from derived connection parameters.

    Raises:
        ConfigurationError: When the adapter is missing or the port is not numeric.
    """
    arguments = engine_arguments(parameters)
    logger.info(
        "Creating database engine",
        extra={
            "url": arguments.url.render_as_string(hide_password=True),
            "tls": any(key.startswith("ssl") for key in arguments.connect_args),
        },
    )
    return create_engine(arguments.url, connect_args=arguments.connect_args, **arguments.engine_kwargs)


__all__ = [
    "DRIVERS",
    "ENGINE_KEYWORDS",
    "EngineArguments",
    "create_database_engine",
    "engine_arguments",
]
