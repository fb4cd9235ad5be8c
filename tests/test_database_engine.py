"""Translation of derived connection parameters into SQLAlchemy engine arguments."""

from __future__ import annotations

import pytest

from director_config.adapters.database.engine import create_database_engine, engine_arguments
from director_config.domain.connection import ConnectionSpec, build_connection_parameters
from director_config.domain.errors import ConfigurationError

MUTUAL_TLS = {
    "enabled": True,
    "cert": {"ca": "/ca.pem", "certificate": "/client.pem", "private_key": "/client.key"},
    "bosh_internal": {"ca_provided": True, "mutual_tls_enabled": True},
}


@pytest.mark.os_agnostic
def test_postgres_driver_options_become_connect_args() -> None:
    parameters = build_connection_parameters(
        ConnectionSpec.from_mapping(
            {"adapter": "postgres", "host": "db", "port": 5432, "user": "bosh", "database": "bosh", "tls": MUTUAL_TLS}
        )
    )

    arguments = engine_arguments(parameters)

    assert arguments.url.drivername == "postgresql+psycopg2"
    assert (arguments.url.host, arguments.url.port, arguments.url.username) == ("db", 5432, "bosh")
    assert arguments.connect_args == {
        "sslmode": "verify-full",
        "sslrootcert": "/ca.pem",
        "sslcert": "/client.pem",
        "sslkey": "/client.key",
    }


@pytest.mark.os_agnostic
def test_mysql_tls_keys_are_renamed_for_pymysql() -> None:
    parameters = build_connection_parameters(
        ConnectionSpec.from_mapping({"adapter": "mysql2", "host": "db", "port": "3306", "tls": MUTUAL_TLS})
    )

    arguments = engine_arguments(parameters)

    assert arguments.url.drivername == "mysql+pymysql"
    assert arguments.url.port == 3306
    assert arguments.connect_args == {
        "ssl_verify_identity": True,
        "ssl_verify_cert": True,
        "ssl_ca": "/ca.pem",
        "ssl_cert": "/client.pem",
        "ssl_key": "/client.key",
    }


@pytest.mark.os_agnostic
def test_pool_settings_become_engine_keywords() -> None:
    arguments = engine_arguments({"adapter": "postgres", "host": "db", "max_connections": 32, "pool_timeout": 10})

    assert arguments.engine_kwargs == {"pool_size": 32, "pool_timeout": 10}
    assert arguments.connect_args == {}


@pytest.mark.os_agnostic
def test_unknown_adapters_are_used_as_driver_names() -> None:
    assert engine_arguments({"adapter": "oracle+oracledb", "host": "db"}).url.drivername == "oracle+oracledb"


@pytest.mark.os_agnostic
def test_missing_adapter_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="db.adapter"):
        engine_arguments({"host": "db"})


@pytest.mark.os_agnostic
def test_non_numeric_port_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="db.port"):
        engine_arguments({"adapter": "postgres", "port": "fivefourthreetwo"})


@pytest.mark.os_agnostic
def test_create_database_engine_does_not_connect() -> None:
    engine = create_database_engine({"adapter": "sqlite"})

    assert engine.dialect.name == "sqlite"
    engine.dispose()
