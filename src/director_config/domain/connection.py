"""Database connection parameter derivation.

Turns the raw ``db`` section into the flat parameter mapping a driver
expects. Precedence, lowest to highest:

1. computed defaults (top-level fields, null and empty strings pruned);
2. adapter-specific TLS derivation (only when ``tls.enabled``);
3. user ``connection_options``, which override any key above.

Contents:
    * :class:`TlsSpec` and :class:`ConnectionSpec` - parsed ``db`` section.
    * :func:`layered_merge` - shallow, later-wins merge.
    * :func:`build_connection_parameters` - the derivation itself.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .enums import DatabaseAdapter
from .errors import TypeMismatch
from .fingerprint import thaw
from .resolver import resolve

_STRUCTURED_KEYS = frozenset({"tls", "connection_options"})


@dataclass(frozen=True, slots=True)
class TlsSpec:
    """TLS policy for the database connection.

    Attributes:
        enabled: Whether TLS is requested at all.
        ca_path: Root CA bundle (``tls.cert.ca``).
        certificate_path: Client certificate (``tls.cert.certificate``).
        private_key_path: Client key (``tls.cert.private_key``).
        ca_provided: Whether the operator supplied a CA
            (``tls.bosh_internal.ca_provided``).
        mutual_tls_enabled: Whether client certificates are presented
            (``tls.bosh_internal.mutual_tls_enabled``).
    """

    enabled: bool = False
    ca_path: str | None = None
    certificate_path: str | None = None
    private_key_path: str | None = None
    ca_provided: bool = False
    mutual_tls_enabled: bool = False

    @classmethod
    def from_mapping(cls, tls: Mapping[str, Any]) -> TlsSpec:
        """Parse the ``db.tls`` section.

        Example:
            >>> spec = TlsSpec.from_mapping({"enabled": True, "cert": {"ca": "/ca"},
            ...                              "bosh_internal": {"ca_provided": True}})
            >>> spec.enabled, spec.ca_path, spec.ca_provided, spec.mutual_tls_enabled
            (True, '/ca', True, False)
        """
        return cls(
            enabled=resolve(tls, "enabled", False, bool),
            ca_path=resolve(tls, "cert.ca", None, str),
            certificate_path=resolve(tls, "cert.certificate", None, str),
            private_key_path=resolve(tls, "cert.private_key", None, str),
            ca_provided=resolve(tls, "bosh_internal.ca_provided", False, bool),
            mutual_tls_enabled=resolve(tls, "bosh_internal.mutual_tls_enabled", False, bool),
        )


@dataclass(frozen=True, slots=True)
class ConnectionSpec:
    """Parsed ``db`` section.

    Attributes:
        adapter: Adapter identifier; ``postgres`` and ``mysql2`` get TLS
            derivation, anything else passes through.
        fields: Flat top-level fields in source order (``adapter`` included).
        tls: TLS policy.
        connection_options: User overrides applied last.
    """

    adapter: str | None
    fields: Mapping[str, Any]
    tls: TlsSpec = field(default_factory=TlsSpec)
    connection_options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(cls, db: Mapping[str, Any]) -> ConnectionSpec:
        """Parse a raw ``db`` section.

        Raises:
            TypeMismatch: When ``tls`` or ``connection_options`` is present but
                not a mapping.

        Example:
            >>> spec = ConnectionSpec.from_mapping({"adapter": "postgres", "host": "db", "port": 5432})
            >>> spec.adapter, dict(spec.fields), spec.tls.enabled
            ('postgres', {'adapter': 'postgres', 'host': 'db', 'port': 5432}, False)
        """
        tls_section = resolve(db, "tls", {}, Mapping)
        options = resolve(db, "connection_options", {}, Mapping)
        adapter = db.get("adapter")
        if adapter is not None and not isinstance(adapter, str):
            raise TypeMismatch("db.adapter", "str", adapter)
        fields = {key: value for key, value in db.items() if key not in _STRUCTURED_KEYS}
        return cls(
            adapter=adapter,
            fields=MappingProxyType(fields),
            tls=TlsSpec.from_mapping(tls_section),
            connection_options=MappingProxyType(dict(options)),
        )


def layered_merge(*layers: Mapping[str, Any]) -> dict[str, Any]:
    """Merge mappings shallowly; a key in a later layer replaces earlier ones.

    Example:
        >>> layered_merge({"host": "a", "port": 1}, {"sslmode": "verify-full"}, {"host": "b"})
        {'host': 'b', 'port': 1, 'sslmode': 'verify-full'}
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    return merged


def _computed_defaults(spec: ConnectionSpec) -> dict[str, Any]:
    return {key: thaw(value) for key, value in spec.fields.items() if value is not None and value != ""}


def _tls_parameters(adapter: str | None, tls: TlsSpec) -> dict[str, Any]:
    if not tls.enabled:
        return {}

    derived: dict[str, Any] = {}
    if adapter == DatabaseAdapter.POSTGRES.value:
        derived["sslmode"] = "verify-full"
        if tls.ca_provided:
            derived["sslrootcert"] = tls.ca_path
        if tls.mutual_tls_enabled:
            derived["driver_options"] = {
                "sslcert": tls.certificate_path,
                "sslkey": tls.private_key_path,
            }
    elif adapter == DatabaseAdapter.MYSQL2.value:
        derived["ssl_mode"] = "verify_identity"
        derived["sslverify"] = True
        if tls.ca_provided:
            derived["sslca"] = tls.ca_path
        if tls.mutual_tls_enabled:
            derived["sslcert"] = tls.certificate_path
            derived["sslkey"] = tls.private_key_path
    return derived


def build_connection_parameters(spec: ConnectionSpec) -> dict[str, Any]:
    """Derive the driver parameters for *spec*.

    The result is plain data: nested read-only mappings and tuples from the
    parsed section come back as dicts and lists.

    Example:
        >>> spec = ConnectionSpec.from_mapping({
        ...     "adapter": "mysql2", "host": "127.0.0.1", "port": 3306, "password": "",
        ...     "tls": {"enabled": True, "cert": {"ca": "/ca"}, "bosh_internal": {"ca_provided": True}},
        ...     "connection_options": {"sslverify": False},
        ... })
        >>> build_connection_parameters(spec)
        {'adapter': 'mysql2', 'host': '127.0.0.1', 'port': 3306, 'ssl_mode': 'verify_identity', 'sslverify': False, 'sslca': '/ca'}
    """
    return layered_merge(
        _computed_defaults(spec),
        _tls_parameters(spec.adapter, spec.tls),
        thaw(spec.connection_options),
    )


__all__ = [
    "ConnectionSpec",
    "TlsSpec",
    "build_connection_parameters",
    "layered_merge",
]
