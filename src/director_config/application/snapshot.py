"""Immutable director configuration snapshot.

Contents:
    * :class:`NatsSettings` - message bus endpoint and TLS material paths.
    * :class:`DirectorConfig` - validated, read-only view of one director
      configuration document.
    * :func:`build_director_config` - the only way to build a snapshot.

System Role:
    Orchestrates the domain pieces (setting resolution, address filtering,
    connection derivation, fingerprints) plus identity provider selection.
    Construction either succeeds completely or raises one
    :class:`~director_config.domain.errors.ConfigurationError`. Reconfiguring
    means building a new snapshot and publishing it through
    :class:`~director_config.application.current.ConfigHolder`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
from urllib.parse import urlsplit

from ..domain.connection import ConnectionSpec, build_connection_parameters
from ..domain.enums import IdentityProviderKind
from ..domain.errors import ConfigurationError
from ..domain.events import DirectorEvent, director_start_event
from ..domain.fingerprint import fingerprint, thaw
from ..domain.network import NetworkAddress, select_director_ips
from ..domain.resolver import resolve, resolve_settings
from .identity import LocalIdentityProvider, UAAIdentityProvider, create_identity_provider
from .ports import BuildTokenDecoder

logger = logging.getLogger(__name__)

_DISABLED_CONFIG_SERVER: Mapping[str, Any] = MappingProxyType({"enabled": False})


def freeze(value: Any) -> Any:
    """Return a read-only deep copy: mappings become proxies, lists become tuples.

    Example:
        >>> frozen = freeze({"a": [1, {"b": 2}]})
        >>> frozen["a"][1]["b"], type(frozen["a"]).__name__
        (2, 'tuple')
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


@dataclass(frozen=True, slots=True)
class NatsSettings:
    """Message bus settings taken from ``mbus`` and the ``nats`` section."""

    uri: str | None = None
    server_ca_path: str | None = None
    client_certificate_path: str | None = None
    client_private_key_path: str | None = None
    client_ca_certificate_path: str | None = None
    client_ca_private_key_path: str | None = None

    @classmethod
    def from_config(cls, raw: Mapping[str, Any]) -> NatsSettings:
        return cls(
            uri=resolve(raw, "mbus", None, str),
            server_ca_path=resolve(raw, "nats.server_ca_path", None, str),
            client_certificate_path=resolve(raw, "nats.client_certificate_path", None, str),
            client_private_key_path=resolve(raw, "nats.client_private_key_path", None, str),
            client_ca_certificate_path=resolve(raw, "nats.client_ca_certificate_path", None, str),
            client_ca_private_key_path=resolve(raw, "nats.client_ca_private_key_path", None, str),
        )


@dataclass(frozen=True, slots=True)
class DirectorConfig:
    """Validated, immutable view of a director configuration document.

    Every attribute is resolved at construction; fingerprints are computed
    once and cached. Instances are safe to share between threads.
    """

    raw: Mapping[str, Any]

    name: str | None
    version: str | None
    port: int
    health_monitor_port: int | None
    agent_wait_timeout: int
    preferred_cpi_api_version: int | None
    cpi_task_log: str | None
    max_vm_create_tries: int
    flush_arp: bool
    local_dns_enabled: bool
    local_dns_include_index: bool
    local_dns_use_dns_addresses: bool
    keep_unreachable_vms: bool
    enable_nats_delivered_templates: bool
    allow_errands_on_stopped_instances: bool
    enable_cpi_resize_disk: bool
    parallel_problem_resolution: bool
    verify_multidigest_path: str
    root_domain: str

    director_ips: tuple[str, ...]
    config_server: Mapping[str, Any]
    nats: NatsSettings
    agent_env: Mapping[str, Any]
    database: ConnectionSpec | None
    blobstore_config_fingerprint: str
    nats_config_fingerprint: str
    identity_provider: LocalIdentityProvider | UAAIdentityProvider

    @property
    def identity_provider_kind(self) -> IdentityProviderKind:
        return self.identity_provider.kind

    @property
    def config_server_enabled(self) -> bool:
        return bool(self.config_server.get("enabled", False))

    @property
    def config_server_urls(self) -> list[str]:
        """URLs of the enabled config server; empty when disabled."""
        if not self.config_server_enabled:
            return []
        return [self.config_server["url"]]

    def db_connection_parameters(self) -> dict[str, Any]:
        """Derive driver parameters for the ``db`` section.

        Raises:
            ConfigurationError: When the document has no ``db`` section.
        """
        if self.database is None:
            raise ConfigurationError("db section is not configured")
        return build_connection_parameters(self.database)

    def director_start_event(self, object_type: str, object_name: str, context: Mapping[str, Any]) -> DirectorEvent:
        return director_start_event(object_type, object_name, context)

    def log_director_start(self, director_uuid: str) -> DirectorEvent:
        """Event announcing that the director process with *director_uuid* started."""
        return director_start_event("director", director_uuid, {"version": self.version})

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view of the resolved values, for display and serialization."""
        settings = resolve_settings(self.raw)
        return {
            **settings,
            "director_ips": list(self.director_ips),
            "config_server": thaw(self.config_server),
            "nats": {
                "uri": self.nats.uri,
                "server_ca_path": self.nats.server_ca_path,
                "client_certificate_path": self.nats.client_certificate_path,
                "client_private_key_path": self.nats.client_private_key_path,
                "client_ca_certificate_path": self.nats.client_ca_certificate_path,
                "client_ca_private_key_path": self.nats.client_ca_private_key_path,
            },
            "identity_provider": self.identity_provider_kind.value,
            "blobstore_config_fingerprint": self.blobstore_config_fingerprint,
            "nats_config_fingerprint": self.nats_config_fingerprint,
        }


def _config_server(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    section = resolve(raw, "config_server", {}, Mapping)
    if not resolve(section, "enabled", False, bool):
        return _DISABLED_CONFIG_SERVER

    url = resolve(section, "url", None, str)
    if url is None:
        raise ConfigurationError("config_server.url is required when the config server is enabled")
    if urlsplit(url).scheme.lower() != "https":
        raise ConfigurationError(f"Config Server URL should always be https. Currently it is {url}")
    return freeze(section)


def build_director_config(
    raw: Mapping[str, Any],
    *,
    addresses: Sequence[NetworkAddress],
    build_token_decoder: BuildTokenDecoder,
) -> DirectorConfig:
    """Validate *raw* and build an immutable snapshot.

    Args:
        raw: Parsed director configuration document.
        addresses: Host interface addresses used for :attr:`DirectorConfig.director_ips`.
        build_token_decoder: Token verifier factory for the UAA provider.

    Returns:
        A fully resolved :class:`DirectorConfig`.

    Raises:
        ConfigurationError: For a missing ``verify_multidigest_path``, a
            non-https config server URL, a malformed value, an unknown identity
            provider, or a malformed ``db`` section.
    """
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Director configuration must be a mapping, got {type(raw).__name__}")

    frozen = freeze(raw)
    settings = resolve_settings(frozen)
    db_section = resolve(frozen, "db", None, Mapping)

    snapshot = DirectorConfig(
        raw=frozen,
        **settings,
        director_ips=tuple(select_director_ips(addresses)),
        config_server=_config_server(frozen),
        nats=NatsSettings.from_config(frozen),
        agent_env=resolve(frozen, "agent.env.bosh", MappingProxyType({}), Mapping),
        database=ConnectionSpec.from_mapping(db_section) if db_section is not None else None,
        blobstore_config_fingerprint=fingerprint(frozen.get("blobstore"), name="blobstore"),
        nats_config_fingerprint=fingerprint(frozen.get("nats"), name="nats"),
        identity_provider=create_identity_provider(
            resolve(frozen, "user_management", None, Mapping),
            build_token_decoder=build_token_decoder,
        ),
    )
    logger.info(
        "Director configuration resolved",
        extra={
            "director_name": snapshot.name,
            "director_ips": list(snapshot.director_ips),
            "identity_provider": snapshot.identity_provider_kind.value,
        },
    )
    return snapshot


__all__ = [
    "DirectorConfig",
    "NatsSettings",
    "build_director_config",
    "freeze",
]
