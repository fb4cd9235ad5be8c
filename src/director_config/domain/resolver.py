"""Typed accessors over the raw director configuration document.

Contents:
    * :func:`resolve` - presence-checked, kind-checked lookup of one value.
    * :class:`Setting` - declarative description of a resolvable setting.
    * :data:`DIRECTOR_SETTINGS` - every scalar setting the director exposes.

System Role:
    Pure domain logic. Missing keys and explicit nulls fall back to the
    documented default; values of the wrong kind raise :class:`TypeMismatch`
    instead of being coerced silently.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final

from .errors import ConfigurationError, TypeMismatch

KeyPath = str | tuple[str, ...]
"""Dotted string (``"local_dns.enabled"``) or tuple of keys."""

Validator = Callable[[str, Any], None]
"""Callable receiving ``(key, value)`` and raising ConfigurationError on violation."""

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")


class _Required:
    """Sentinel marking settings that have no default."""

    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED: Final = _Required()


def _split_key_path(key_path: KeyPath) -> tuple[str, ...]:
    if isinstance(key_path, str):
        return tuple(key_path.split("."))
    return key_path


def _lookup(config: Mapping[str, Any], parts: tuple[str, ...]) -> tuple[bool, Any]:
    """Walk *parts* through nested mappings, reporting presence separately from value.

    A null section on the way counts as absent, so `local_dns: ~` behaves
    like an omitted `local_dns`.
    """
    current: Any = config
    for depth, part in enumerate(parts):
        if current is None:
            return False, None
        if not isinstance(current, Mapping):
            raise TypeMismatch(".".join(parts[:depth]), "mapping", current)
        if part not in current:
            return False, None
        current = current[part]
    return True, current


def _coerce(key: str, value: Any, kind: type) -> Any:
    if kind is bool:
        if isinstance(value, bool):
            return value
        raise TypeMismatch(key, "bool", value)

    if kind is int:
        if isinstance(value, bool):
            raise TypeMismatch(key, "int", value)
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and _INTEGER_PATTERN.fullmatch(value.strip()):
            return int(value.strip())
        raise TypeMismatch(key, "int", value)

    if kind is str:
        if isinstance(value, str):
            return value
        # YAML reads `version: 1.0` as a float.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        raise TypeMismatch(key, "str", value)

    if kind is Mapping or kind is dict:
        if isinstance(value, Mapping):
            return value
        raise TypeMismatch(key, "mapping", value)

    if kind is Sequence or kind is list:
        if isinstance(value, (list, tuple)):
            return value
        raise TypeMismatch(key, "list", value)

    raise TypeError(f"Unsupported setting kind: {kind!r}")


def resolve(
    config: Mapping[str, Any],
    key_path: KeyPath,
    default: Any,
    kind: type,
    *,
    validator: Validator | None = None,
) -> Any:
    """Return the value at *key_path* as *kind*, or *default* when absent.

    Presence is checked key by key, so an explicit ``false`` nested in a
    sub-mapping is returned as ``False`` rather than replaced by a ``True``
    default. An explicit null counts as absent.

    Args:
        config: Raw configuration mapping.
        key_path: Dotted path or tuple of keys.
        default: Fallback for missing or null values, or :data:`REQUIRED`.
        kind: One of ``bool``, ``int``, ``str``, ``Mapping``, ``Sequence``.
        validator: Optional extra check applied to the resolved value.

    Returns:
        The resolved value, or *default*.

    Raises:
        TypeMismatch: When the value (or an intermediate) has the wrong kind.
        ConfigurationError: When a required value is missing or the validator
            rejects the value.

    Examples:
        >>> resolve({"local_dns": {"enabled": False}}, "local_dns.enabled", True, bool)
        False
        >>> resolve({}, "local_dns.enabled", True, bool)
        True
        >>> resolve({"max_vm_create_tries": "3"}, "max_vm_create_tries", 5, int)
        3
        >>> resolve({"max_vm_create_tries": "bad number"}, "max_vm_create_tries", 5, int)
        Traceback (most recent call last):
        ...
        director_config.domain.errors.TypeMismatch: max_vm_create_tries: expected int, got str ('bad number')
    """
    parts = _split_key_path(key_path)
    key = ".".join(parts)
    present, value = _lookup(config, parts)

    if not present or value is None:
        if default is REQUIRED:
            raise ConfigurationError(f"{key} is required and must not be null")
        return default

    resolved = _coerce(key, value, kind)
    if validator is not None:
        validator(key, resolved)
    return resolved


def non_negative(key: str, value: int) -> None:
    """Reject negative integers.

    Example:
        >>> non_negative("max_vm_create_tries", 0)
        >>> non_negative("max_vm_create_tries", -1)
        Traceback (most recent call last):
        ...
        director_config.domain.errors.ConfigurationError: max_vm_create_tries must be a non-negative integer, got -1
    """
    if value < 0:
        raise ConfigurationError(f"{key} must be a non-negative integer, got {value}")


@dataclass(frozen=True, slots=True)
class Setting:
    """How one typed value is extracted from the raw configuration.

    Attributes:
        name: Attribute name on the resolved snapshot.
        key: Location in the raw document.
        default: Fallback value, or :data:`REQUIRED`.
        kind: Expected kind passed to :func:`resolve`.
        validator: Optional extra check.

    Example:
        >>> Setting("flush_arp", "flush_arp", False, bool).resolve({"flush_arp": True})
        True
    """

    name: str
    key: KeyPath
    default: Any
    kind: type
    validator: Validator | None = None

    def resolve(self, config: Mapping[str, Any]) -> Any:
        return resolve(config, self.key, self.default, self.kind, validator=self.validator)


DIRECTOR_SETTINGS: Final[tuple[Setting, ...]] = (
    Setting("name", "name", None, str),
    Setting("version", "version", None, str),
    Setting("port", "port", 25555, int),
    Setting("health_monitor_port", "health_monitor_port", None, int),
    Setting("agent_wait_timeout", "agent_wait_timeout", 600, int, non_negative),
    Setting("preferred_cpi_api_version", "preferred_cpi_api_version", None, int),
    Setting("cpi_task_log", "cloud.properties.cpi_log", None, str),
    Setting("max_vm_create_tries", "max_vm_create_tries", 5, int, non_negative),
    Setting("flush_arp", "flush_arp", False, bool),
    Setting("local_dns_enabled", "local_dns.enabled", False, bool),
    Setting("local_dns_include_index", "local_dns.include_index", False, bool),
    Setting("local_dns_use_dns_addresses", "local_dns.use_dns_addresses", False, bool),
    Setting("keep_unreachable_vms", "keep_unreachable_vms", False, bool),
    Setting("enable_nats_delivered_templates", "enable_nats_delivered_templates", False, bool),
    Setting("allow_errands_on_stopped_instances", "allow_errands_on_stopped_instances", False, bool),
    Setting("enable_cpi_resize_disk", "enable_cpi_resize_disk", False, bool),
    Setting("parallel_problem_resolution", "parallel_problem_resolution", True, bool),
    Setting("verify_multidigest_path", "verify_multidigest_path", REQUIRED, str),
    Setting("root_domain", "dns.domain_name", "bosh", str),
)


def resolve_settings(
    config: Mapping[str, Any],
    settings: Sequence[Setting] = DIRECTOR_SETTINGS,
) -> dict[str, Any]:
    """Resolve every setting in *settings*, keyed by attribute name.

    Example:
        >>> values = resolve_settings({"verify_multidigest_path": "/bin/verify"})
        >>> values["max_vm_create_tries"], values["parallel_problem_resolution"], values["root_domain"]
        (5, True, 'bosh')
    """
    return {setting.name: setting.resolve(config) for setting in settings}


__all__ = [
    "DIRECTOR_SETTINGS",
    "KeyPath",
    "REQUIRED",
    "Setting",
    "Validator",
    "non_negative",
    "resolve",
    "resolve_settings",
]
