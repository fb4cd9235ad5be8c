"""``KEY.PATH=VALUE`` overrides given on the command line.

``--set director.config_file=/tmp/director.yml`` patches the tool's settings
before anything reads them; ``--override local_dns.enabled=true`` patches a
loaded director document before it is validated. Values are parsed as JSON
when they can be, so ``true``, ``25555`` and ``{"enabled": false}`` arrive
typed, and everything else stays a string.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import orjson
from lib_layered_config import Config

CoercedValue = str | int | float | bool | None | list[object] | dict[str, object]
"""What :func:`coerce_value` can produce."""


@dataclass(frozen=True, slots=True)
class ConfigOverride:
    """One parsed ``KEY.PATH=VALUE`` pair."""

    key_path: tuple[str, ...]
    value: CoercedValue

    @property
    def section(self) -> str:
        """The top-level key the override lands under."""
        return self.key_path[0]


def coerce_value(raw: str) -> CoercedValue:
    """Parse *raw* as JSON, or keep it as text when it is not JSON.

    Examples:
        >>> coerce_value("25555"), coerce_value("false"), coerce_value("null")
        (25555, False, None)
        >>> coerce_value('{"enabled": true}')
        {'enabled': True}
        >>> coerce_value("https://config-server:8080")
        'https://config-server:8080'
        >>> coerce_value("")
        ''
    """
    if not raw:
        return ""
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return raw


def parse_override(raw: str, *, require_section: bool = True) -> ConfigOverride:
    """Split *raw* at its first ``=`` into a key path and a coerced value.

    Args:
        raw: ``KEY.PATH=VALUE`` text.
        require_section: Settings always live in a section, so ``--set``
            needs at least ``SECTION.KEY``. A director document override may
            name a top-level key such as ``max_vm_create_tries``.

    Raises:
        ValueError: Without ``=``, with an empty path component, or with a
            single component when *require_section* is set.

    Examples:
        >>> parse_override("lib_log_rich.console_level=DEBUG").key_path
        ('lib_log_rich', 'console_level')
        >>> parse_override("max_vm_create_tries=3", require_section=False).value
        3
    """
    path, separator, value = raw.partition("=")
    if not separator:
        raise ValueError(f"Invalid override {raw!r}: must contain '='")

    key_path = tuple(path.split("."))
    if require_section and len(key_path) < 2:
        raise ValueError(f"Invalid override {raw!r}: key must contain at least one dot (SECTION.KEY)")
    if "" in key_path:
        raise ValueError(f"Invalid override {raw!r}: key path contains empty component")

    return ConfigOverride(key_path=key_path, value=coerce_value(value))


def _plain_copy(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _plain_copy(item) for key, item in value.items()}
    return value


def _write_all(target: dict[str, Any], raw_overrides: Iterable[str], *, require_section: bool) -> dict[str, Any]:
    """Write each override into *target*, creating sections on the way."""
    for raw in raw_overrides:
        override = parse_override(raw, require_section=require_section)
        node = target
        for depth, part in enumerate(override.key_path[:-1]):
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                crossed = ".".join(override.key_path[: depth + 1])
                raise ValueError(f"Invalid override {raw!r}: {crossed} holds a {type(child).__name__}, not a section")
            node = child
        node[override.key_path[-1]] = override.value
    return target


def apply_overrides(config: Config, raw_overrides: tuple[str, ...]) -> Config:
    """Return *config* with the ``--set`` values layered on top.

    Raises:
        ValueError: For malformed override text.

    Examples:
        >>> settings = Config({"director": {"config_file": "/a.yml"}}, {})
        >>> apply_overrides(settings, ("director.config_file=/b.yml",))["director"]["config_file"]
        '/b.yml'
        >>> apply_overrides(settings, ()) is settings
        True
    """
    if not raw_overrides:
        return config
    return config.with_overrides(_write_all({}, raw_overrides, require_section=True))


def apply_document_overrides(document: Mapping[str, Any], raw_overrides: tuple[str, ...]) -> dict[str, Any]:
    """Return a copy of the director *document* with the ``--override`` values written in.

    Sections are copied before they are written to; *document* is left as it was.

    Raises:
        ValueError: For malformed override text, or a path that runs through
            a value that is not a section.

    Examples:
        >>> document = {"local_dns": {"enabled": False, "include_index": True}}
        >>> apply_document_overrides(document, ("local_dns.enabled=true",))
        {'local_dns': {'enabled': True, 'include_index': True}}
        >>> document["local_dns"]["enabled"]
        False
    """
    return _write_all(_plain_copy(document), raw_overrides, require_section=False)


__all__ = [
    "CoercedValue",
    "ConfigOverride",
    "apply_document_overrides",
    "apply_overrides",
    "coerce_value",
    "parse_override",
]
