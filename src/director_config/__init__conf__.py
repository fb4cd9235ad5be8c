"""Static package metadata surfaced to CLI commands and documentation.

Kept in sync with ``pyproject.toml``; the ``LAYEREDCONF_*`` identifiers
decide where lib_layered_config looks for the tool's own settings files.
"""

from __future__ import annotations

name = "director_config"
title = "Director configuration resolution, connection parameters, and identity providers"
version = "1.0.0"
homepage = "https://github.com/bitranox/director_config"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "director-config"

LAYEREDCONF_VENDOR: str = "bitranox"
LAYEREDCONF_APP: str = "Director Config"
LAYEREDCONF_SLUG: str = "director-config"


def print_info() -> None:
    """Print the summarised metadata block used by the CLI ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for director_config:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))  # noqa: T201


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "author_email",
    "homepage",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
