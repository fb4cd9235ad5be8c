"""Settings and director-document fakes.

The tool's settings are always empty here, and director documents are served
from a dict instead of YAML files.
"""

from __future__ import annotations

import copy
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import click
from lib_layered_config import Config

from ...application.snapshot import DirectorConfig
from ...domain.enums import OutputFormat
from ..config.display import render_json


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """No settings at all; every command falls back to its defaults."""
    return Config({}, {})


def get_default_config_path_in_memory() -> Path:
    """A path under the temp directory that is never created."""
    return Path(tempfile.gettempdir()) / "director_config" / "defaultconfig.toml"


def display_config_in_memory(
    config: Config,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
    section: str | None = None,
    profile: str | None = None,
) -> None:
    """Print nothing."""


def display_director_config_in_memory(
    snapshot: DirectorConfig,
    *,
    output_format: OutputFormat = OutputFormat.HUMAN,
) -> None:
    """Echo the resolved values as plain JSON regardless of *output_format*."""
    click.echo(render_json(snapshot.to_dict()))


def _empty_documents() -> dict[Path, Mapping[str, Any]]:
    return {}


@dataclass
class DirectorFileStore:
    """Serves director documents from a dict keyed by path.

    Example:
        >>> store = DirectorFileStore({Path("/etc/director.yml"): {"name": "bosh"}})
        >>> store.load(Path("/etc/director.yml"))
        {'name': 'bosh'}
        >>> len(store.loaded)
        1
    """

    documents: dict[Path, Mapping[str, Any]] = field(default_factory=_empty_documents)
    loaded: list[Path] = field(default_factory=list)

    def load(self, path: Path) -> dict[str, Any]:
        """Return a deep copy of the stored document; unknown paths raise FileNotFoundError."""
        self.loaded.append(path)
        if path not in self.documents:
            raise FileNotFoundError(f"No such director configuration: {path}")
        return copy.deepcopy(dict(self.documents[path]))


__all__ = [
    "DirectorFileStore",
    "display_config_in_memory",
    "display_director_config_in_memory",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
]
