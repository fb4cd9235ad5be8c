"""Reading the director configuration document from disk.

Contents:
    * :class:`DirectorSettingsModel` - the ``[director]`` section of the
      tool's own layered settings.
    * :func:`resolve_director_file_path` - explicit path or configured default.
    * :func:`load_director_file` - YAML document to raw mapping.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, cast

import yaml
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from director_config.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)


class DirectorSettingsModel(BaseModel):
    """Pydantic model for the ``[director]`` settings section.

    Example:
        >>> DirectorSettingsModel.model_validate({"config_file": "/etc/director.yml"}).config_file
        '/etc/director.yml'
        >>> DirectorSettingsModel().config_file is None
        True
    """

    config_file: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")


def resolve_director_file_path(config: Config, explicit: Path | None = None) -> Path:
    """Return *explicit* or the ``director.config_file`` setting.

    Raises:
        ConfigurationError: When neither is given.

    Example:
        >>> resolve_director_file_path(Config({"director": {"config_file": "/etc/d.yml"}}, {})).name
        'd.yml'
    """
    if explicit is not None:
        return explicit
    section: object = config.get("director", default={})
    settings = DirectorSettingsModel.model_validate(cast("dict[str, object]", section) if section else {})
    if not settings.config_file:
        raise ConfigurationError("No director configuration file given; pass a path or set director.config_file")
    return Path(settings.config_file).expanduser()


def load_director_file(path: Path) -> dict[str, Any]:
    """Parse the YAML document at *path*.

    An empty document yields an empty mapping.

    Raises:
        FileNotFoundError: When *path* does not exist.
        ConfigurationError: When the document is not valid YAML or its root is
            not a mapping.
    """
    with path.open("r", encoding="utf-8") as handle:
        try:
            data: object = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"{path}: invalid YAML: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: document root must be a mapping, got {type(data).__name__}")

    logger.debug("Loaded director configuration", extra={"path": str(path), "keys": len(cast("dict[str, Any]", data))})
    return cast("dict[str, Any]", data)


__all__ = [
    "DirectorSettingsModel",
    "load_director_file",
    "resolve_director_file_path",
]
