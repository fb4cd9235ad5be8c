"""Start lib_log_rich for the director-config process.

The ``[lib_log_rich]`` settings section becomes a RuntimeConfig, stdlib
``logging`` (SQLAlchemy included) is routed into the runtime, and database
passwords are masked before any SQL statement reaches a log line.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from director_config import __init__conf__

from .redaction import install_sql_redaction


class LoggingConfigModel(BaseModel):
    """Pydantic model for the ``[lib_log_rich]`` section.

    Extra fields pass through to ``lib_log_rich.runtime.RuntimeConfig``.

    Example:
        >>> model = LoggingConfigModel(service="director", environment="staging", console_level="DEBUG")
        >>> model.service, model.environment
        ('director', 'staging')
        >>> LoggingConfigModel().environment
        'prod'
    """

    service: str | None = None
    environment: str = "prod"

    model_config = ConfigDict(extra="allow")


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    """Map the ``[lib_log_rich]`` section onto a RuntimeConfig.

    The service name falls back to the package name when unset.
    """
    log_raw: object = config.get("lib_log_rich", default={})
    parsed = LoggingConfigModel.model_validate(cast("dict[str, object]", log_raw) if log_raw else {})
    extra_config = parsed.model_dump(exclude={"service", "environment"}, exclude_none=True)

    return lib_log_rich.runtime.RuntimeConfig(
        service=parsed.service or __init__conf__.name,
        environment=parsed.environment,
        **extra_config,
    )


def init_logging(config: Config) -> None:
    """Initialize lib_log_rich from the layered settings, once per process.

    Loads ``.env`` files first so ``LOG_*`` variables take part, then starts
    the runtime, attaches stdlib logging, and installs the SQL redaction
    filter. Later calls return immediately.

    Args:
        config: Layered settings holding the ``[lib_log_rich]`` section.

    Example:
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()
    install_sql_redaction()


__all__ = [
    "LoggingConfigModel",
    "init_logging",
]
