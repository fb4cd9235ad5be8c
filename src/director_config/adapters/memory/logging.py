"""In-memory logging adapter for testing.

Leaves the lib_log_rich runtime untouched but still installs the SQL
redaction filter, so tests observe the same scrubbed driver logs as
production.
"""

from __future__ import annotations

from lib_layered_config import Config

from ..logging.redaction import install_sql_redaction


def init_logging_in_memory(config: Config) -> None:
    """Satisfies the InitLogging protocol without starting lib_log_rich."""
    install_sql_redaction()


__all__ = ["init_logging_in_memory"]
