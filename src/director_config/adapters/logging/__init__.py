"""Logging adapter - lib_log_rich setup and SQL log redaction.

Provides centralized logging initialization for all entry points.

Contents:
    * :func:`.setup.init_logging` - Idempotent logging initialization
    * :mod:`.redaction` - Filter scrubbing SQL statements from driver logs
"""

from __future__ import annotations

from .redaction import SqlLogRedactionFilter, install_sql_redaction, redact_sql
from .setup import init_logging

__all__ = [
    "SqlLogRedactionFilter",
    "init_logging",
    "install_sql_redaction",
    "redact_sql",
]
