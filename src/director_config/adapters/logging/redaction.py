"""Scrubbing SQL statements out of database driver logs.

SQLAlchemy logs every statement at INFO on ``sqlalchemy.engine``. Row values
in ``INSERT`` and ``UPDATE`` statements may carry credentials, and the pool's
``SELECT NULL`` keep-alive pings drown out useful lines.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Final

SQL_LOGGERS: Final = ("sqlalchemy.engine", "sqlalchemy.engine.Engine")
REDACTED: Final = "<redacted>"

_KEEPALIVE = "SELECT NULL"
_WRITE_STATEMENT = re.compile(r"\b(INSERT\s+INTO\s+\S+|UPDATE\s+\S+)\s.*", re.IGNORECASE | re.DOTALL)


def redact_sql(message: str) -> str:
    """Replace everything after the table name of INSERT/UPDATE statements.

    Examples:
        >>> redact_sql('(10.01s) INSERT INTO "potatoface" ("diggity") VALUES (\\'alice\\')')
        '(10.01s) INSERT INTO "potatoface" <redacted>'
        >>> redact_sql('UPDATE "potatoface" SET "diggity" = \\'bob\\'')
        'UPDATE "potatoface" <redacted>'
        >>> redact_sql("SELECT * FROM deployments")
        'SELECT * FROM deployments'
    """
    return _WRITE_STATEMENT.sub(rf"\1 {REDACTED}", message)


class SqlLogRedactionFilter(logging.Filter):
    """Drops keep-alive pings and redacts write statements in log records.

    Example:
        >>> record = logging.LogRecord("sqlalchemy.engine", logging.INFO, __file__, 1, "SELECT NULL", None, None)
        >>> SqlLogRedactionFilter().filter(record)
        False
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if _KEEPALIVE in message:
            return False
        redacted = redact_sql(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def install_sql_redaction(logger_names: Iterable[str] = SQL_LOGGERS) -> None:
    """Attach a :class:`SqlLogRedactionFilter` to each logger in *logger_names*.

    Logger filters do not see records propagated from child loggers, so every
    logger that emits statements is listed explicitly. Repeated calls do not
    stack filters.
    """
    for name in logger_names:
        target = logging.getLogger(name)
        if not any(isinstance(existing, SqlLogRedactionFilter) for existing in target.filters):
            target.addFilter(SqlLogRedactionFilter())


__all__ = [
    "REDACTED",
    "SQL_LOGGERS",
    "SqlLogRedactionFilter",
    "install_sql_redaction",
    "redact_sql",
]
