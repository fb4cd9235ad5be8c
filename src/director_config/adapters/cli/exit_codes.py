"""Exit statuses returned by the director configuration commands."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit statuses, borrowed from errno and sysexits.h.

    A missing director document exits like ``ENOENT``, an unreadable one or a
    rejected credential like ``EACCES``, and a document that fails validation
    with ``EX_CONFIG``.

    Example:
        >>> int(ExitCode.CONFIG_ERROR), int(ExitCode.FILE_NOT_FOUND)
        (78, 2)
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    FILE_NOT_FOUND = 2
    PERMISSION_DENIED = 13
    INVALID_ARGUMENT = 22
    CONFIG_ERROR = 78


__all__ = ["ExitCode"]
