"""Process-wide holder for the currently active configuration snapshot."""

from __future__ import annotations

import logging
import threading

from ..domain.errors import ConfigurationError
from .snapshot import DirectorConfig

logger = logging.getLogger(__name__)


class ConfigHolder:
    """Publishes snapshots by swapping a single reference.

    Writers serialize on a lock; readers only read the reference and never
    block. A reader always sees one complete snapshot.

    Example:
        >>> holder = ConfigHolder()
        >>> holder.is_published
        False
    """

    def __init__(self) -> None:
        self._current: DirectorConfig | None = None
        self._publish_lock = threading.Lock()

    @property
    def is_published(self) -> bool:
        return self._current is not None

    def publish(self, snapshot: DirectorConfig) -> DirectorConfig | None:
        """Make *snapshot* current and return the one it replaced."""
        with self._publish_lock:
            previous, self._current = self._current, snapshot
        logger.info("Published director configuration", extra={"replaced": previous is not None})
        return previous

    def current(self) -> DirectorConfig:
        """Return the active snapshot.

        Raises:
            ConfigurationError: When nothing has been published yet.
        """
        snapshot = self._current
        if snapshot is None:
            raise ConfigurationError("Director configuration has not been loaded")
        return snapshot


#: Snapshot holder shared by the whole process.
active_config = ConfigHolder()


__all__ = [
    "ConfigHolder",
    "active_config",
]
