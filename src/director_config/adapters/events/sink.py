"""Audit event sink writing structured records through lib_log_rich."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator

import lib_log_rich.runtime

from director_config.domain.events import DirectorEvent

logger = logging.getLogger("director_config.events")


@contextlib.contextmanager
def _event_context(event: DirectorEvent) -> Iterator[None]:
    if not lib_log_rich.runtime.is_initialised():
        yield
        return
    with lib_log_rich.runtime.bind(job_id=f"event-{event.action}", extra={"event": event.as_dict()}):
        yield


def record_event(event: DirectorEvent) -> None:
    """Emit *event* as one structured INFO record on ``director_config.events``.

    When the lib_log_rich runtime is up, the event fields are also bound into
    the logging context so backends that index context can filter on them.
    """
    with _event_context(event):
        logger.info(
            "Director event %s %s/%s by %s",
            event.action,
            event.object_type,
            event.object_name,
            event.user,
            extra={"event": event.as_dict()},
        )


__all__ = ["record_event"]
