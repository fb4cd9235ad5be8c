"""In-memory event sink for testing."""

from __future__ import annotations

from dataclasses import dataclass, field

from ...domain.events import DirectorEvent


def _empty_event_list() -> list[DirectorEvent]:
    return []


@dataclass
class EventSpy:
    """Captures recorded events for test assertions.

    Example:
        >>> from director_config.domain.events import director_start_event
        >>> spy = EventSpy()
        >>> spy.record(director_start_event("director", "uuid-1", {}))
        >>> [event.object_name for event in spy.events]
        ['uuid-1']
    """

    events: list[DirectorEvent] = field(default_factory=_empty_event_list)

    def record(self, event: DirectorEvent) -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()


__all__ = ["EventSpy"]
