"""Audit events emitted by the director itself."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

DIRECTOR_USER = "_director"


@dataclass(frozen=True, slots=True)
class DirectorEvent:
    """An audit record handed to the event sink.

    Example:
        >>> event = DirectorEvent("_director", "start", "director", "deadbeef", {"version": "1.0"})
        >>> event.as_dict()["context"]
        {'version': '1.0'}
    """

    user: str
    action: str
    object_type: str
    object_name: str
    context: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def as_dict(self) -> dict[str, Any]:
        return {
            "user": self.user,
            "action": self.action,
            "object_type": self.object_type,
            "object_name": self.object_name,
            "context": dict(self.context),
        }


def director_start_event(object_type: str, object_name: str, context: Mapping[str, Any]) -> DirectorEvent:
    """Build a ``start`` event attributed to the director user.

    Example:
        >>> director_start_event("worker", "worker_1", {}).user
        '_director'
    """
    return DirectorEvent(
        user=DIRECTOR_USER,
        action="start",
        object_type=object_type,
        object_name=object_name,
        context=MappingProxyType(dict(context)),
    )


__all__ = [
    "DIRECTOR_USER",
    "DirectorEvent",
    "director_start_event",
]
