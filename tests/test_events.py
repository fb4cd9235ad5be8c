"""Director audit events."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from director_config.domain.events import DIRECTOR_USER, DirectorEvent, director_start_event


@pytest.mark.os_agnostic
def test_start_events_are_attributed_to_the_director_user() -> None:
    """The user is fixed, the action is ``start``."""
    event = director_start_event("director", "deadbeef", {"version": "1.0.0"})

    assert (event.user, event.action, event.object_type, event.object_name) == (
        DIRECTOR_USER,
        "start",
        "director",
        "deadbeef",
    )
    assert DIRECTOR_USER == "_director"


@pytest.mark.os_agnostic
def test_start_event_context_is_copied_and_read_only() -> None:
    """Mutating the source mapping after the fact changes nothing."""
    context = {"version": "1.0.0"}
    event = director_start_event("director", "deadbeef", context)
    context["version"] = "2.0.0"

    assert event.context["version"] == "1.0.0"
    with pytest.raises(TypeError):
        event.context["version"] = "3.0.0"  # type: ignore[index]


@pytest.mark.os_agnostic
def test_events_are_frozen() -> None:
    """Fields cannot be reassigned."""
    event = DirectorEvent("_director", "start", "worker", "worker_1")

    with pytest.raises(FrozenInstanceError):
        event.action = "stop"  # type: ignore[misc]


@pytest.mark.os_agnostic
def test_as_dict_is_plain_data() -> None:
    """The sink receives ordinary dicts."""
    event = director_start_event("worker", "worker_1", {"queue": "normal"})

    assert event.as_dict() == {
        "user": "_director",
        "action": "start",
        "object_type": "worker",
        "object_name": "worker_1",
        "context": {"queue": "normal"},
    }


@pytest.mark.os_agnostic
def test_default_context_is_empty() -> None:
    """Events without context still serialize."""
    assert DirectorEvent("_director", "start", "director", "x").as_dict()["context"] == {}
