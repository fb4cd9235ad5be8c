"""Events adapter - forwards director audit events to the log stream.

Contents:
    * :func:`.sink.record_event` - Production event sink
"""

from __future__ import annotations

from .sink import record_event

__all__ = ["record_event"]
