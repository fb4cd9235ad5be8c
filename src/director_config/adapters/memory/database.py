"""In-memory database engine factory for testing."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine


def _empty_parameter_list() -> list[dict[str, Any]]:
    return []


@dataclass
class EngineSpy:
    """Records connection parameters and returns an in-memory SQLite engine.

    Example:
        >>> spy = EngineSpy()
        >>> engine = spy.create({"adapter": "postgres", "host": "db"})
        >>> spy.parameters[0]["host"], engine.dialect.name
        ('db', 'sqlite')
    """

    parameters: list[dict[str, Any]] = field(default_factory=_empty_parameter_list)

    def create(self, parameters: Mapping[str, Any]) -> Engine:
        self.parameters.append(dict(parameters))
        return create_engine("sqlite://")


__all__ = ["EngineSpy"]
