"""Database adapter - hands derived connection parameters to SQLAlchemy.

Contents:
    * :mod:`.engine` - URL and driver argument translation, engine creation
"""

from __future__ import annotations

from .engine import EngineArguments, create_database_engine, engine_arguments

__all__ = [
    "EngineArguments",
    "create_database_engine",
    "engine_arguments",
]
