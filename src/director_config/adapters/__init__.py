"""Adapters layer - infrastructure and framework integrations.

Contains adapter implementations that connect the application to external
systems and frameworks.

Contents:
    * :mod:`.config` - Settings loading, director documents, and display
    * :mod:`.network` - Host interface enumeration via psutil
    * :mod:`.auth` - UAA token verification via PyJWT and httpx
    * :mod:`.database` - SQLAlchemy engine construction
    * :mod:`.events` - Audit event sink
    * :mod:`.logging` - Logging setup with lib_log_rich and SQL redaction
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.cli` - Click CLI framework integration
"""

from __future__ import annotations

__all__: list[str] = []
