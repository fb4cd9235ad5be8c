"""Application layer - use cases and port definitions.

Contains the snapshot facade that orchestrates domain logic, the identity
provider strategies, and port protocols that define the interfaces for
adapter implementations.

Contents:
    * :mod:`.current` - Holder for the active configuration snapshot
    * :mod:`.identity` - Local and UAA identity providers
    * :mod:`.ports` - Callable Protocol definitions for adapter functions
    * :mod:`.snapshot` - Immutable director configuration snapshot
"""

from __future__ import annotations

from .current import ConfigHolder, active_config
from .identity import LocalIdentityProvider, UAAIdentityProvider, User, create_identity_provider
from .ports import (
    BuildTokenDecoder,
    CreateDatabaseEngine,
    DisplayConfig,
    DisplayDirectorConfig,
    GetConfig,
    GetDefaultConfigPath,
    InitLogging,
    ListHostAddresses,
    LoadDirectorFile,
    RecordEvent,
    TokenDecoder,
)
from .snapshot import DirectorConfig, NatsSettings, build_director_config

__all__ = [
    "BuildTokenDecoder",
    "ConfigHolder",
    "CreateDatabaseEngine",
    "DirectorConfig",
    "DisplayConfig",
    "DisplayDirectorConfig",
    "GetConfig",
    "GetDefaultConfigPath",
    "InitLogging",
    "ListHostAddresses",
    "LoadDirectorFile",
    "LocalIdentityProvider",
    "NatsSettings",
    "RecordEvent",
    "TokenDecoder",
    "UAAIdentityProvider",
    "User",
    "active_config",
    "build_director_config",
    "create_identity_provider",
]
