"""Domain layer - pure configuration logic with no I/O or framework dependencies.

Contains the value objects and pure functions that turn a raw director
configuration document into validated values.

Contents:
    * :mod:`.connection` - Database connection parameter derivation
    * :mod:`.enums` - Domain enumerations (OutputFormat, DatabaseAdapter, IdentityProviderKind)
    * :mod:`.errors` - Domain exception types
    * :mod:`.events` - Director audit events
    * :mod:`.fingerprint` - Canonical content digests
    * :mod:`.network` - Host address classification and filtering
    * :mod:`.resolver` - Typed setting lookup with defaults
"""

from __future__ import annotations

from .connection import ConnectionSpec, TlsSpec, build_connection_parameters, layered_merge
from .enums import DatabaseAdapter, IdentityProviderKind, OutputFormat
from .errors import AuthenticationError, ConfigurationError, TypeMismatch
from .events import DirectorEvent, director_start_event
from .fingerprint import fingerprint
from .network import NetworkAddress, select_director_ips
from .resolver import DIRECTOR_SETTINGS, REQUIRED, Setting, resolve, resolve_settings

__all__ = [
    # Connection
    "ConnectionSpec",
    "TlsSpec",
    "build_connection_parameters",
    "layered_merge",
    # Enums
    "DatabaseAdapter",
    "IdentityProviderKind",
    "OutputFormat",
    # Errors
    "AuthenticationError",
    "ConfigurationError",
    "TypeMismatch",
    # Events
    "DirectorEvent",
    "director_start_event",
    # Fingerprint
    "fingerprint",
    # Network
    "NetworkAddress",
    "select_director_ips",
    # Resolver
    "DIRECTOR_SETTINGS",
    "REQUIRED",
    "Setting",
    "resolve",
    "resolve_settings",
]
