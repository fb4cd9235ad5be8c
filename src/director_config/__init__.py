"""Public package surface exposing director configuration and metadata.

This module provides the stable public API for the package, routing imports
through the proper architectural layers:
- Application exports: snapshot construction and publication
- Domain exports: errors and setting resolution
- Composition exports: Wired adapter services (settings, director documents)
- Metadata: Package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Application exports
from .application.current import ConfigHolder
from .application.snapshot import DirectorConfig, build_director_config

# Composition exports (wired adapters)
from .composition import build_production, get_config, load_director_file

# Domain exports
from .domain.errors import AuthenticationError, ConfigurationError, TypeMismatch
from .domain.resolver import resolve

__all__ = [
    "AuthenticationError",
    "ConfigHolder",
    "ConfigurationError",
    "DirectorConfig",
    "TypeMismatch",
    "build_director_config",
    "build_production",
    "get_config",
    "load_director_file",
    "print_info",
    "resolve",
]
