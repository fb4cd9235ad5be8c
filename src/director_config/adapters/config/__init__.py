"""Configuration adapter - settings loading, director documents, display, overrides.

Contents:
    * :mod:`.loader` - The tool's layered settings with caching
    * :mod:`.director_file` - Director YAML document location and parsing
    * :mod:`.display` - Settings and snapshot display in human/JSON formats
    * :mod:`.overrides` - CLI ``--set`` and ``--override`` parsing and application
"""

from __future__ import annotations

from .director_file import load_director_file, resolve_director_file_path
from .display import display_config, display_director_config, render_json
from .loader import get_config, get_default_config_path
from .overrides import apply_document_overrides, apply_overrides

__all__ = [
    "apply_document_overrides",
    "apply_overrides",
    "display_config",
    "display_director_config",
    "get_config",
    "get_default_config_path",
    "load_director_file",
    "render_json",
    "resolve_director_file_path",
]
