"""Fakes for every port, used by ``build_testing`` and the test suite.

Nothing here reads files, lists interfaces, talks to UAA or opens a
database connection; spies remember what they were asked instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .auth import StaticTokenDecoder
from .config import (
    DirectorFileStore,
    display_config_in_memory,
    display_director_config_in_memory,
    get_config_in_memory,
    get_default_config_path_in_memory,
)
from .database import EngineSpy
from .events import EventSpy
from .logging import init_logging_in_memory
from .network import DEFAULT_TEST_ADDRESSES, fixed_host_addresses, list_host_addresses_in_memory

# Type checkers confirm each fake satisfies its port.
if TYPE_CHECKING:
    from director_config.application.ports import (
        DisplayConfig,
        GetConfig,
        GetDefaultConfigPath,
        InitLogging,
        ListHostAddresses,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path_in_memory
    _assert_display_config: DisplayConfig = display_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_list_host_addresses: ListHostAddresses = list_host_addresses_in_memory

__all__ = [
    "DEFAULT_TEST_ADDRESSES",
    "DirectorFileStore",
    "EngineSpy",
    "EventSpy",
    "StaticTokenDecoder",
    "display_config_in_memory",
    "display_director_config_in_memory",
    "fixed_host_addresses",
    "get_config_in_memory",
    "get_default_config_path_in_memory",
    "init_logging_in_memory",
    "list_host_addresses_in_memory",
]
