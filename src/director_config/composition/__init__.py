"""Where adapters meet ports.

:func:`build_production` wires the real file, network, token, database and
logging adapters; :func:`build_testing` wires the in-memory ones from
:mod:`director_config.adapters.memory`. Both return the same
:class:`AppServices` shape, which the CLI receives as its factory.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..adapters.auth.token_codec import build_token_decoder
from ..adapters.config.director_file import load_director_file
from ..adapters.config.display import display_config, display_director_config
from ..adapters.config.loader import get_config, get_default_config_path
from ..adapters.database.engine import create_database_engine
from ..adapters.events.sink import record_event
from ..adapters.logging.setup import init_logging
from ..adapters.network.interfaces import list_host_addresses
from ..domain.network import NetworkAddress

# Type checkers confirm each adapter satisfies its port.
if TYPE_CHECKING:
    from ..adapters.memory import EngineSpy, EventSpy, StaticTokenDecoder
    from ..application.ports import (
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
    )

    _assert_get_config: GetConfig = get_config
    _assert_get_default_config_path: GetDefaultConfigPath = get_default_config_path
    _assert_display_config: DisplayConfig = display_config
    _assert_display_director_config: DisplayDirectorConfig = display_director_config
    _assert_init_logging: InitLogging = init_logging
    _assert_load_director_file: LoadDirectorFile = load_director_file
    _assert_list_host_addresses: ListHostAddresses = list_host_addresses
    _assert_build_token_decoder: BuildTokenDecoder = build_token_decoder
    _assert_record_event: RecordEvent = record_event
    _assert_create_database_engine: CreateDatabaseEngine = create_database_engine


@dataclass(frozen=True, slots=True)
class AppServices:
    """One implementation per port, chosen by a build_* function."""

    get_config: GetConfig
    get_default_config_path: GetDefaultConfigPath
    display_config: DisplayConfig
    display_director_config: DisplayDirectorConfig
    init_logging: InitLogging
    load_director_file: LoadDirectorFile
    list_host_addresses: ListHostAddresses
    build_token_decoder: BuildTokenDecoder
    record_event: RecordEvent
    create_database_engine: CreateDatabaseEngine


def build_production() -> AppServices:
    """Services that touch the real host: files, interfaces, UAA, databases."""
    return AppServices(
        get_config=get_config,
        get_default_config_path=get_default_config_path,
        display_config=display_config,
        display_director_config=display_director_config,
        init_logging=init_logging,
        load_director_file=load_director_file,
        list_host_addresses=list_host_addresses,
        build_token_decoder=build_token_decoder,
        record_event=record_event,
        create_database_engine=create_database_engine,
    )


def build_testing(
    *,
    documents: Mapping[Path, Mapping[str, Any]] | None = None,
    addresses: Sequence[str] | None = None,
    tokens: StaticTokenDecoder | None = None,
    events: EventSpy | None = None,
    engines: EngineSpy | None = None,
) -> AppServices:
    """Services backed by in-memory fakes, for tests and doctests.

    Args:
        documents: Director documents served by path instead of read from disk.
        addresses: IP literals reported as host addresses. Defaults to a mix
            of loopback, private, and link-local addresses.
        tokens: Token decoder used for the UAA provider. Pass your own to
            register tokens and inspect how it was built.
        events: Spy capturing recorded events.
        engines: Spy capturing database engine requests.

    """
    from ..adapters.memory import (
        DirectorFileStore,
        EngineSpy,
        EventSpy,
        StaticTokenDecoder,
        display_config_in_memory,
        display_director_config_in_memory,
        fixed_host_addresses,
        get_config_in_memory,
        get_default_config_path_in_memory,
        init_logging_in_memory,
        list_host_addresses_in_memory,
    )

    store = DirectorFileStore(dict(documents or {}))
    token_decoder = tokens if tokens is not None else StaticTokenDecoder()
    event_spy = events if events is not None else EventSpy()
    engine_spy = engines if engines is not None else EngineSpy()

    def _list_addresses() -> list[NetworkAddress]:
        if addresses is None:
            return list_host_addresses_in_memory()
        return fixed_host_addresses(addresses)

    return AppServices(
        get_config=get_config_in_memory,
        get_default_config_path=get_default_config_path_in_memory,
        display_config=display_config_in_memory,
        display_director_config=display_director_config_in_memory,
        init_logging=init_logging_in_memory,
        load_director_file=store.load,
        list_host_addresses=_list_addresses,
        build_token_decoder=token_decoder.build,
        record_event=event_spy.record,
        create_database_engine=engine_spy.create,
    )


__all__ = [
    "AppServices",
    "build_production",
    "build_testing",
    "build_token_decoder",
    "create_database_engine",
    "display_config",
    "display_director_config",
    "get_config",
    "get_default_config_path",
    "init_logging",
    "list_host_addresses",
    "load_director_file",
    "record_event",
]
