"""Host interface enumeration backed by psutil."""

from __future__ import annotations

import logging
import socket

import psutil

from director_config.domain.errors import ConfigurationError
from director_config.domain.network import NetworkAddress

logger = logging.getLogger(__name__)

_IP_FAMILIES = (socket.AF_INET, socket.AF_INET6)


def list_host_addresses() -> list[NetworkAddress]:
    """Return every IPv4/IPv6 address on the host, in enumeration order.

    Interfaces are visited in the order psutil reports them; addresses keep
    their per-interface order. Link-layer entries are skipped.

    Raises:
        ConfigurationError: When the operating system refuses the enumeration.
    """
    try:
        interfaces = psutil.net_if_addrs()
    except OSError as exc:
        raise ConfigurationError(f"Unable to enumerate host network interfaces: {exc}") from exc

    addresses: list[NetworkAddress] = []
    for name, entries in interfaces.items():
        for entry in entries:
            if entry.family not in _IP_FAMILIES:
                continue
            try:
                addresses.append(NetworkAddress.from_literal(entry.address))
            except ValueError:
                logger.warning("Skipping unparsable interface address", extra={"interface": name, "address": entry.address})
    logger.debug("Enumerated host addresses", extra={"count": len(addresses)})
    return addresses


__all__ = ["list_host_addresses"]
