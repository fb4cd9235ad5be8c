"""In-memory host address enumeration for testing."""

from __future__ import annotations

from collections.abc import Sequence

from ...domain.network import NetworkAddress

DEFAULT_TEST_ADDRESSES: tuple[str, ...] = ("127.0.0.1", "10.10.0.6", "10.11.0.16", "::1", "fe80::%eth0", "fd7a::")
"""Loopback, private, and link-local literals covering every filter branch."""


def fixed_host_addresses(literals: Sequence[str] = DEFAULT_TEST_ADDRESSES) -> list[NetworkAddress]:
    """Classify *literals* the same way the psutil adapter does.

    Example:
        >>> [entry.address for entry in fixed_host_addresses(("10.0.0.1",))]
        ['10.0.0.1']
    """
    return [NetworkAddress.from_literal(text) for text in literals]


def list_host_addresses_in_memory() -> list[NetworkAddress]:
    """Satisfies ListHostAddresses with :data:`DEFAULT_TEST_ADDRESSES`."""
    return fixed_host_addresses()


__all__ = [
    "DEFAULT_TEST_ADDRESSES",
    "fixed_host_addresses",
    "list_host_addresses_in_memory",
]
