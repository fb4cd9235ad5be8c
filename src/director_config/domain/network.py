"""Host network addresses and the director's self-reported IP selection.

Contents:
    * :class:`NetworkAddress` - IP literal tagged with loopback/link-local flags.
    * :func:`select_director_ips` - filter dropping loopback and link-local noise.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NetworkAddress:
    """One address reported by the host's interface enumeration.

    Attributes:
        address: The IP literal as reported, zone suffix included.
        ipv4_loopback: True for ``127.0.0.0/8``.
        ipv6_loopback: True for ``::1``.
        ipv6_linklocal: True for ``fe80::/10``.

    Example:
        >>> NetworkAddress.from_literal("fe80::1%eth0").ipv6_linklocal
        True
        >>> NetworkAddress.from_literal("10.10.0.6").ipv4_loopback
        False
    """

    address: str
    ipv4_loopback: bool = False
    ipv6_loopback: bool = False
    ipv6_linklocal: bool = False

    @classmethod
    def from_literal(cls, text: str) -> NetworkAddress:
        """Classify an IP literal.

        A ``%zone`` suffix is ignored for classification but kept in
        :attr:`address`.

        Raises:
            ValueError: When *text* is not an IP literal.
        """
        parsed = ipaddress.ip_address(text.split("%", 1)[0])
        if isinstance(parsed, ipaddress.IPv4Address):
            return cls(address=text, ipv4_loopback=parsed.is_loopback)
        return cls(
            address=text,
            ipv6_loopback=parsed.is_loopback,
            ipv6_linklocal=parsed.is_link_local,
        )

    @property
    def is_director_candidate(self) -> bool:
        return not (self.ipv4_loopback or self.ipv6_loopback or self.ipv6_linklocal)


def select_director_ips(addresses: Iterable[NetworkAddress]) -> list[str]:
    """Return the non-loopback, non-link-local addresses in enumeration order.

    Purely a filter: no DNS resolution and no reordering.

    Example:
        >>> literals = ["127.0.0.1", "10.10.0.6", "10.11.0.16", "::1", "fe80::%eth0", "fd7a::"]
        >>> select_director_ips(NetworkAddress.from_literal(text) for text in literals)
        ['10.10.0.6', '10.11.0.16', 'fd7a::']
    """
    return [entry.address for entry in addresses if entry.is_director_candidate]


__all__ = [
    "NetworkAddress",
    "select_director_ips",
]
