"""Network adapter - host interface enumeration with psutil.

Contents:
    * :func:`.interfaces.list_host_addresses` - IP addresses bound to local interfaces
"""

from __future__ import annotations

from .interfaces import list_host_addresses

__all__ = ["list_host_addresses"]
