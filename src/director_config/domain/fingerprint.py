"""Stable content fingerprints of configuration subtrees.

Two subtrees with equal content yield equal fingerprints regardless of key
order; the snapshot uses them to detect drift in the blobstore and NATS
sections.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from typing import Any

import orjson

from .errors import ConfigurationError


def thaw(value: Any) -> Any:
    """Convert read-only mappings and tuples back into dicts and lists.

    Example:
        >>> from types import MappingProxyType
        >>> thaw(MappingProxyType({"a": (1, 2)}))
        {'a': [1, 2]}
    """
    if isinstance(value, Mapping):
        return {str(key): thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


def canonical_bytes(subtree: Any) -> bytes:
    """Compact JSON with sorted keys.

    Example:
        >>> canonical_bytes({"b": 1, "a": {"d": None, "c": True}})
        b'{"a":{"c":true,"d":null},"b":1}'
    """
    return orjson.dumps(thaw(subtree), option=orjson.OPT_SORT_KEYS)


def fingerprint(subtree: Any, *, name: str = "subtree") -> str:
    """Return the 40-character SHA-1 hex digest of *subtree*.

    Raises:
        ConfigurationError: When *subtree* holds values JSON cannot express
            (integers beyond 64 bits, sets, binary); *name* identifies the
            section in the message.

    Example:
        >>> fingerprint({"a": 1, "b": 2}) == fingerprint({"b": 2, "a": 1})
        True
        >>> len(fingerprint(None))
        40
    """
    try:
        payload = canonical_bytes(subtree)
    except orjson.JSONEncodeError as exc:
        raise ConfigurationError(f"{name} cannot be fingerprinted: {exc}") from exc
    return hashlib.sha1(payload).hexdigest()  # noqa: S324


__all__ = [
    "canonical_bytes",
    "fingerprint",
    "thaw",
]
