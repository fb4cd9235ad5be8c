"""In-memory token decoding for testing.

Tokens are looked up in a dict instead of being verified, so tests can
exercise the UAA provider without key material.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ...domain.errors import AuthenticationError


def _empty_tokens() -> dict[str, Mapping[str, Any]]:
    return {}


@dataclass
class StaticTokenDecoder:
    """Maps known token strings to claims; anything else fails.

    Also records the options and audience it was built with when used as a
    ``BuildTokenDecoder`` through :meth:`build`.

    Example:
        >>> decoder = StaticTokenDecoder({"good": {"user_name": "larry"}})
        >>> decoder("good")
        {'user_name': 'larry'}
    """

    tokens: dict[str, Mapping[str, Any]] = field(default_factory=_empty_tokens)
    built_with: list[tuple[dict[str, Any], str]] = field(default_factory=list)

    def __call__(self, token: str) -> dict[str, Any]:
        if token not in self.tokens:
            raise AuthenticationError("Invalid token")
        return dict(self.tokens[token])

    def build(self, options: Mapping[str, Any], *, audience: str) -> StaticTokenDecoder:
        self.built_with.append((dict(options), audience))
        return self


__all__ = ["StaticTokenDecoder"]
