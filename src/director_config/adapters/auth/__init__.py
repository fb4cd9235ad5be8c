"""Auth adapter - UAA token verification with PyJWT and httpx.

Contents:
    * :mod:`.token_codec` - Token decoder, signing-key fetcher, claims model
"""

from __future__ import annotations

from .token_codec import JwtTokenDecoder, TokenClaims, TokenKey, TokenKeyFetcher, build_token_decoder

__all__ = [
    "JwtTokenDecoder",
    "TokenClaims",
    "TokenKey",
    "TokenKeyFetcher",
    "build_token_decoder",
]
