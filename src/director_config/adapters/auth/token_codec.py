"""UAA bearer token verification with PyJWT.

Contents:
    * :class:`TokenClaims` - pydantic view of the claims the director reads.
    * :class:`TokenKey` - one verification key with its algorithm.
    * :class:`TokenKeyFetcher` - lazy, cached download of ``<url>/token_keys``.
    * :class:`JwtTokenDecoder` - verifies signature, expiry and audience.
    * :func:`build_token_decoder` - factory satisfying the BuildTokenDecoder port.

System Role:
    Adapter behind the ``TokenDecoder`` port. Every verification failure
    surfaces as :class:`~director_config.domain.errors.AuthenticationError`;
    malformed options surface as ``ConfigurationError`` while the snapshot
    is being built.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
import jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from director_config.domain.errors import AuthenticationError, ConfigurationError
from director_config.domain.resolver import resolve

logger = logging.getLogger(__name__)

SYMMETRIC_ALGORITHM = "HS256"
ASYMMETRIC_ALGORITHM = "RS256"
DEFAULT_FETCH_TIMEOUT = 10.0


class TokenClaims(BaseModel):
    """Claims read from a verified UAA token; unknown claims pass through.

    Example:
        >>> TokenClaims.model_validate({"user_name": "larry", "scope": "bosh.admin bosh.read"}).scope
        ['bosh.admin', 'bosh.read']
    """

    user_name: str | None = None
    client_id: str | None = None
    sub: str | None = None
    scope: list[str] = Field(default_factory=list)
    jti: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("scope", mode="before")
    @classmethod
    def _split_scope_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.split()
        return value


@dataclass(frozen=True, slots=True)
class TokenKey:
    """Verification key material.

    Attributes:
        value: Shared secret (HS256) or PEM public key (RS256).
        algorithm: JWS algorithm the key is valid for.
        key_id: ``kid`` header value, when the issuer publishes one.
    """

    value: str
    algorithm: str
    key_id: str | None = None


class TokenKeyFetcher:
    """Downloads and caches the issuer's published signing keys.

    The first call performs the HTTP request; later calls reuse the cache
    until a refresh is requested for an unknown key id.
    """

    def __init__(
        self,
        url: str,
        *,
        ca_cert_path: str | None = None,
        timeout: float = DEFAULT_FETCH_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = f"{url.rstrip('/')}/token_keys"
        self._verify: str | bool = ca_cert_path or True
        self._timeout = timeout
        self._transport = transport
        self._keys: dict[str | None, TokenKey] | None = None
        self._lock = threading.Lock()

    def keys(self, *, refresh: bool = False) -> dict[str | None, TokenKey]:
        with self._lock:
            if self._keys is None or refresh:
                self._keys = self._download()
            return self._keys

    def _download(self) -> dict[str | None, TokenKey]:
        logger.info("Fetching token signing keys", extra={"url": self.url})
        try:
            with httpx.Client(verify=self._verify, timeout=self._timeout, transport=self._transport) as client:
                response = client.get(self.url)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise AuthenticationError(f"Unable to fetch token keys from {self.url}: {exc}") from exc

        entries = payload.get("keys", []) if isinstance(payload, dict) else []
        keys: dict[str | None, TokenKey] = {}
        for entry in entries:
            if not isinstance(entry, dict) or not isinstance(entry.get("value"), str):
                continue
            key = TokenKey(
                value=entry["value"],
                algorithm=str(entry.get("alg") or ASYMMETRIC_ALGORITHM),
                key_id=entry.get("kid"),
            )
            keys[key.key_id] = key
        if not keys:
            raise AuthenticationError(f"No usable token keys published at {self.url}")
        return keys


class JwtTokenDecoder:
    """Verifies bearer tokens against a fixed key or the issuer's published keys."""

    def __init__(
        self,
        *,
        audience: str,
        static_key: TokenKey | None = None,
        fetcher: TokenKeyFetcher | None = None,
    ) -> None:
        if static_key is None and fetcher is None:
            raise ValueError("Either static_key or fetcher is required")
        self._audience = audience
        self._static_key = static_key
        self._fetcher = fetcher

    def _key_for(self, key_id: str | None) -> TokenKey:
        if self._static_key is not None:
            return self._static_key
        fetcher = self._fetcher
        if fetcher is None:
            raise AuthenticationError("No token signing key configured")
        keys = fetcher.keys()
        if key_id not in keys and len(keys) != 1:
            keys = fetcher.keys(refresh=True)
        if key_id in keys:
            return keys[key_id]
        if len(keys) == 1:
            return next(iter(keys.values()))
        raise AuthenticationError(f"Unknown token signing key '{key_id}'")

    def __call__(self, token: str) -> dict[str, Any]:
        try:
            header = jwt.get_unverified_header(token)
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError(f"Malformed token: {exc}") from exc

        key = self._key_for(header.get("kid"))
        try:
            claims = jwt.decode(token, key.value, algorithms=[key.algorithm], audience=self._audience)
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError(f"Invalid token: {exc}") from exc

        try:
            return TokenClaims.model_validate(claims).model_dump(exclude_none=True)
        except ValidationError as exc:
            raise AuthenticationError(f"Unexpected token claims: {exc}") from exc


def build_token_decoder(
    options: Mapping[str, Any],
    *,
    audience: str,
    transport: httpx.BaseTransport | None = None,
) -> JwtTokenDecoder:
    """Create a decoder from the ``user_management.uaa`` options.

    ``symmetric_key`` selects HS256 and wins over ``public_key``, which
    selects RS256. With neither, keys are fetched from ``<url>/token_keys`` on first use.

    Raises:
        ConfigurationError: When no key is given and ``url`` is missing.
    """
    symmetric_key = resolve(options, "symmetric_key", None, str)
    public_key = resolve(options, "public_key", None, str)
    if symmetric_key:
        return JwtTokenDecoder(audience=audience, static_key=TokenKey(symmetric_key, SYMMETRIC_ALGORITHM))
    if public_key:
        return JwtTokenDecoder(audience=audience, static_key=TokenKey(public_key, ASYMMETRIC_ALGORITHM))

    url = resolve(options, "url", None, str)
    if not url:
        raise ConfigurationError("user_management.uaa.url is required to fetch token keys")
    fetcher = TokenKeyFetcher(url, ca_cert_path=resolve(options, "ca_cert_path", None, str), transport=transport)
    return JwtTokenDecoder(audience=audience, fetcher=fetcher)


__all__ = [
    "JwtTokenDecoder",
    "TokenClaims",
    "TokenKey",
    "TokenKeyFetcher",
    "build_token_decoder",
]
