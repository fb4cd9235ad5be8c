"""Authentication strategies selected from the ``user_management`` section.

Contents:
    * :class:`User` - an authenticated principal.
    * :class:`LocalIdentityProvider` - HTTP Basic against configured users.
    * :class:`UAAIdentityProvider` - bearer tokens issued by a UAA server.
    * :func:`create_identity_provider` - picks a strategy by ``provider`` tag.

System Role:
    Application layer. Token verification itself lives behind the
    :class:`~director_config.application.ports.TokenDecoder` port so this
    module stays free of crypto and HTTP libraries.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol

from ..domain.enums import IdentityProviderKind
from ..domain.errors import AuthenticationError, ConfigurationError, TypeMismatch
from ..domain.resolver import resolve
from .ports import BuildTokenDecoder, TokenDecoder

logger = logging.getLogger(__name__)

UAA_AUDIENCE = "bosh_cli"
_AUTHORIZATION_HEADERS = ("authorization", "http_authorization")


@dataclass(frozen=True, slots=True)
class User:
    """An authenticated principal.

    Attributes:
        username: Login name.
        scopes: Granted scopes; empty for local users.
    """

    username: str
    scopes: tuple[str, ...] = ()


class IdentityProvider(Protocol):
    """Capability shared by every authentication strategy."""

    kind: ClassVar[IdentityProviderKind]

    def authenticate(self, headers: Mapping[str, str]) -> User: ...


def _authorization_header(headers: Mapping[str, str]) -> str:
    for key, value in headers.items():
        if key.lower() in _AUTHORIZATION_HEADERS:
            return value
    raise AuthenticationError("Missing Authorization header")


def _credentials(headers: Mapping[str, str], scheme: str) -> str:
    """Return the credential part of an ``Authorization: <scheme> <credentials>`` header."""
    parts = _authorization_header(headers).strip().split(None, 1)
    if len(parts) != 2 or parts[0].lower() != scheme:
        raise AuthenticationError(f"Expected {scheme} authorization")
    return parts[1].strip()


class LocalIdentityProvider:
    """HTTP Basic authentication against ``user_management.local.users``.

    Example:
        >>> provider = LocalIdentityProvider({"admin": "secret"})
        >>> provider.authenticate({"Authorization": "Basic YWRtaW46c2VjcmV0"})
        User(username='admin', scopes=())
    """

    kind: ClassVar[IdentityProviderKind] = IdentityProviderKind.LOCAL

    def __init__(self, users: Mapping[str, str]) -> None:
        self._users = dict(users)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> LocalIdentityProvider:
        """Build from the ``user_management.local`` section.

        Raises:
            TypeMismatch: When ``users`` is not a list of name/password entries.
        """
        entries = resolve(options, "users", [], list)
        users: dict[str, str] = {}
        for index, entry in enumerate(entries):
            key = f"user_management.local.users[{index}]"
            if not isinstance(entry, Mapping):
                raise TypeMismatch(key, "mapping", entry)
            name = resolve(entry, "name", None, str)
            password = resolve(entry, "password", None, str)
            if name is None or password is None:
                raise ConfigurationError(f"{key} needs both name and password")
            users[name] = password
        return cls(users)

    @property
    def usernames(self) -> tuple[str, ...]:
        return tuple(self._users)

    def authenticate(self, headers: Mapping[str, str]) -> User:
        try:
            decoded = base64.b64decode(_credentials(headers, "basic"), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise AuthenticationError("Malformed basic credentials") from exc

        username, separator, password = decoded.partition(":")
        expected = self._users.get(username)
        matched = hmac.compare_digest(password.encode(), (expected or "").encode())
        if not separator or expected is None or not matched:
            raise AuthenticationError("Invalid username or password")
        return User(username=username)


class UAAIdentityProvider:
    """Bearer-token authentication against tokens issued by a UAA server."""

    kind: ClassVar[IdentityProviderKind] = IdentityProviderKind.UAA

    def __init__(self, options: Mapping[str, Any], *, build_token_decoder: BuildTokenDecoder) -> None:
        url = resolve(options, "url", None, str)
        if not url:
            raise ConfigurationError("user_management.uaa.url is required for the uaa provider")
        self.url: str = url
        self._decoder: TokenDecoder = build_token_decoder(options, audience=UAA_AUDIENCE)

    def authenticate(self, headers: Mapping[str, str]) -> User:
        claims = self._decoder(_credentials(headers, "bearer"))
        username = claims.get("user_name") or claims.get("client_id") or claims.get("sub")
        if not isinstance(username, str) or not username:
            raise AuthenticationError("Token carries no user identity")
        scopes = claims.get("scope") or ()
        if isinstance(scopes, str):
            scopes = scopes.split()
        return User(username=username, scopes=tuple(str(scope) for scope in scopes))


def create_identity_provider(
    user_management: Mapping[str, Any] | None,
    *,
    build_token_decoder: BuildTokenDecoder,
) -> LocalIdentityProvider | UAAIdentityProvider:
    """Pick and construct the authentication strategy.

    Args:
        user_management: The ``user_management`` section, or None when absent.
        build_token_decoder: Factory for the UAA token verifier.

    Returns:
        A local provider unless ``provider`` is ``uaa``.

    Raises:
        ConfigurationError: For an unknown ``provider`` or incomplete options.

    Example:
        >>> def no_tokens(options, *, audience):
        ...     raise AssertionError("not used")
        >>> create_identity_provider(None, build_token_decoder=no_tokens).kind
        <IdentityProviderKind.LOCAL: 'local'>
    """
    section: Mapping[str, Any] = user_management or {}
    tag = resolve(section, "provider", IdentityProviderKind.LOCAL.value, str)
    try:
        kind = IdentityProviderKind(tag)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown user management provider '{tag}'") from exc

    logger.debug("Selected identity provider", extra={"provider": kind.value})
    if kind is IdentityProviderKind.UAA:
        return UAAIdentityProvider(resolve(section, "uaa", {}, Mapping), build_token_decoder=build_token_decoder)
    return LocalIdentityProvider.from_options(resolve(section, "local", {}, Mapping))


__all__ = [
    "IdentityProvider",
    "LocalIdentityProvider",
    "UAAIdentityProvider",
    "UAA_AUDIENCE",
    "User",
    "create_identity_provider",
]
