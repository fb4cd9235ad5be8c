"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised while building a director configuration snapshot when a required
    value is absent, malformed, or logically inconsistent. A snapshot is either
    built completely or not at all, so callers never see a half-resolved
    configuration. Typically caught at CLI boundaries to provide user-friendly
    error messages.

    Example:
        >>> from director_config.domain.errors import ConfigurationError
        >>> err = ConfigurationError("verify_multidigest_path is required")
        >>> str(err)
        'verify_multidigest_path is required'
    """


class TypeMismatch(ConfigurationError):
    """A configuration value is present but has the wrong kind.

    Carries the offending key, the expected kind, and the type that was
    found so error messages can point at the exact setting.

    Example:
        >>> err = TypeMismatch("max_vm_create_tries", "int", "bad number")
        >>> str(err)
        "max_vm_create_tries: expected int, got str ('bad number')"
        >>> isinstance(err, ConfigurationError)
        True
    """

    def __init__(self, key: str, expected: str, value: object) -> None:
        self.key = key
        self.expected = expected
        self.actual = type(value).__name__
        super().__init__(f"{key}: expected {expected}, got {self.actual} ({value!r})")


class AuthenticationError(Exception):
    """A request could not be authenticated.

    Raised per request by identity providers for missing, malformed, expired,
    or wrongly signed credentials. Callers reject the request; the process
    keeps running.

    Example:
        >>> str(AuthenticationError("Token has expired"))
        'Token has expired'
    """


__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "TypeMismatch",
]
