"""Domain error types: instantiation, message preservation, and hierarchy."""

from __future__ import annotations

import pytest

from director_config.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    TypeMismatch,
)


@pytest.mark.os_agnostic
def test_configuration_error_preserves_message() -> None:
    """Instantiation stores the message for display."""
    exc = ConfigurationError("verify_multidigest_path is required")
    assert str(exc) == "verify_multidigest_path is required"


@pytest.mark.os_agnostic
def test_type_mismatch_names_key_expected_and_actual() -> None:
    """TypeMismatch keeps the offending key and both kinds."""
    exc = TypeMismatch("max_vm_create_tries", "int", "bad number")

    assert exc.key == "max_vm_create_tries"
    assert exc.expected == "int"
    assert exc.actual == "str"
    assert "bad number" in str(exc)


@pytest.mark.os_agnostic
def test_type_mismatch_is_configuration_error() -> None:
    """Boundaries catching ConfigurationError also catch TypeMismatch."""
    with pytest.raises(ConfigurationError, match="port"):
        raise TypeMismatch("port", "int", [1])


@pytest.mark.os_agnostic
def test_authentication_error_is_not_configuration_error() -> None:
    """Per-request failures stay distinct from configuration failures."""
    assert not issubclass(AuthenticationError, ConfigurationError)
    assert str(AuthenticationError("Token has expired")) == "Token has expired"
