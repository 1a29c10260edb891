"""Contract tests for the exception hierarchy."""

from __future__ import annotations

import pytest

import edgeboot
from edgeboot.errors import (
    ConfigurationError,
    DeserializationError,
    EdgebootError,
    OverrideError,
    ParseError,
    SerializationError,
    UnsupportedTypeError,
)

pytestmark = pytest.mark.unit


@pytest.mark.smoke
@pytest.mark.parametrize(
    "exception_class",
    [SerializationError, DeserializationError, ParseError, UnsupportedTypeError],
)
def test_override_errors_share_a_base(exception_class: type[Exception]) -> None:
    assert issubclass(exception_class, OverrideError)
    assert issubclass(exception_class, EdgebootError)


def test_configuration_error_is_not_an_override_error() -> None:
    assert issubclass(ConfigurationError, EdgebootError)
    assert not issubclass(ConfigurationError, OverrideError)


def test_hint_is_appended_to_message() -> None:
    error = EdgebootError("Provider URL is malformed", hint="Check EDGEX_CONFIGURATION_PROVIDER")
    assert str(error) == "Provider URL is malformed. Check EDGEX_CONFIGURATION_PROVIDER"
    assert error.args == ("Provider URL is malformed",)


def test_message_without_hint_is_unchanged() -> None:
    assert str(SerializationError("boom")) == "boom"


def test_parse_error_carries_context() -> None:
    error = ParseError("bad", value="x", kind="uint8", env_key="SERVICE_PORT")
    assert (error.value, error.kind, error.env_key) == ("x", "uint8", "SERVICE_PORT")


def test_unsupported_type_error_carries_type_name() -> None:
    error = UnsupportedTypeError("nope", type_name="NoneType")
    assert error.type_name == "NoneType"
    assert error.env_key is None


def test_errors_are_exported_from_package_root() -> None:
    for name in ("EdgebootError", "OverrideError", "ParseError", "ConfigurationError"):
        assert hasattr(edgeboot, name)
