"""Smoke tests: verify package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import pytest

from opcall import __version__
from opcall.cli import exit_codes
from opcall.cli.app import main
from opcall.exceptions import (
    AuthenticatorConfigError,
    AuthenticatorError,
    AuthenticatorRuntimeError,
    ConfigurationError,
    ConversionError,
    EnvironmentError,
    IdentityClientError,
    OpcallError,
    TransportError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            AuthenticatorError,
            AuthenticatorConfigError,
            AuthenticatorRuntimeError,
            ConfigurationError,
            IdentityClientError,
            TransportError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[OpcallError]
    ) -> None:
        assert issubclass(exc_class, OpcallError)

    def test_authenticator_errors_share_base(self) -> None:
        assert issubclass(AuthenticatorConfigError, AuthenticatorError)
        assert issubclass(AuthenticatorRuntimeError, AuthenticatorError)

    def test_hint_is_stored(self) -> None:
        err = OpcallError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert OpcallError("boom").hint is None

    def test_conversion_error_carries_parameter_and_value(self) -> None:
        err = ConversionError("bad", parameter_name="count", value="abc")
        assert isinstance(err, OpcallError)
        assert err.parameter_name == "count"
        assert err.value == "abc"


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self) -> None:
        """No arguments should print help and exit 0."""
        assert main([]) == exit_codes.SUCCESS

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
