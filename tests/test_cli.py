"""Tests for the CLI commands and error boundary (cli/app.py).

The identity service is never contacted: the ``auth`` command is only
run with PAT configuration or with the chain mocked.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from opcall.cli import app as app_module
from opcall.cli import exit_codes
from opcall.cli.app import cli, main
from opcall.exceptions import ConversionError


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: object) -> None:
    monkeypatch.chdir(tmp_path)  # type: ignore[arg-type]
    for name in ("OPCALL_URI", "OPCALL_CLIENT_ID", "OPCALL_CLIENT_SECRET", "OPCALL_PAT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("opcall.log.setup_logging", lambda *args, **kwargs: None)


# ---------------------------------------------------------------------------
# convert
# ---------------------------------------------------------------------------

class TestConvertCommand:
    def test_prints_object_as_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["convert", "--type", "object", "a.b=1;a.c=2"])
        assert code == exit_codes.SUCCESS
        assert json.loads(capsys.readouterr().out) == {"a": {"b": "1", "c": "2"}}

    def test_prints_integer_array(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["convert", "--type", "integerArray", "1,2,3"])
        assert json.loads(capsys.readouterr().out) == [1, 2, 3]

    def test_binary_prints_path(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["convert", "--type", "binary", "data/file.bin"])
        assert json.loads(capsys.readouterr().out) == "data/file.bin"

    def test_default_type_is_string(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["convert", "raw"])
        assert json.loads(capsys.readouterr().out) == "raw"

    def test_conversion_error_raised(self) -> None:
        with pytest.raises(ConversionError, match="'count' value 'x' to integer"):
            main(["convert", "--type", "integer", "--name", "count", "x"])


# ---------------------------------------------------------------------------
# auth
# ---------------------------------------------------------------------------

class TestAuthCommand:
    def test_pat_header_masked(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("OPCALL_PAT", "super-secret-token")
        code = main(["auth", "--uri", "https://cloud.example.com"])
        assert code == exit_codes.SUCCESS
        err = capsys.readouterr().err
        assert "Authorization" in err
        assert "super-secret-token" not in err

    def test_no_authenticator_configured(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["auth", "--uri", "https://cloud.example.com"])
        assert code == exit_codes.SUCCESS
        assert "No authenticator is configured" in capsys.readouterr().err

    def test_missing_uri_raises(self) -> None:
        from opcall.exceptions import ConfigurationError

        with pytest.raises(ConfigurationError) as exc_info:
            main(["auth"])
        assert exc_info.value.hint is not None

    def test_uri_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPCALL_URI", "https://cloud.example.com")
        assert main(["auth"]) == exit_codes.SUCCESS

    def test_chain_error_raised(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from opcall.exceptions import AuthenticatorConfigError

        monkeypatch.setenv("OPCALL_CLIENT_ID", "id")
        monkeypatch.setenv("OPCALL_CLIENT_SECRET", "secret")
        with pytest.raises(AuthenticatorConfigError, match="Invalid request url"):
            main(["auth", "--uri", "not-a-url"])


class TestMask:
    def test_short_value_fully_hidden(self) -> None:
        assert app_module._mask("abc") == "***"  # noqa: SLF001

    def test_long_value_keeps_prefix(self) -> None:
        assert app_module._mask("Bearer abcdef") == "Bearer***"  # noqa: SLF001


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def test_known_error_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.object(app_module, "main", side_effect=ConversionError(
            "Cannot convert", parameter_name="p", value="v", hint="check the value",
        )):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Cannot convert" in err
        assert "check the value" in err

    def test_keyboard_interrupt_exit_code(self) -> None:
        with patch.object(app_module, "main", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error_exit_code(self) -> None:
        with patch.object(app_module, "main", side_effect=RuntimeError("boom")):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR

    def test_success_exit_code(self) -> None:
        with patch.object(app_module, "main", return_value=exit_codes.SUCCESS):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.SUCCESS
