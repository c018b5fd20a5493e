"""Tests for logging setup and logger sinks (log.py)."""

from __future__ import annotations

import io
import logging
from unittest.mock import MagicMock

from opcall.core.models import RequestInfo, ResponseInfo
from opcall.log import DebugLogger, DefaultLogger, redact_headers, setup_logging


class TestRedactHeaders:
    def test_authorization_redacted(self) -> None:
        assert redact_headers({"Authorization": "Bearer abc", "Accept": "json"}) == {
            "Authorization": "***",
            "Accept": "json",
        }

    def test_case_insensitive(self) -> None:
        assert redact_headers({"cookie": "s=1"}) == {"cookie": "***"}


class TestDefaultLogger:
    def test_errors_written(self) -> None:
        out = io.StringIO()
        DefaultLogger(out).log_error("boom\n")
        assert out.getvalue() == "boom\n"

    def test_other_events_silent(self) -> None:
        out = io.StringIO()
        logger = DefaultLogger(out)
        logger.log_debug("debug")
        logger.log_request(RequestInfo(method="GET", url="https://x"))
        logger.log_response(ResponseInfo(status_code=200, status="200 OK"))
        assert out.getvalue() == ""


class TestDebugLogger:
    def test_request_logged_with_redacted_headers(self) -> None:
        logger = DebugLogger(io.StringIO())
        logger._log = MagicMock()  # noqa: SLF001
        logger.log_request(
            RequestInfo(
                method="POST",
                url="https://x/api",
                headers={"Authorization": "Bearer secret"},
                body=b"{}",
            )
        )
        kwargs = logger._log.debug.call_args.kwargs  # noqa: SLF001
        assert kwargs["method"] == "POST"
        assert kwargs["headers"] == {"Authorization": "***"}
        assert kwargs["body_size"] == 2

    def test_response_logged(self) -> None:
        logger = DebugLogger(io.StringIO())
        logger._log = MagicMock()  # noqa: SLF001
        logger.log_response(ResponseInfo(status_code=404, status="404 Not Found"))
        assert logger._log.debug.call_args.kwargs["status_code"] == 404  # noqa: SLF001

    def test_errors_still_written(self) -> None:
        out = io.StringIO()
        DebugLogger(out).log_error("boom")
        assert out.getvalue() == "boom"


class TestSetupLogging:
    def test_sets_root_level(self) -> None:
        root = logging.getLogger()
        previous_level, previous_handlers = root.level, list(root.handlers)
        try:
            setup_logging("DEBUG", json_format=True)
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
        finally:
            root.handlers[:] = previous_handlers
            root.setLevel(previous_level)

    def test_unknown_level_falls_back_to_warning(self) -> None:
        root = logging.getLogger()
        previous_level, previous_handlers = root.level, list(root.handlers)
        try:
            setup_logging("chatty")
            assert root.level == logging.WARNING
        finally:
            root.handlers[:] = previous_handlers
            root.setLevel(previous_level)
