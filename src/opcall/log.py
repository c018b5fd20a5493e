"""Logging configuration and logger sinks for opcall.

Two concerns live here:

* :func:`setup_logging` / :func:`get_logger`: structured logging via
  structlog on top of the stdlib ``logging`` module, used by every
  module for internal diagnostics.
* :class:`DefaultLogger` / :class:`DebugLogger`: implementations of the
  :class:`~opcall.core.protocols.Logger` sink handed to transport
  plugins.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any, TextIO

import structlog

from opcall.core.models import RequestInfo, ResponseInfo

_REDACTED = "***"
_SENSITIVE_HEADERS: frozenset[str] = frozenset({"authorization", "cookie", "set-cookie"})


def setup_logging(level: str = "WARNING", json_format: bool = False) -> None:
    """Configure structured logging for opcall.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, render JSON lines. If False, use the
            human-readable console renderer.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(numeric_level)
    stderr_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(stderr_handler)

    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _configure_stdlib_defaults() -> None:
    """Route structlog through stdlib logging until :func:`setup_logging` runs.

    Leaves an application's own structlog configuration alone.
    """
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


_configure_stdlib_defaults()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to *name*."""
    return structlog.get_logger(name)


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy *headers* with credential-bearing values replaced."""
    return {
        key: _REDACTED if key.lower() in _SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


# ---------------------------------------------------------------------------
# Logger sinks
# ---------------------------------------------------------------------------

class DefaultLogger:
    """Logger sink that stays silent except for errors.

    Errors are written verbatim to *error_output* (stderr by default).
    """

    def __init__(self, error_output: TextIO | None = None) -> None:
        self._error_output: TextIO = error_output or sys.stderr

    def log_request(self, request: RequestInfo) -> None:
        pass

    def log_response(self, response: ResponseInfo) -> None:
        pass

    def log_debug(self, message: str) -> None:
        pass

    def log_error(self, message: str) -> None:
        self._error_output.write(message)


class DebugLogger(DefaultLogger):
    """Logger sink that additionally traces requests, responses and debug messages.

    Credential headers are redacted before they reach the log.
    """

    def __init__(self, error_output: TextIO | None = None) -> None:
        super().__init__(error_output)
        self._log = get_logger("opcall.debug")

    def log_request(self, request: RequestInfo) -> None:
        self._log.debug(
            "request",
            method=request.method,
            url=request.url,
            headers=redact_headers(request.headers),
            body_size=len(request.body),
        )

    def log_response(self, response: ResponseInfo) -> None:
        self._log.debug(
            "response",
            status_code=response.status_code,
            status=response.status,
            headers=redact_headers(response.headers),
            body_size=len(response.body),
        )

    def log_debug(self, message: str) -> None:
        self._log.debug(message)
