"""CLI console helpers.

Rich is imported lazily so that bootstrap paths (``--help``,
``--version``) do not pay for it.
"""

from __future__ import annotations

from typing import Any

from opcall.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance, targeting stderr by default."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


class _ConsoleProxy:
    """``print``-compatible proxy that renders diagnostics on stderr."""

    def print(self, *objects: object) -> None:
        get_rich_console().print(*objects)


console = _ConsoleProxy()
