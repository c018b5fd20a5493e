"""CLI application entry point and command routing for opcall.

This module is the **sole error boundary** for the entire application.
It catches :class:`~opcall.exceptions.OpcallError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; all work is delegated to the core,
  auth and infrastructure layers.
* Command results go to stdout; diagnostics go to stderr via Rich.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping

from opcall.cli import exit_codes
from opcall.cli.console import console
from opcall.exceptions import OpcallError
from opcall.version import __version__

_MASK_VISIBLE = 6


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Supported invocations:
    * ``opcall convert --type TYPE [--name NAME] VALUE``
    * ``opcall auth [--uri URI] [--insecure] [--debug]``
    * ``opcall --version``
    """
    parser = argparse.ArgumentParser(
        prog="opcall",
        description="Typed, authenticated calls against declared remote operations.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command")

    convert = subparsers.add_parser(
        "convert",
        help="Convert a raw argument to its declared type and print it as JSON.",
    )
    convert.add_argument(
        "--type",
        dest="declared_type",
        default="string",
        help="Declared parameter type, e.g. integer, object, stringArray.",
    )
    convert.add_argument("--name", default="value", help="Parameter name used in errors.")
    convert.add_argument("value", help="Raw argument text.")

    auth = subparsers.add_parser(
        "auth",
        help="Run the authenticator chain and show the resulting headers.",
    )
    auth.add_argument("--uri", default=None, help="Base URI of the remote service.")
    auth.add_argument("--insecure", action="store_true", help="Skip TLS verification.")
    auth.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _json_default(value: object) -> object:
    """Serialise values ``json`` does not know, i.e. file references."""
    from opcall.core.models import FileReference

    if isinstance(value, FileReference):
        return value.path
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _handle_convert(declared_type: str, name: str, value: str) -> int:
    """Convert *value* and print the typed result on stdout."""
    from opcall.core.models import Parameter
    from opcall.core.type_converter import TypeConverter

    result = TypeConverter().convert(value, Parameter(name=name, type=declared_type))
    sys.stdout.write(json.dumps(result, default=_json_default) + "\n")
    return exit_codes.SUCCESS


def _mask(value: str) -> str:
    """Hide all but the first characters of a header value."""
    if len(value) <= _MASK_VISIBLE:
        return "***"
    return value[:_MASK_VISIBLE] + "***"


def _render_headers(headers: Mapping[str, str]) -> None:
    if not headers:
        console.print("[yellow]No authenticator is configured; no headers added.[/yellow]")
        return
    for key, value in headers.items():
        console.print(f"[bold]{key}:[/bold] {_mask(value)}")


def _handle_auth(uri: str | None, *, insecure: bool, debug: bool) -> int:
    """Run the default authenticator chain with settings from the environment.

    Flow:
    1. Load :class:`~opcall.config.Settings`; flags override them.
    2. Build the identity client, token cache and default chain.
    3. Run the chain against the base URI.
    4. Print the resulting header names with masked values.
    """
    from opcall.auth import default_authenticators, run_authenticators
    from opcall.config import Settings
    from opcall.exceptions import ConfigurationError
    from opcall.infra import HttpIdentityClient, InMemoryTokenCache
    from opcall.log import setup_logging

    settings = Settings()
    debug = debug or settings.debug
    setup_logging("DEBUG" if debug else settings.log_level)

    base_uri = uri or settings.uri
    if not base_uri:
        raise ConfigurationError(
            "No base URI configured.",
            hint="Pass --uri or set OPCALL_URI.",
        )

    identity_client = HttpIdentityClient(
        timeout=settings.identity_timeout_seconds,
        retries=settings.identity_retries,
    )
    result = run_authenticators(
        default_authenticators(identity_client, InMemoryTokenCache()),
        base_uri,
        settings.auth_type,
        settings.auth_config(),
        debug=debug,
        insecure=insecure or settings.insecure,
    )
    if result.error is not None:
        raise result.error

    _render_headers(result.headers)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the opcall CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "convert":
        return _handle_convert(args.declared_type, args.name, args.value)
    if args.command == "auth":
        return _handle_auth(args.uri, insecure=args.insecure, debug=args.debug)

    parser.print_help()
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except OpcallError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
