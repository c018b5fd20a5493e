"""Allow ``python -m opcall`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m opcall`` behaves identically to the ``opcall`` console
script.
"""

from __future__ import annotations

from opcall.cli.app import cli

if __name__ == "__main__":
    cli()
