"""Shared pytest fixtures and configuration for the opcall test suite.

Guidelines
----------
* No internet access in any test.
* httpx must be mocked at the infra boundary (``httpx.MockTransport``).
* Core tests must be pure: no side effects.
* Tests must not depend on OS state or ``OPCALL_*`` variables.
"""

from __future__ import annotations
