"""Authentication layer: pluggable authenticators and the chain runner.

Rules
-----
* Authenticators never raise; failures travel inside
  :class:`~opcall.auth.models.AuthenticatorResult`.
* Network access only through an injected
  :class:`~opcall.core.protocols.IdentityClient`.
* No imports from ``cli``.
"""

from __future__ import annotations

from opcall.auth.bearer import BearerAuthenticator
from opcall.auth.chain import run_authenticators
from opcall.auth.models import (
    AuthConfig,
    Authenticator,
    AuthenticatorContext,
    AuthenticatorRequest,
    AuthenticatorResult,
)
from opcall.auth.noop import NoopAuthenticator
from opcall.auth.pat import PatAuthenticator
from opcall.core.protocols import IdentityClient, TokenCache


def default_authenticators(
    identity_client: IdentityClient,
    cache: TokenCache | None = None,
) -> list[Authenticator]:
    """Return the standard chain: personal access token, then client credentials."""
    return [PatAuthenticator(), BearerAuthenticator(identity_client, cache)]


__all__: list[str] = [
    "AuthConfig",
    "Authenticator",
    "AuthenticatorContext",
    "AuthenticatorRequest",
    "AuthenticatorResult",
    "BearerAuthenticator",
    "NoopAuthenticator",
    "PatAuthenticator",
    "default_authenticators",
    "run_authenticators",
]
