"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and plugins
must satisfy.  Core code depends ONLY on these protocols, never on
concrete implementations, preserving the dependency inversion
principle.
"""

from __future__ import annotations

from typing import Protocol

from opcall.core.models import ExecutionContext, RequestInfo, ResponseInfo, TokenResponse


class IdentityClient(Protocol):
    """Contract for client-credentials token exchange backends."""

    def get_token(
        self,
        identity_uri: str,
        client_id: str,
        client_secret: str,
        *,
        insecure: bool = False,
    ) -> TokenResponse:
        """Exchange *client_id* / *client_secret* for an access token.

        Raises
        ------
        IdentityClientError
            When the identity service cannot issue a token.
        """
        ...  # pragma: no cover


class TokenCache(Protocol):
    """Opaque key → token store consulted by the bearer authenticator."""

    def get(self, key: str) -> str | None:
        """Return the cached token for *key*, or ``None``."""
        ...  # pragma: no cover

    def set(self, key: str, token: str, expires_in: int | None = None) -> None:
        """Store *token* under *key* for at most *expires_in* seconds."""
        ...  # pragma: no cover


class OutputWriter(Protocol):
    """Sink for the operation's output."""

    def write(self, data: bytes) -> None:
        ...  # pragma: no cover


class Logger(Protocol):
    """Sink for request, response, debug and error events."""

    def log_request(self, request: RequestInfo) -> None:
        ...  # pragma: no cover

    def log_response(self, response: ResponseInfo) -> None:
        ...  # pragma: no cover

    def log_debug(self, message: str) -> None:
        ...  # pragma: no cover

    def log_error(self, message: str) -> None:
        ...  # pragma: no cover


class TransportPlugin(Protocol):
    """Contract for plugins that actually perform the operation.

    Implementations should map their own failures to
    :class:`~opcall.exceptions.TransportError`.
    """

    def execute(
        self,
        context: ExecutionContext,
        writer: OutputWriter,
        logger: Logger,
    ) -> None:
        ...  # pragma: no cover
