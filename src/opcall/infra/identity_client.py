"""httpx backed implementation of :class:`~opcall.core.protocols.IdentityClient`.

This module is the **only** place in the codebase that talks to the
identity service.  All httpx exceptions are caught here and re-raised
as :class:`~opcall.exceptions.IdentityClientError`; nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import json
from typing import Any

from opcall.core.models import TokenResponse
from opcall.exceptions import EnvironmentError, IdentityClientError
from opcall.log import get_logger

logger = get_logger(__name__)

TOKEN_PATH = "/connect/token"


class HttpIdentityClient:
    """Client-credentials token exchange over HTTP.

    Usage::

        client = HttpIdentityClient(timeout=30.0)
        token = client.get_token(
            "https://cloud.example.com/identity_", "my-id", "my-secret",
        )

    Parameters
    ----------
    timeout:
        Seconds to wait for the identity service.
    retries:
        Connection-level retries performed by the httpx transport.
    transport:
        Optional httpx transport replacing the default network one.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        retries: int = 2,
        transport: Any | None = None,
    ) -> None:
        self._timeout: float = timeout
        self._retries: int = retries
        self._transport: Any | None = transport

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def get_token(
        self,
        identity_uri: str,
        client_id: str,
        client_secret: str,
        *,
        insecure: bool = False,
    ) -> TokenResponse:
        """Request an access token for *client_id*.

        Raises
        ------
        IdentityClientError
            On transport failures, non-200 responses, or a response
            without an ``access_token``.
        """
        try:
            import httpx
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "httpx is not installed. Install with: pip install httpx",
            ) from exc

        url = identity_uri.rstrip("/") + TOKEN_PATH
        form = {
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
        }
        transport = self._transport or httpx.HTTPTransport(
            verify=not insecure,
            retries=self._retries,
        )

        try:
            with httpx.Client(transport=transport, timeout=self._timeout) as client:
                response = client.post(url, data=form)
        except httpx.HTTPError as exc:
            raise IdentityClientError(
                f"Error sending token request to '{url}': {exc}",
                hint="Check the identity uri and your network connection.",
            ) from exc

        logger.debug("identity_token_response", url=url, status_code=response.status_code)
        if response.status_code != 200:
            raise IdentityClientError(
                f"Token service returned status code '{response.status_code}' "
                f"and body '{response.text}'",
            )
        return self._parse_response(response.content)

    # ------------------------------------------------------------------
    # Response parsing
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_response(content: bytes) -> TokenResponse:
        """Turn the token endpoint's JSON body into a :class:`TokenResponse`."""
        try:
            data: Any = json.loads(content)
        except ValueError as exc:
            raise IdentityClientError(
                f"Error parsing token response: {exc}",
            ) from exc

        if not isinstance(data, dict):
            raise IdentityClientError("Token response is not a JSON object.")

        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise IdentityClientError("Token response does not contain an access_token.")

        raw_expires = data.get("expires_in")
        expires_in: int | None = (
            int(raw_expires)
            if isinstance(raw_expires, (int, float)) and not isinstance(raw_expires, bool)
            else None
        )
        return TokenResponse(access_token=access_token, expires_in=expires_in)
