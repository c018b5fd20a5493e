"""OAuth client-credentials bearer authenticator.

Enabled when both ``clientId`` and ``clientSecret`` are configured.  The
token is obtained from an identity service through an injected
:class:`~opcall.core.protocols.IdentityClient`; an optional
:class:`~opcall.core.protocols.TokenCache` avoids repeated exchanges.

The identity service defaults to ``<scheme>://<host>/identity_`` of the
request URL and can be overridden with the ``uri`` configuration key.
Retrying failed exchanges is the identity client's business, not this
module's.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from urllib.parse import urlsplit

from opcall.auth.models import (
    AuthConfig,
    AuthenticatorContext,
    AuthenticatorResult,
    parse_required_string,
)
from opcall.core.protocols import IdentityClient, TokenCache
from opcall.exceptions import AuthenticatorConfigError, AuthenticatorRuntimeError, OpcallError
from opcall.log import get_logger

logger = get_logger(__name__)

CLIENT_ID_KEY = "clientId"
CLIENT_SECRET_KEY = "clientSecret"
IDENTITY_URI_KEY = "uri"

IDENTITY_PATH = "/identity_"


@dataclass(frozen=True, slots=True)
class BearerAuthenticatorConfig:
    client_id: str
    client_secret: str
    identity_uri: str | None = None


class BearerAuthenticator:
    """Adds ``Authorization: Bearer <token>`` from a client-credentials exchange.

    Parameters
    ----------
    identity_client:
        Performs the token exchange.
    cache:
        Optional token store; tokens are looked up before and stored
        after each exchange.
    """

    def __init__(self, identity_client: IdentityClient, cache: TokenCache | None = None) -> None:
        self._identity_client: IdentityClient = identity_client
        self._cache: TokenCache | None = cache

    def auth(self, context: AuthenticatorContext) -> AuthenticatorResult:
        if not self.enabled(context):
            return AuthenticatorResult.success(context.request.headers, context.config)

        try:
            config = self.get_config(context.config)
        except AuthenticatorConfigError as exc:
            return AuthenticatorResult.failure(
                AuthenticatorConfigError(f"Invalid bearer authenticator configuration: {exc}")
            )

        identity_uri = config.identity_uri
        if identity_uri is None:
            try:
                identity_uri = self.default_identity_uri(context.request.url)
            except AuthenticatorConfigError as exc:
                return AuthenticatorResult.failure(exc)

        try:
            token = self._get_token(identity_uri, config, insecure=context.insecure)
        except OpcallError as exc:
            error = AuthenticatorRuntimeError(f"Error retrieving bearer token: {exc}")
            error.__cause__ = exc
            return AuthenticatorResult.failure(error)

        headers = {**context.request.headers, "Authorization": f"Bearer {token}"}
        return AuthenticatorResult.success(headers, context.config)

    @staticmethod
    def enabled(context: AuthenticatorContext) -> bool:
        return (
            context.config.get(CLIENT_ID_KEY) is not None
            and context.config.get(CLIENT_SECRET_KEY) is not None
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @staticmethod
    def get_config(config: AuthConfig) -> BearerAuthenticatorConfig:
        """Read client credentials and the optional identity URI.

        Raises
        ------
        AuthenticatorConfigError
            If a credential is empty or the identity URI is malformed.
        """
        client_id = parse_required_string(config, CLIENT_ID_KEY)
        client_secret = parse_required_string(config, CLIENT_SECRET_KEY)

        identity_uri: str | None = None
        if config.get(IDENTITY_URI_KEY) is not None:
            raw_uri = parse_required_string(config, IDENTITY_URI_KEY)
            if not _is_absolute_uri(raw_uri):
                raise AuthenticatorConfigError(f"Error parsing identity uri: '{raw_uri}'")
            identity_uri = raw_uri
        return BearerAuthenticatorConfig(client_id, client_secret, identity_uri)

    @staticmethod
    def default_identity_uri(request_url: str) -> str:
        """Derive the identity service URI from the request URL.

        Only scheme, host and port are kept; credentials embedded in the
        request URL never reach the identity service.
        """
        if not _is_absolute_uri(request_url):
            raise AuthenticatorConfigError(f"Invalid request url '{request_url}'")
        parts = urlsplit(request_url)
        try:
            port = parts.port
        except ValueError as exc:
            raise AuthenticatorConfigError(f"Invalid request url '{request_url}'") from exc
        host = parts.hostname or ""
        if ":" in host:
            host = f"[{host}]"
        if port is not None:
            host = f"{host}:{port}"
        return f"{parts.scheme}://{host}{IDENTITY_PATH}"

    # ------------------------------------------------------------------
    # Token retrieval
    # ------------------------------------------------------------------

    def _get_token(
        self,
        identity_uri: str,
        config: BearerAuthenticatorConfig,
        *,
        insecure: bool,
    ) -> str:
        cache_key = _cache_key(identity_uri, config)
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                logger.debug("bearer_token_cache_hit", identity_uri=identity_uri)
                return cached

        logger.debug("bearer_token_request", identity_uri=identity_uri)
        response = self._identity_client.get_token(
            identity_uri,
            config.client_id,
            config.client_secret,
            insecure=insecure,
        )
        if self._cache is not None:
            self._cache.set(cache_key, response.access_token, response.expires_in)
        return response.access_token


def _is_absolute_uri(uri: str) -> bool:
    try:
        parts = urlsplit(uri)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.hostname)


def _cache_key(identity_uri: str, config: BearerAuthenticatorConfig) -> str:
    secret_digest = hashlib.sha256(config.client_secret.encode("utf-8")).hexdigest()
    return f"bearer|{identity_uri}|{config.client_id}|{secret_digest}"
