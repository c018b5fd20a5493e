"""Authenticator that never touches the request."""

from __future__ import annotations

from opcall.auth.models import AuthenticatorContext, AuthenticatorResult


class NoopAuthenticator:
    def auth(self, context: AuthenticatorContext) -> AuthenticatorResult:
        return AuthenticatorResult.success(context.request.headers, context.config)
