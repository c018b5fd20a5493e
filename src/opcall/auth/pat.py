"""Personal access token authenticator.

Sends a pre-issued token as a bearer credential.  No network call.
"""

from __future__ import annotations

from opcall.auth.models import AuthenticatorContext, AuthenticatorResult, parse_required_string
from opcall.exceptions import AuthenticatorConfigError
from opcall.log import get_logger

logger = get_logger(__name__)

PAT_KEY = "pat"


class PatAuthenticator:
    """Adds ``Authorization: Bearer <pat>`` when ``pat`` is configured."""

    def auth(self, context: AuthenticatorContext) -> AuthenticatorResult:
        if not self.enabled(context):
            return AuthenticatorResult.success(context.request.headers, context.config)
        try:
            pat = parse_required_string(context.config, PAT_KEY)
        except AuthenticatorConfigError as exc:
            return AuthenticatorResult.failure(
                AuthenticatorConfigError(f"Invalid PAT authenticator configuration: {exc}")
            )
        logger.debug("pat_authenticator_applied")
        headers = {**context.request.headers, "Authorization": f"Bearer {pat}"}
        return AuthenticatorResult.success(headers, context.config)

    @staticmethod
    def enabled(context: AuthenticatorContext) -> bool:
        return context.config.get(PAT_KEY) is not None
