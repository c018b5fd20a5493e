"""Sequential authenticator chain.

Authenticators run strictly in order.  Each one sees the configuration
and headers produced by its predecessors, so the chain cannot be
parallelised or reordered without changing its outcome.
"""

from __future__ import annotations

from collections.abc import Sequence

from opcall.auth.models import (
    AuthConfig,
    Authenticator,
    AuthenticatorContext,
    AuthenticatorRequest,
    AuthenticatorResult,
)
from opcall.log import get_logger

logger = get_logger(__name__)


def run_authenticators(
    authenticators: Sequence[Authenticator],
    url: str,
    auth_type: str,
    config: AuthConfig,
    *,
    debug: bool = False,
    insecure: bool = False,
) -> AuthenticatorResult:
    """Thread the request through *authenticators* and return the outcome.

    The chain starts with *config* and an empty header set.  A failing
    authenticator stops the chain; its result is returned unchanged and
    the headers gathered so far are discarded.
    """
    context = AuthenticatorContext(
        type=auth_type,
        config=config,
        request=AuthenticatorRequest(url=url, headers={}),
        debug=debug,
        insecure=insecure,
    )
    for authenticator in authenticators:
        name = type(authenticator).__name__
        result = authenticator.auth(context)
        if not result.ok:
            logger.debug("authenticator_failed", authenticator=name)
            return result
        logger.debug("authenticator_passed", authenticator=name, headers=sorted(result.headers))
        context = context.advance(result.headers, result.config)
    return AuthenticatorResult.success(context.request.headers, context.config)
