"""Core executor: assembles the execution context and calls the plugin.

The :class:`PluginExecutor` owns no conversion or authentication logic
of its own.  It composes:

* the already converted :class:`~opcall.core.models.ExecutionParameters`,
* the outcome of the authenticator chain,
* the invocation metadata (organization, tenant, base URI, flags),

into one :class:`~opcall.core.models.ExecutionContext` and hands it to
the invocation's :class:`~opcall.core.protocols.TransportPlugin`.
"""

from __future__ import annotations

from collections.abc import Sequence

from opcall.auth.chain import run_authenticators
from opcall.auth.models import Authenticator
from opcall.core.models import AuthResult, ExecutionContext, InvocationContext
from opcall.core.protocols import Logger, OutputWriter


class PluginExecutor:
    """Runs the authenticator chain and invokes the transport plugin.

    Parameters
    ----------
    authenticators:
        Ordered authenticator chain, run once per invocation.
    """

    def __init__(self, authenticators: Sequence[Authenticator]) -> None:
        self._authenticators: tuple[Authenticator, ...] = tuple(authenticators)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def assemble(self, invocation: InvocationContext) -> ExecutionContext:
        """Build the execution context for *invocation*.

        Parameters keep their order: path, query, header, body, form.

        Raises
        ------
        AuthenticatorError
            The error reported by the first failing authenticator,
            unchanged.
        """
        auth = self._authenticate(invocation)
        return ExecutionContext(
            organization=invocation.organization,
            tenant=invocation.tenant,
            base_uri=invocation.base_uri,
            auth=auth,
            input=invocation.input,
            parameters=invocation.parameters.flatten(),
            insecure=invocation.insecure,
            debug=invocation.debug,
        )

    def call(
        self,
        invocation: InvocationContext,
        writer: OutputWriter,
        logger: Logger,
    ) -> None:
        """Assemble the context and let the invocation's plugin execute it."""
        context = self.assemble(invocation)
        if invocation.debug:
            logger.log_debug(
                f"Executing {type(invocation.plugin).__name__} with "
                f"{len(context.parameters)} parameter(s)"
            )
        invocation.plugin.execute(context, writer, logger)

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def _authenticate(self, invocation: InvocationContext) -> AuthResult:
        result = run_authenticators(
            self._authenticators,
            invocation.base_uri,
            invocation.auth.type,
            invocation.auth.config,
            debug=invocation.debug,
            insecure=invocation.insecure,
        )
        if result.error is not None:
            raise result.error
        return AuthResult(headers=dict(result.headers))
