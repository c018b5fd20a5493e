"""Custom exception hierarchy for opcall.

All exceptions that cross layer boundaries must inherit from
:class:`OpcallError`.  Raw third-party exceptions (e.g. from httpx)
must NEVER propagate beyond the infrastructure layer; they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
OpcallError
├── ConversionError
├── AuthenticatorError
│   ├── AuthenticatorConfigError
│   └── AuthenticatorRuntimeError
├── IdentityClientError
├── TransportError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations


class OpcallError(Exception):
    """Base exception for all opcall errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Argument conversion ---------------------------------------------------

class ConversionError(OpcallError):
    """Raised when a raw argument cannot be converted to its declared type."""

    def __init__(
        self,
        message: str,
        *,
        parameter_name: str,
        value: str,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.parameter_name: str = parameter_name
        self.value: str = value


# --- Authentication --------------------------------------------------------

class AuthenticatorError(OpcallError):
    """Base class for failures reported by an authenticator."""


class AuthenticatorConfigError(AuthenticatorError):
    """Raised when required authenticator configuration is missing or malformed."""


class AuthenticatorRuntimeError(AuthenticatorError):
    """Raised when an authenticator fails while talking to its backend."""


class IdentityClientError(OpcallError):
    """Raised when the client-credentials token exchange fails."""


# --- Transport -------------------------------------------------------------

class TransportError(OpcallError):
    """Raised by transport plugins when the operation cannot be executed."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(OpcallError):
    """Raised when a required runtime dependency is not available."""


class ConfigurationError(OpcallError):
    """Raised when settings required by a command are missing."""
