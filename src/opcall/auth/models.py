"""Value objects exchanged between the chain runner and authenticators.

Authenticators never mutate what they receive: each one gets an
immutable :class:`AuthenticatorContext` and answers with a fresh
:class:`AuthenticatorResult` carrying the headers and configuration the
next authenticator should see.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Protocol, Union

from opcall.exceptions import AuthenticatorConfigError, AuthenticatorError

ConfigValue = Union[str, int, float, bool, Mapping[str, "ConfigValue"]]
AuthConfig = Mapping[str, ConfigValue]


@dataclass(frozen=True, slots=True)
class AuthenticatorRequest:
    """The outgoing request as seen by authenticators."""

    url: str
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class AuthenticatorContext:
    """Input of a single :meth:`Authenticator.auth` call."""

    type: str
    config: AuthConfig
    request: AuthenticatorRequest
    debug: bool = False
    insecure: bool = False

    def advance(self, headers: Mapping[str, str], config: AuthConfig) -> AuthenticatorContext:
        """Return the context the next authenticator in the chain sees.

        *headers* are merged over the current request headers; *config*
        replaces the current configuration.
        """
        merged = {**self.request.headers, **headers}
        return replace(
            self,
            config=config,
            request=replace(self.request, headers=merged),
        )


@dataclass(frozen=True, slots=True)
class AuthenticatorResult:
    """Outcome of an authenticator: headers plus config, or an error.

    Build instances with :meth:`success` and :meth:`failure`.
    """

    headers: Mapping[str, str] = field(default_factory=dict)
    config: AuthConfig = field(default_factory=dict)
    error: AuthenticatorError | None = None

    @classmethod
    def success(cls, headers: Mapping[str, str], config: AuthConfig) -> AuthenticatorResult:
        return cls(headers=dict(headers), config=config)

    @classmethod
    def failure(cls, error: AuthenticatorError) -> AuthenticatorResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


class Authenticator(Protocol):
    """A pluggable strategy that may add credentials to the request.

    Implementations check their own enablement against
    ``context.config`` and pass the request through untouched when they
    are not configured.  They report failures through
    :meth:`AuthenticatorResult.failure` and never raise.
    """

    def auth(self, context: AuthenticatorContext) -> AuthenticatorResult:
        ...  # pragma: no cover


def parse_required_string(config: AuthConfig, name: str) -> str:
    """Return ``config[name]`` when it is a non-empty string.

    Raises
    ------
    AuthenticatorConfigError
        If the value is missing, not a string, or empty.
    """
    value = config.get(name)
    if not isinstance(value, str) or value == "":
        raise AuthenticatorConfigError(f"Invalid value for {name}: '{value}'")
    return value
