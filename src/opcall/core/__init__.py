"""Core layer: domain models, protocols, conversion and assembly.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* The executor lives in :mod:`opcall.core.executor` and is imported
  from there, since it depends on the ``auth`` layer.
"""

from opcall.core.models import (
    AuthResult,
    AuthSettings,
    ExecutionContext,
    ExecutionParameter,
    ExecutionParameters,
    FileReference,
    InvocationContext,
    Parameter,
    ParameterLocation,
    ParameterType,
    TokenResponse,
    TypedValue,
)
from opcall.core.protocols import IdentityClient, Logger, OutputWriter, TokenCache, TransportPlugin
from opcall.core.type_converter import TypeConverter, split_escaped

__all__: list[str] = [
    "AuthResult",
    "AuthSettings",
    "ExecutionContext",
    "ExecutionParameter",
    "ExecutionParameters",
    "FileReference",
    "IdentityClient",
    "InvocationContext",
    "Logger",
    "OutputWriter",
    "Parameter",
    "ParameterLocation",
    "ParameterType",
    "TokenCache",
    "TokenResponse",
    "TransportPlugin",
    "TypeConverter",
    "TypedValue",
    "split_escaped",
]
