"""Domain models for opcall.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  They carry zero I/O and zero dependencies
on external packages.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from opcall.core.protocols import TransportPlugin


# ---------------------------------------------------------------------------
# Parameter schema
# ---------------------------------------------------------------------------

class ParameterType(str, Enum):
    """Declared parameter types understood by the value converter."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    BINARY = "binary"
    OBJECT = "object"
    STRING_ARRAY = "stringArray"
    INTEGER_ARRAY = "integerArray"
    NUMBER_ARRAY = "numberArray"
    BOOLEAN_ARRAY = "booleanArray"
    OBJECT_ARRAY = "objectArray"


@dataclass(frozen=True, slots=True)
class Parameter:
    """One node of a declared parameter schema.

    ``type`` is kept as a plain string so that schemas may carry types
    this package does not know about; those convert as raw text.
    """

    name: str
    """Parameter name, unique among its siblings."""

    type: str = ParameterType.STRING.value
    """Declared type: usually one of :class:`ParameterType`."""

    parameters: tuple[Parameter, ...] = ()
    """Ordered child nodes, used by object-typed parameters."""

    def find(self, name: str) -> Parameter | None:
        """Return the direct child called *name*, or ``None``."""
        for child in self.parameters:
            if child.name == name:
                return child
        return None


# ---------------------------------------------------------------------------
# Typed values
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FileReference:
    """Opaque locator of a file passed as a binary argument.

    The file is never opened by this package; transport plugins decide
    how to stream it.
    """

    path: str

    @property
    def filename(self) -> str:
        """Base name of :attr:`path`."""
        return PurePath(self.path).name


TypedValue = Union[
    int,
    float,
    bool,
    str,
    FileReference,
    dict[str, "TypedValue"],
    list["TypedValue"],
]


# ---------------------------------------------------------------------------
# Execution parameters
# ---------------------------------------------------------------------------

class ParameterLocation(str, Enum):
    """Where a parameter ends up in the outgoing request."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    BODY = "body"
    FORM = "form"


@dataclass(frozen=True, slots=True)
class ExecutionParameter:
    """A converted argument, tagged with its request location."""

    name: str
    value: Any
    location: ParameterLocation = ParameterLocation.BODY


@dataclass(frozen=True, slots=True)
class ExecutionParameters:
    """Converted arguments grouped by request location."""

    path: tuple[ExecutionParameter, ...] = ()
    query: tuple[ExecutionParameter, ...] = ()
    header: tuple[ExecutionParameter, ...] = ()
    body: tuple[ExecutionParameter, ...] = ()
    form: tuple[ExecutionParameter, ...] = ()

    def flatten(self) -> tuple[ExecutionParameter, ...]:
        """Concatenate all groups: path, query, header, body, form.

        Each parameter is tagged with the location of the group it sits
        in, whatever location it carried before.
        """
        groups = (
            (ParameterLocation.PATH, self.path),
            (ParameterLocation.QUERY, self.query),
            (ParameterLocation.HEADER, self.header),
            (ParameterLocation.BODY, self.body),
            (ParameterLocation.FORM, self.form),
        )
        return tuple(
            parameter if parameter.location is location else replace(parameter, location=location)
            for location, members in groups
            for parameter in members
        )


# ---------------------------------------------------------------------------
# Invocation inputs and the assembled execution context
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Authentication type plus the configuration fed into the chain."""

    type: str = ""
    config: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class InvocationContext:
    """Everything the CLI layer collected for one command invocation."""

    organization: str
    tenant: str
    base_uri: str
    auth: AuthSettings
    plugin: TransportPlugin
    parameters: ExecutionParameters = field(default_factory=ExecutionParameters)
    input: FileReference | None = None
    insecure: bool = False
    debug: bool = False


@dataclass(frozen=True, slots=True)
class AuthResult:
    """Final authentication outcome handed to the transport plugin."""

    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ExecutionContext:
    """All data a transport plugin needs to perform the operation.

    Created once per invocation and consumed once by the plugin.
    """

    organization: str
    tenant: str
    base_uri: str
    auth: AuthResult
    input: FileReference | None
    parameters: tuple[ExecutionParameter, ...]
    insecure: bool
    debug: bool


# ---------------------------------------------------------------------------
# Logger payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RequestInfo:
    """Outgoing request details reported to a :class:`Logger`."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass(frozen=True, slots=True)
class ResponseInfo:
    """Received response details reported to a :class:`Logger`."""

    status_code: int
    status: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""


# ---------------------------------------------------------------------------
# Identity tokens
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TokenResponse:
    """Result of a client-credentials token exchange."""

    access_token: str
    expires_in: int | None = None
    """Token lifetime in seconds, when the identity service reports it."""
