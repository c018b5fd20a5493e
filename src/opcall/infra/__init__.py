"""Infrastructure layer: external system integration.

This layer wraps all interaction with the identity service and holds
the token cache.  Every raw third-party exception must be caught here
and re-raised as an :class:`~opcall.exceptions.OpcallError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from opcall.infra.identity_client import HttpIdentityClient
from opcall.infra.token_cache import InMemoryTokenCache

__all__: list[str] = [
    "HttpIdentityClient",
    "InMemoryTokenCache",
]
