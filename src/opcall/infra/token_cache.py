"""Process-local implementation of :class:`~opcall.core.protocols.TokenCache`.

Tokens are kept in memory only and expire ahead of the lifetime the
identity service reports, so a cached token is never used right at the
edge of its validity.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from opcall.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CachedToken:
    token: str
    expires_at: float | None
    """Monotonic deadline, or ``None`` for tokens without a lifetime."""

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class InMemoryTokenCache:
    """Thread-safe TTL cache for access tokens.

    Parameters
    ----------
    expiry_margin:
        Seconds subtracted from each token's reported lifetime.
    default_ttl:
        Lifetime applied when the identity service reports none;
        ``None`` keeps such tokens until the process exits.
    clock:
        Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        *,
        expiry_margin: float = 60.0,
        default_ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: dict[str, CachedToken] = {}
        self._lock = threading.Lock()
        self._expiry_margin: float = expiry_margin
        self._default_ttl: float | None = default_ttl
        self._clock: Callable[[], float] = clock

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                logger.debug("token_cache_expired")
                return None
            return entry.token

    def set(self, key: str, token: str, expires_in: int | None = None) -> None:
        ttl = self._default_ttl if expires_in is None else max(expires_in - self._expiry_margin, 0.0)
        expires_at = None if ttl is None else self._clock() + ttl
        with self._lock:
            self._entries[key] = CachedToken(token=token, expires_at=expires_at)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
