"""Cache-aside storage for app and tenant access tokens.

The adapter fetches a fresh token on every call unless a cache is injected.
Entries are keyed by client id, app mode and token kind, so switching the
adapter between internal and default mode never hands back the other mode's
token.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Literal, NamedTuple, Protocol, runtime_checkable

from .models import AppMode

logger = logging.getLogger(__name__)

# Tokens are dropped this many seconds before the provider says they expire.
EXPIRY_MARGIN_SECONDS = 30.0

TokenKind = Literal["app", "tenant"]


class TokenCacheKey(NamedTuple):
    client_id: str
    mode: AppMode
    kind: TokenKind


@runtime_checkable
class TokenCache(Protocol):
    """Interface for app/tenant token caches."""

    def get(self, key: TokenCacheKey) -> str | None:
        """Return the cached token, or None when absent or expired."""

    def set(self, key: TokenCacheKey, token: str, ttl: float) -> None:
        """Store a token for `ttl` seconds."""

    def invalidate(self, key: TokenCacheKey) -> None:
        """Drop a cached token if present."""


@dataclass(frozen=True)
class _CachedToken:
    token: str
    expires_at: float


class InMemoryTokenCache(TokenCache):
    """Process-local token cache."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: dict[TokenCacheKey, _CachedToken] = {}
        self._lock = threading.Lock()

    def get(self, key: TokenCacheKey) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                logger.debug(f"Evicted expired {key.kind} token for {key.client_id}")
                return None
            return entry.token

    def set(self, key: TokenCacheKey, token: str, ttl: float) -> None:
        if ttl <= 0:
            return
        with self._lock:
            self._entries[key] = _CachedToken(token=token, expires_at=self._clock() + ttl)

    def invalidate(self, key: TokenCacheKey) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        return len(self._entries)


def ttl_from_expire(expire: object) -> float:
    """Convert a provider `expire` value (seconds) into a cache TTL."""
    try:
        seconds = float(expire)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    return max(seconds - EXPIRY_MARGIN_SECONDS, 0.0)
