"""In-memory response caching for GET requests.

Entries live in a plain ``dict`` for the lifetime of the process and expire
after a per-entry time-to-live given in milliseconds. Expiry is checked
lazily on read: an expired entry is evicted the first time a lookup finds
it, and there is no background sweep.

Cache keys are fingerprints built by :func:`make_fingerprint` from the HTTP
method and the full endpoint (query string included), so two identical
reads always resolve to the same entry.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class CacheEntry:
    """A cached payload and the clock reading after which it is stale."""

    value: Any
    expires_at: float


def make_fingerprint(method: str, endpoint: str) -> str:
    """Return the cache key for a request, e.g. ``"GET /data?limit=10"``."""
    return f"{method.upper()} {endpoint}"


class ResponseCache:
    """Memory-resident TTL cache keyed by request fingerprint.

    Args:
        ttl_ms: Default time-to-live used by :meth:`put` when none is given.
        clock: Callable returning the current time in seconds. Defaults to
            :func:`time.monotonic`; tests inject a fake clock.

    Example::

        cache = ResponseCache(ttl_ms=300_000)
        cache.put("GET /users", [{"id": 1}])
        hit = cache.get("GET /users")
    """

    def __init__(
        self,
        ttl_ms: int = 300_000,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._ttl_ms = ttl_ms
        self._clock = clock or time.monotonic
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_ms(self) -> int:
        return self._ttl_ms

    def get(self, fingerprint: str, default: Any = None) -> Any:
        """Look up a cached payload.

        Args:
            fingerprint: Cache key from :func:`make_fingerprint`.
            default: Returned on a miss. Pass a sentinel to tell a miss apart
                from a cached ``None`` payload.

        Returns:
            The stored value while ``now < expires_at``; *default* on a miss
            or for an expired entry (which is evicted).
        """
        entry = self._entries.get(fingerprint)
        if entry is None:
            return default
        if self._clock() >= entry.expires_at:
            self._entries.pop(fingerprint, None)
            return default
        return entry.value

    def put(self, fingerprint: str, value: Any, ttl_ms: Optional[int] = None) -> None:
        """Store *value* under *fingerprint*, replacing any existing entry.

        Args:
            fingerprint: Cache key from :func:`make_fingerprint`.
            value: Parsed response payload.
            ttl_ms: Time-to-live in milliseconds. Falls back to the cache
                default.
        """
        ttl = self._ttl_ms if ttl_ms is None else ttl_ms
        self._entries[fingerprint] = CacheEntry(
            value=value,
            expires_at=self._clock() + ttl / 1000.0,
        )

    def invalidate(self, fingerprint: str) -> None:
        """Remove a single entry. Missing keys are ignored."""
        self._entries.pop(fingerprint, None)

    def clear(self) -> None:
        """Remove all entries, expired or not."""
        self._entries.clear()

    def stats(self) -> dict[str, Any]:
        """Return ``size`` (stored entries, including not-yet-evicted stale ones) and ``ttl_ms``."""
        return {"size": len(self._entries), "ttl_ms": self._ttl_ms}

    def __contains__(self, fingerprint: object) -> bool:
        if not isinstance(fingerprint, str):
            return False
        entry = self._entries.get(fingerprint)
        return entry is not None and self._clock() < entry.expires_at

    def __len__(self) -> int:
        return len(self._entries)
