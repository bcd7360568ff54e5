"""In-memory response caching for restwrap.

This package provides :class:`ResponseCache`, a process-lifetime TTL cache
that the clients consult before every GET and clear after every successful
mutating call. Entries are keyed by :func:`make_fingerprint`.
"""

from restwrap.cache.cache import CacheEntry, ResponseCache, make_fingerprint

__all__ = ["CacheEntry", "ResponseCache", "make_fingerprint"]
