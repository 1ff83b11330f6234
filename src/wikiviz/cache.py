"""In-memory TTL cache for SPARQL query results."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

Bindings = list[dict[str, Any]]

DEFAULT_TTL_MINUTES = 60


@dataclass
class CacheEntry:
    """Bindings stored for one query, with the time they were fetched."""

    timestamp: float
    data: Bindings


class QueryCache:
    """Memoize query results by verbatim query text.

    Entries are valid while ``clock() - timestamp`` is below the TTL given
    to :meth:`get_or_fetch`. Expired entries are overwritten on the next
    access and never evicted otherwise.
    """

    def __init__(
        self,
        fetch: Callable[[str], Bindings] | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = None
        if fetch is None:
            from wikiviz.sparql_client import SparqlClient

            self._client = SparqlClient()
            fetch = self._client.query
        self._fetch = fetch
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}

    def get(self, query: str) -> CacheEntry | None:
        return self._store.get(query)

    def get_or_fetch(self, query: str, ttl_minutes: float = DEFAULT_TTL_MINUTES) -> Bindings:
        """Return cached bindings for *query*, fetching them when stale."""
        entry = self._store.get(query)
        if entry is not None:
            age_minutes = (self._clock() - entry.timestamp) / 60
            if age_minutes < ttl_minutes:
                logger.debug(f"Cache hit ({age_minutes:.1f} min old)")
                return entry.data

        logger.debug("Cache miss, executing query")
        results = self._fetch(query)
        self._store[query] = CacheEntry(timestamp=self._clock(), data=results)
        return results

    def invalidate(self, prefix: str = "") -> None:
        """Delete entries whose query starts with *prefix*."""
        keys = [k for k in self._store if k.startswith(prefix)]
        for k in keys:
            del self._store[k]

    def clear(self) -> None:
        self._store.clear()

    def close(self) -> None:
        """Close the client this cache created for itself, if any."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __contains__(self, query: object) -> bool:
        return query in self._store

    def __len__(self) -> int:
        return len(self._store)


# Process-wide cache used by query_with_cache
_default_cache: QueryCache | None = None


def default_cache() -> QueryCache:
    """Return the process-wide cache, creating it on first use."""
    global _default_cache
    if _default_cache is None:
        _default_cache = QueryCache()
    return _default_cache


def reset_default_cache(
    cache: QueryCache | None = None, *, close: bool = True
) -> QueryCache | None:
    """
    Replace the process-wide cache (``None`` recreates it lazily).

    The replaced cache is closed unless *close* is False, which callers
    that mean to restore it later should pass.
    """
    global _default_cache
    previous = _default_cache
    _default_cache = cache
    if close and previous is not None and previous is not cache:
        previous.close()
    return previous


def query_with_cache(query: str, ttl_minutes: float = DEFAULT_TTL_MINUTES) -> Bindings:
    """Run *query* through the process-wide cache."""
    return default_cache().get_or_fetch(query, ttl_minutes)
