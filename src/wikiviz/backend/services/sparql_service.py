"""SPARQL query execution service: thin wrapper over the app's query cache."""

from __future__ import annotations

import time

from wikiviz.cache import QueryCache
from wikiviz.models import QueryResponse
from wikiviz.normalize import normalize


class SparqlService:
    """Execute SPARQL queries through a :class:`QueryCache`."""

    def __init__(self, cache: QueryCache, ttl_minutes: float) -> None:
        self.cache = cache
        self.ttl_minutes = ttl_minutes

    def execute(
        self,
        query: str,
        ttl_minutes: float | None = None,
        flatten: bool = True,
    ) -> QueryResponse:
        """Run *query*, returning normalized records unless *flatten* is off."""
        t0 = time.monotonic()
        ttl = self.ttl_minutes if ttl_minutes is None else ttl_minutes
        bindings = self.cache.get_or_fetch(query, ttl)
        records = normalize(bindings) if flatten else list(bindings)

        return QueryResponse(
            query=query,
            row_count=len(records),
            records=records,
            duration_ms=int((time.monotonic() - t0) * 1000),
        )
