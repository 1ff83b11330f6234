"""Retry SPARQL queries that hit the query service rate limit.

Only HTTP 429 responses are retried. Any other failure propagates
immediately. This wrapper talks to the client directly and is not
combined with :mod:`wikiviz.cache`.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from wikiviz.exceptions import MaxRetriesExceeded, QueryFailed
from wikiviz.sparql_client import SparqlClient

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3


def is_rate_limited(error: Exception) -> bool:
    """Whether *error* is an HTTP 429 answer from the query service."""
    return isinstance(error, QueryFailed) and error.status_code == 429


def query_with_retry(
    query: str,
    max_retries: int = DEFAULT_MAX_RETRIES,
    *,
    client: SparqlClient | None = None,
    sleep: Callable[[float], None] | None = None,
) -> list[dict[str, Any]]:
    """
    Execute *query*, retrying with exponential backoff on HTTP 429.

    After the n-th rate-limited attempt the wrapper waits ``2 ** n``
    seconds (no jitter). The query is tried at most *max_retries* times.

    Args:
        query: SPARQL SELECT query string
        max_retries: Maximum number of attempts
        client: Client to use (a fresh :class:`SparqlClient` by default)
        sleep: Function used to wait between attempts (time.sleep by default)

    Returns:
        The result bindings of the first successful attempt

    Raises:
        MaxRetriesExceeded: If every attempt was rate limited
        QueryFailed: On any non-429 HTTP status, without retrying
    """
    if sleep is None:
        sleep = time.sleep
    owns_client = client is None
    if client is None:
        client = SparqlClient()

    retries = 0
    try:
        while True:
            try:
                return client.fetch_bindings(query)
            except QueryFailed as e:
                if not is_rate_limited(e):
                    raise

                retries += 1
                logger.warning(f"Rate limited (attempt {retries}/{max_retries}): {e}")
                if retries >= max_retries:
                    logger.error(f"Query still rate limited after {retries} attempts")
                    raise MaxRetriesExceeded(query, retries) from e

                delay = 2**retries
                logger.info(f"Retrying in {delay}s (attempt {retries + 1}/{max_retries})")
                sleep(delay)
    finally:
        if owns_client:
            client.close()
