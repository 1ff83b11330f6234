"""wikiviz: Wikidata data layer for the dashboard views.

Main modules:
- sparql_client: SparqlClient for the Wikidata query service
- cache: QueryCache and query_with_cache, a TTL cache keyed by query text
- retry: query_with_retry, backoff on HTTP 429
- normalize: flatten SPARQL JSON bindings into plain records
- aggregate: decade bucketing and percentages for the views
"""

from .cache import CacheEntry, QueryCache, query_with_cache
from .exceptions import (
    MalformedInput,
    MaxRetriesExceeded,
    QueryFailed,
    RateLimited,
    WikivizError,
)
from .normalize import normalize
from .retry import query_with_retry
from .sparql_client import SparqlClient

# Import version information
from .version import VERSION

__all__ = [
    "VERSION",
    "CacheEntry",
    "MalformedInput",
    "MaxRetriesExceeded",
    "QueryCache",
    "QueryFailed",
    "RateLimited",
    "SparqlClient",
    "WikivizError",
    "normalize",
    "query_with_cache",
    "query_with_retry",
]
