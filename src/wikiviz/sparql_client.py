"""
SPARQL Client - fetches Wikidata query results through a CORS proxy.

This module is a small SPARQL client that handles:
- Building the proxied GET URL for the Wikidata query service
- Requesting SPARQL JSON results with a fixed client identifier
- Raising structured errors for non-success HTTP statuses
- A degrading query path that logs failures and returns fallback data

Usage:
    from wikiviz.sparql_client import SparqlClient

    with SparqlClient() as client:
        # Raises QueryFailed / RateLimited on HTTP errors
        bindings = client.fetch_bindings("SELECT ?item WHERE { ?item wdt:P31 wd:Q5 } LIMIT 1")

        # Never raises for HTTP or transport errors, returns [] (or mock data)
        bindings = client.query("SELECT ?item WHERE { ?item wdt:P31 wd:Q5 } LIMIT 1")
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import requests

from wikiviz.exceptions import QueryFailed, RateLimited
from wikiviz.mock_data import generate_mock_data

logger = logging.getLogger(__name__)

WIKIDATA_ENDPOINT = "https://query.wikidata.org/sparql"
CORS_PROXY = "https://corsproxy.io/?"
USER_AGENT = "Wikidata Visualization Tool/1.0"

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


class MimeTypes:
    """MIME types used when talking to the query service."""

    JSON = "application/sparql-results+json"


def encode_uri_component(value: str) -> str:
    """Percent-encode *value* the way ``encodeURIComponent`` does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_query_url(
    query: str,
    endpoint_url: str = WIKIDATA_ENDPOINT,
    cors_proxy: str = CORS_PROXY,
) -> str:
    """
    Build the GET URL for a SPARQL query.

    The endpoint URL is percent-encoded and appended to the proxy prefix,
    followed by the encoded query and ``format=json``. With an empty proxy
    the endpoint is used as-is.

    Args:
        query: SPARQL query text
        endpoint_url: SPARQL endpoint URL
        cors_proxy: Proxy prefix, or "" to skip the proxy

    Returns:
        Fully encoded request URL
    """
    if cors_proxy:
        base = f"{cors_proxy}{encode_uri_component(endpoint_url)}"
    else:
        base = endpoint_url
    return f"{base}?query={encode_uri_component(query)}&format=json"


class SparqlClient:
    """
    SPARQL client for the Wikidata query service.

    Attributes:
        endpoint_url: The SPARQL endpoint URL
        cors_proxy: Prefix placed in front of the encoded endpoint URL
        user_agent: Value of the User-Agent header
        mock_fallback: Return placeholder data instead of [] when a query fails
        timeout: Request timeout in seconds (None leaves it to requests)

    Example:
        >>> client = SparqlClient(cors_proxy="")
        >>> for binding in client.fetch_bindings("SELECT ?x WHERE { } LIMIT 1"):
        ...     print(binding)
    """

    def __init__(
        self,
        endpoint_url: str = WIKIDATA_ENDPOINT,
        *,
        cors_proxy: str = CORS_PROXY,
        user_agent: str = USER_AGENT,
        mock_fallback: bool = False,
        timeout: float | None = None,
    ) -> None:
        self.endpoint_url = endpoint_url
        self.cors_proxy = cors_proxy
        self.user_agent = user_agent
        self.mock_fallback = mock_fallback
        self.timeout = timeout

        # Session for connection pooling
        self._session = requests.Session()

        logger.debug(f"SparqlClient initialized for {self.endpoint_url}")

    def fetch_bindings(self, query: str) -> list[dict[str, Any]]:
        """
        Execute a SELECT query and return its result bindings.

        Args:
            query: SPARQL SELECT query string

        Returns:
            The ``results.bindings`` list of the SPARQL JSON response

        Raises:
            RateLimited: If the service answers 429
            QueryFailed: If the service answers any other non-2xx status
            requests.exceptions.RequestException: On transport failures
            json.JSONDecodeError, KeyError, TypeError: If the body is not
                a SPARQL JSON results document
        """
        url = build_query_url(query, self.endpoint_url, self.cors_proxy)
        headers = {
            "Accept": MimeTypes.JSON,
            "User-Agent": self.user_agent,
        }

        logger.debug(f"Executing SELECT against {self.endpoint_url}")
        response = self._session.get(url, headers=headers, timeout=self.timeout)

        if not response.ok:
            if response.status_code == 429:
                raise RateLimited(response.reason or "Too Many Requests")
            raise QueryFailed(response.status_code, response.reason or "")

        data = json.loads(response.text)
        bindings: list[dict[str, Any]] = data["results"]["bindings"]
        logger.debug(f"Received {len(bindings)} bindings")
        return bindings

    def query(self, query: str) -> list[dict[str, Any]]:
        """
        Execute a SELECT query, degrading to fallback data on failure.

        HTTP and transport errors are logged and replaced by
        :meth:`fallback_for`. A malformed response body is not caught.
        """
        try:
            return self.fetch_bindings(query)
        except (QueryFailed, requests.exceptions.RequestException) as e:
            logger.error(f"Error executing SPARQL query: {e}")
            return self.fallback_for(query)

    def fallback_for(self, query: str) -> list[dict[str, Any]]:
        """Result returned by :meth:`query` when the request fails."""
        if self.mock_fallback:
            return generate_mock_data(query)
        return []

    def close(self) -> None:
        """Close the underlying requests session."""
        self._session.close()

    def __enter__(self) -> SparqlClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - close session."""
        self.close()

    def __repr__(self) -> str:
        return f"SparqlClient({self.endpoint_url!r}, mock_fallback={self.mock_fallback})"
