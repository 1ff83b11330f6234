"""Exceptions raised by the wikiviz data layer."""

from __future__ import annotations


class WikivizError(Exception):
    """Base exception for wikiviz errors."""

    pass


class QueryFailed(WikivizError):
    """Raised when the query service answers with a non-success status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"SPARQL query failed: {status_code} {reason}".rstrip())


class RateLimited(QueryFailed):
    """Raised on HTTP 429 Too Many Requests."""

    def __init__(self, reason: str = "Too Many Requests") -> None:
        super().__init__(429, reason)


class MaxRetriesExceeded(WikivizError):
    """Raised when the every allowed attempt was rate limited."""

    def __init__(self, query: str, attempts: int) -> None:
        self.query = query
        self.attempts = attempts
        super().__init__(f"Max retries exceeded after {attempts} attempts")


class MalformedInput(WikivizError):
    """Raised when the normalizer is handed something that is not a sequence."""

    pass


class NoLocatedDiscoveries(WikivizError):
    """Raised when no discovery in the result carries coordinates."""

    def __init__(self) -> None:
        super().__init__("No data with location information found")
