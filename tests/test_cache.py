"""Tests for the TTL query cache."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from wikiviz import cache as cache_module
from wikiviz.cache import CacheEntry, QueryCache, query_with_cache


class FakeClock:
    """Manually advanced clock (seconds)."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now += minutes * 60


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def fetch():
    return MagicMock(side_effect=lambda query: [{"q": {"value": query}}])


@pytest.fixture()
def query_cache(fetch, clock):
    return QueryCache(fetch, clock=clock)


def test_same_query_within_ttl_fetches_once(query_cache, fetch, clock):
    first = query_cache.get_or_fetch("SELECT ?x WHERE { }")
    clock.advance(59)
    second = query_cache.get_or_fetch("SELECT ?x WHERE { }")

    assert fetch.call_count == 1
    assert first is second


def test_expired_entry_is_refetched(query_cache, fetch, clock):
    query_cache.get_or_fetch("SELECT ?x WHERE { }", ttl_minutes=10)
    clock.advance(10)
    query_cache.get_or_fetch("SELECT ?x WHERE { }", ttl_minutes=10)

    assert fetch.call_count == 2


def test_refetch_overwrites_timestamp(query_cache, clock):
    query_cache.get_or_fetch("q", ttl_minutes=5)
    clock.advance(6)
    query_cache.get_or_fetch("q", ttl_minutes=5)

    assert query_cache.get("q").timestamp == clock.now


def test_whitespace_difference_is_a_distinct_key(query_cache, fetch):
    query_cache.get_or_fetch("SELECT ?x WHERE { }")
    query_cache.get_or_fetch("SELECT ?x  WHERE { }")

    assert fetch.call_count == 2
    assert len(query_cache) == 2


def test_zero_ttl_always_fetches(query_cache, fetch):
    query = "SELECT ?x WHERE {...} # gender"
    query_cache.get_or_fetch(query, ttl_minutes=0)
    query_cache.get_or_fetch(query, ttl_minutes=0)

    assert fetch.call_count == 2


def test_entry_is_stored_with_fetch_time(query_cache, clock):
    data = query_cache.get_or_fetch("q")
    assert query_cache.get("q") == CacheEntry(timestamp=clock.now, data=data)
    assert "q" in query_cache
    assert query_cache.get("other") is None


def test_empty_results_are_cached(clock):
    fetch = MagicMock(return_value=[])
    query_cache = QueryCache(fetch, clock=clock)

    assert query_cache.get_or_fetch("q") == []
    assert query_cache.get_or_fetch("q") == []
    assert fetch.call_count == 1


def test_invalidate_and_clear(query_cache):
    query_cache.get_or_fetch("# gender\nSELECT 1")
    query_cache.get_or_fetch("# discoveries\nSELECT 2")

    query_cache.invalidate("# gender")
    assert len(query_cache) == 1
    assert "# discoveries\nSELECT 2" in query_cache

    query_cache.clear()
    assert len(query_cache) == 0


def test_fetch_errors_are_not_cached(clock):
    fetch = MagicMock(side_effect=[RuntimeError("boom"), [{"a": {"value": "1"}}]])
    query_cache = QueryCache(fetch, clock=clock)

    with pytest.raises(RuntimeError):
        query_cache.get_or_fetch("q")
    assert "q" not in query_cache
    assert query_cache.get_or_fetch("q") == [{"a": {"value": "1"}}]


def test_query_with_cache_uses_default_cache(fetch, clock):
    previous = cache_module.reset_default_cache(QueryCache(fetch, clock=clock), close=False)
    try:
        query_with_cache("q")
        query_with_cache("q")
        query_with_cache("q", ttl_minutes=0)
        assert fetch.call_count == 2
    finally:
        cache_module.reset_default_cache(previous)


@patch("wikiviz.sparql_client.requests.Session")
def test_close_releases_own_client(mock_session_cls):
    query_cache = QueryCache()
    query_cache.close()
    mock_session_cls.return_value.close.assert_called_once()

    # Closing twice does not close the session again
    query_cache.close()
    mock_session_cls.return_value.close.assert_called_once()


def test_close_leaves_injected_fetch_alone():
    client = MagicMock()
    QueryCache(client.query).close()
    client.close.assert_not_called()


@patch("wikiviz.sparql_client.requests.Session")
def test_reset_default_cache_closes_replaced_cache(mock_session_cls, fetch):
    previous = cache_module.reset_default_cache(close=False)
    try:
        cache_module.default_cache()
        cache_module.reset_default_cache(QueryCache(fetch))
        mock_session_cls.return_value.close.assert_called_once()
    finally:
        cache_module.reset_default_cache(previous, close=False)
