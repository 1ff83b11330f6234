"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os

from wikiviz.sparql_client import CORS_PROXY, USER_AGENT, WIKIDATA_ENDPOINT


class Config:
    """Default configuration for the Flask backend."""

    DEBUG = os.getenv("FLASK_DEBUG", "0") == "1"

    # CORS: origins allowed to call this API
    CORS_ORIGINS = os.getenv(
        "CORS_ORIGINS", "http://localhost:*",
    ).split(",")

    # Wikidata query service, reached through a CORS proxy
    SPARQL_ENDPOINT = os.getenv("WIKIVIZ_SPARQL_ENDPOINT", WIKIDATA_ENDPOINT)
    CORS_PROXY = os.getenv("WIKIVIZ_CORS_PROXY", CORS_PROXY)
    USER_AGENT = os.getenv("WIKIVIZ_USER_AGENT", USER_AGENT)

    # Cache TTL in minutes (0 = every request refetches)
    CACHE_TTL_MINUTES = float(os.getenv("WIKIVIZ_CACHE_TTL", "60"))

    # Attempts for rate-limited queries
    MAX_RETRIES = int(os.getenv("WIKIVIZ_MAX_RETRIES", "3"))

    # Serve placeholder data when Wikidata cannot be reached
    MOCK_FALLBACK = os.getenv("WIKIVIZ_MOCK_FALLBACK", "0") == "1"


class TestConfig(Config):
    """Configuration overrides for testing."""

    TESTING = True
    CORS_PROXY = ""
    MOCK_FALLBACK = True
