"""Fixtures for backend tests."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from wikiviz.backend.app import create_app
from wikiviz.backend.config import TestConfig


@pytest.fixture()
def session():
    """The mocked requests session used by the app's SPARQL client."""
    with patch("wikiviz.sparql_client.requests.Session") as mock_session_cls:
        yield mock_session_cls.return_value


@pytest.fixture()
def app(session):
    """Create a test Flask application."""
    application = create_app(TestConfig)
    yield application


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture()
def cache(app):
    """Direct access to the app's QueryCache."""
    return app.config["CACHE"]
