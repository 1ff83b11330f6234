"""Tests for the command line interface."""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from wikiviz.backend.config import Config
from wikiviz.cli import main


@pytest.fixture(autouse=True)
def restore_logging():
    """The CLI reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture()
def runner():
    return CliRunner()


@pytest.fixture()
def session():
    with patch("wikiviz.sparql_client.requests.Session") as mock_session_cls:
        yield mock_session_cls.return_value


def test_help(runner):
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    for command in ("query", "gender", "discoveries", "serve"):
        assert command in result.output


def test_query_prints_normalized_records(runner, session, sparql_response):
    session.get.return_value = sparql_response([
        {"count": {"value": "42"}, "id": {"value": "Q5"}},
    ])

    result = runner.invoke(main, ["query", "SELECT ?count ?id WHERE { }"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == [{"count": 42, "id": "Q5"}]


def test_query_raw(runner, session, sparql_response):
    bindings = [{"count": {"value": "42"}}]
    session.get.return_value = sparql_response(bindings)

    result = runner.invoke(main, ["query", "--raw", "SELECT ?count"])
    assert json.loads(result.output) == bindings


def test_query_from_file(runner, session, sparql_response, tmp_path):
    query_file = tmp_path / "q.rq"
    query_file.write_text("SELECT ?x WHERE { }", encoding="utf-8")
    session.get.return_value = sparql_response([])

    result = runner.invoke(main, ["--cors-proxy", "", "query", str(query_file)])

    assert result.exit_code == 0
    url = session.get.call_args.args[0]
    assert url == "https://query.wikidata.org/sparql?query=SELECT%20%3Fx%20WHERE%20%7B%20%7D&format=json"


def test_query_with_retry_reports_errors(runner, session, sparql_response):
    session.get.return_value = sparql_response(status_code=400, reason="Bad Request", text="")

    result = runner.invoke(main, ["query", "--retry", "SELECT nonsense"])

    assert result.exit_code != 0
    assert "SPARQL query failed: 400 Bad Request" in result.output


def test_query_with_retry_gives_up_on_rate_limit(runner, session, sparql_response):
    session.get.return_value = sparql_response(status_code=429, reason="Too Many Requests", text="")

    with patch("wikiviz.retry.time.sleep") as mock_sleep:
        result = runner.invoke(main, ["query", "--retry", "--max-retries", "2", "SELECT ?x"])

    assert result.exit_code != 0
    assert "Max retries exceeded after 2 attempts" in result.output
    mock_sleep.assert_called_once_with(2)


def test_gender_with_mock_fallback(runner, session, sparql_response):
    session.get.return_value = sparql_response(status_code=500, reason="Error", text="")

    result = runner.invoke(main, ["--mock-fallback", "gender", "--mode", "count"])

    assert result.exit_code == 0, result.output
    assert "Fields: astronomer, physicist, chemist, programmer" in result.output
    assert "female_count" in result.output


def test_gender_without_data(runner, session, sparql_response):
    session.get.return_value = sparql_response(status_code=500, reason="Error", text="")

    result = runner.invoke(main, ["gender"])

    assert result.exit_code == 0
    assert "No data available" in result.output


def test_discoveries(runner, session, sparql_response, discovery_bindings):
    session.get.return_value = sparql_response(discovery_bindings)

    result = runner.invoke(main, ["discoveries", "--start", "1890", "--end", "1899"])

    assert result.exit_code == 0, result.output
    assert "2 discoveries between 1890 and 1899" in result.output
    assert "1895  X-rays (Würzburg)" in result.output
    assert "1890s  ## 2" in result.output


def test_discoveries_without_locations(runner, session, sparql_response):
    session.get.return_value = sparql_response([])

    result = runner.invoke(main, ["discoveries"])

    assert result.exit_code != 0
    assert "No data with location information found" in result.output


def test_discoveries_highlighted_decade(runner, session, sparql_response, discovery_bindings):
    session.get.return_value = sparql_response(discovery_bindings)

    result = runner.invoke(main, ["discoveries", "--decade", "1920"])

    assert result.exit_code == 0, result.output
    assert "Key discoveries in the 1920s:\n  1928  Penicillin" in result.output


def test_query_max_retries_defaults_to_config(runner, session, sparql_response):
    session.get.return_value = sparql_response(status_code=429, reason="Too Many Requests", text="")

    with patch.object(Config, "MAX_RETRIES", 2), patch("wikiviz.retry.time.sleep") as mock_sleep:
        result = runner.invoke(main, ["query", "--retry", "SELECT ?x"])

    assert "Max retries exceeded after 2 attempts" in result.output
    assert session.get.call_count == 2
    mock_sleep.assert_called_once_with(2)


def test_serve_runs_single_threaded_and_closes_client(runner):
    with patch("wikiviz.backend.app.create_app") as mock_create_app:
        app = mock_create_app.return_value
        app.config = {"CLIENT": MagicMock()}
        result = runner.invoke(main, ["serve", "--port", "5050"])

    assert result.exit_code == 0, result.output
    app.run.assert_called_once_with(host="127.0.0.1", port=5050, debug=False, threaded=False)
    app.config["CLIENT"].close.assert_called_once()
