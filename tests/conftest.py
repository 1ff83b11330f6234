"""Shared fixtures: fake HTTP responses and binding data."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest


def make_response(bindings=None, status_code=200, reason="OK", text=None):
    """Build a fake ``requests.Response`` carrying SPARQL JSON results."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    resp.reason = reason
    if text is None:
        text = json.dumps({
            "head": {"vars": sorted({k for b in bindings or [] for k in b})},
            "results": {"bindings": bindings or []},
        })
    resp.text = text
    return resp


@pytest.fixture()
def sparql_response():
    """Factory for fake SPARQL HTTP responses."""
    return make_response


@pytest.fixture()
def gender_bindings():
    """Two fields, two decades, male and female counts."""
    rows = [
        ("astronomer", "1900", "male", "30"),
        ("astronomer", "1900", "female", "10"),
        ("physicist", "1900", "male", "50"),
        ("physicist", "1900", "female", "10"),
        ("astronomer", "1910", "male", "60"),
        ("astronomer", "1910", "female", "40"),
    ]
    return [
        {
            "fieldLabel": {"type": "literal", "value": field},
            "decade": {"type": "literal", "value": decade},
            "genderLabel": {"type": "literal", "value": gender},
            "count": {"type": "literal", "value": count},
        }
        for field, decade, gender, count in rows
    ]


@pytest.fixture()
def discovery_bindings():
    """Discoveries with and without coordinates."""

    def binding(label, year, field_id, lat=None, lon=None, location=None):
        b = {
            "discovery": {"type": "uri", "value": f"http://www.wikidata.org/entity/{label}"},
            "discoveryLabel": {"type": "literal", "value": label},
            "year": {"type": "literal", "value": str(year)},
            "field": {"type": "uri", "value": f"http://www.wikidata.org/entity/{field_id}"},
        }
        if lat is not None:
            b["lat"] = {"type": "literal", "value": str(lat)}
            b["lon"] = {"type": "literal", "value": str(lon)}
        if location:
            b["locationLabel"] = {"type": "literal", "value": location}
        return b

    return [
        binding("X-rays", 1895, "Q413", 49.7913, 9.9534, "Würzburg"),
        binding("Radioactivity", 1896, "Q413", 48.8566, 2.3522, "Paris"),
        binding("Periodic table", 1869, "Q2329", 59.9343, 30.3351),
        binding("Penicillin", 1928, "Q11190", 51.5074, -0.1278, "London"),
        binding("Nowhere", 1950, "Q420"),
        binding("Mystery", 1960, "Q999", 1.5, 2.5),
    ]
