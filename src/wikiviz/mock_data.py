"""Placeholder SPARQL bindings for demos and failed queries.

The shapes mirror the bindings returned by the gender representation and
scientific discoveries queries in :mod:`wikiviz.queries`.
"""

from __future__ import annotations

import random
from typing import Any

ENTITY_BASE = "http://www.wikidata.org/entity/"
MALE = f"{ENTITY_BASE}Q6581097"
FEMALE = f"{ENTITY_BASE}Q6581072"

MOCK_FIELDS = ["astronomer", "physicist", "chemist", "programmer"]
MOCK_DECADES = [1800, 1850, 1900, 1950, 2000]

# name, year, field, location, country, lat, lon, discoverer
MOCK_DISCOVERIES = [
    ("Electromagnetic induction", 1831, "physics", "London", "United Kingdom",
     51.5074, -0.1278, "Michael Faraday"),
    ("X-rays", 1895, "physics", "Würzburg", "Germany", 49.7913, 9.9534, "Wilhelm Röntgen"),
    ("Radioactivity", 1896, "physics", "Paris", "France", 48.8566, 2.3522, "Henri Becquerel"),
    ("Electron", 1897, "physics", "Cambridge", "United Kingdom", 52.2053, 0.1218, "J.J. Thomson"),
    ("DNA structure", 1953, "biology", "Cambridge", "United Kingdom",
     52.2053, 0.1218, "Watson and Crick"),
    ("Penicillin", 1928, "medicine", "London", "United Kingdom",
     51.5074, -0.1278, "Alexander Fleming"),
    ("Transistor", 1947, "physics", "New Jersey", "United States",
     40.0583, -74.4057, "Bardeen, Brattain, and Shockley"),
    ("World Wide Web", 1989, "computer science", "Geneva", "Switzerland",
     46.2044, 6.1432, "Tim Berners-Lee"),
    ("Periodic table", 1869, "chemistry", "Saint Petersburg", "Russia",
     59.9343, 30.3351, "Dmitri Mendeleev"),
    ("Theory of relativity", 1905, "physics", "Bern", "Switzerland",
     46.9480, 7.4474, "Albert Einstein"),
]


def _random_entity(rng: random.Random) -> str:
    return f"{ENTITY_BASE}Q{rng.randrange(1_000_000)}"


def generate_mock_data(query: str, rng: random.Random | None = None) -> list[dict[str, Any]]:
    """Pick a mock generator from the words found in *query*.

    Queries mentioning ``gender`` get gender bindings, queries mentioning
    ``discovery`` get discovery bindings, and anything else gets an empty
    list.
    """
    if "gender" in query:
        return generate_gender_mock_data(rng)
    if "discovery" in query:
        return generate_discovery_mock_data(rng)
    return []


def generate_gender_mock_data(rng: random.Random | None = None) -> list[dict[str, Any]]:
    """Two bindings (male, female) per mock field and decade."""
    rng = rng or random.Random()
    data = []
    for field in MOCK_FIELDS:
        for decade in MOCK_DECADES:
            for gender, label, low, span in (
                (MALE, "male", 50, 100),
                (FEMALE, "female", 5, 50),
            ):
                data.append({
                    "field": {"type": "uri", "value": _random_entity(rng)},
                    "fieldLabel": {"type": "literal", "value": field},
                    "decade": {"type": "literal", "value": str(decade)},
                    "gender": {"type": "uri", "value": gender},
                    "genderLabel": {"type": "literal", "value": label},
                    "count": {"type": "literal", "value": str(rng.randrange(span) + low)},
                })
    return data


def generate_discovery_mock_data(rng: random.Random | None = None) -> list[dict[str, Any]]:
    """One binding per well-known discovery, with random entity ids."""
    rng = rng or random.Random()
    return [
        {
            "discovery": {"type": "uri", "value": _random_entity(rng)},
            "discoveryLabel": {"type": "literal", "value": name},
            "year": {"type": "literal", "value": str(year)},
            "field": {"type": "uri", "value": _random_entity(rng)},
            "fieldLabel": {"type": "literal", "value": field},
            "locationLabel": {"type": "literal", "value": location},
            "countryLabel": {"type": "literal", "value": country},
            "lat": {"type": "literal", "value": str(lat)},
            "lon": {"type": "literal", "value": str(lon)},
            "discovererLabel": {"type": "literal", "value": discoverer},
        }
        for name, year, field, location, country, lat, lon, discoverer in MOCK_DISCOVERIES
    ]
