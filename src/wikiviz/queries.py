"""SPARQL queries behind the dashboard views.

The query text doubles as the cache key, so these strings must stay
byte-for-byte stable between calls.
"""

__all__ = [
    "GENDER_REPRESENTATION_QUERY",
    "SCIENTIFIC_DISCOVERIES_QUERY",
]

GENDER_REPRESENTATION_QUERY = """
# Gender representation evolution query
PREFIX wd: <http://www.wikidata.org/entity/>
PREFIX wdt: <http://www.wikidata.org/prop/direct/>

SELECT ?field ?fieldLabel ?decade ?gender ?genderLabel (COUNT(DISTINCT ?person) AS ?count)
WHERE {
  ?person wdt:P106 ?field .
  ?person wdt:P21 ?gender .
  ?person wdt:P569 ?birthDate .

  BIND(YEAR(?birthDate) - (YEAR(?birthDate) % 10) AS ?decade)

  VALUES ?field {
    wd:Q11063   # astronomer
    wd:Q169470  # physicist
    wd:Q593644  # chemist
    wd:Q170790  # mathematician
    wd:Q37226   # teacher
    wd:Q5482740 # programmer
    wd:Q11631   # astronaut
  }

  FILTER(?decade >= 1800)

  SERVICE wikibase:label { bd:serviceParam wikibase:language "[AUTO_LANGUAGE],en". }
}
GROUP BY ?field ?fieldLabel ?decade ?gender ?genderLabel
ORDER BY ?field ?decade ?gender
LIMIT 1000
"""

SCIENTIFIC_DISCOVERIES_QUERY = """
# Scientific discoveries geographic distribution query
PREFIX wd: <http://www.wikidata.org/entity/>
PREFIX wdt: <http://www.wikidata.org/prop/direct/>

SELECT ?discovery ?discoveryLabel ?year ?field ?fieldLabel ?locationLabel ?countryLabel
       ?lat ?lon ?discovererLabel
WHERE {
  VALUES ?discoveryClass {
    wd:Q1953465   # invention
    wd:Q611790    # scientific artifact
    wd:Q5633421   # scientific discovery
  }

  ?discovery wdt:P31/wdt:P279* ?discoveryClass .

  ?discovery wdt:P575 ?date .
  BIND(YEAR(?date) AS ?year)
  FILTER(?year >= 1800)

  OPTIONAL { ?discovery wdt:P101 ?field . }

  OPTIONAL {
    ?discovery wdt:P740|wdt:P495|wdt:P291 ?location .
    OPTIONAL { ?location wdt:P625 ?coords . }
    BIND(geof:latitude(?coords) AS ?lat)
    BIND(geof:longitude(?coords) AS ?lon)
    OPTIONAL { ?location wdt:P17 ?country . }
  }

  OPTIONAL { ?discovery wdt:P61|wdt:P1554 ?discoverer . }

  SERVICE wikibase:label { bd:serviceParam wikibase:language "[AUTO_LANGUAGE],en". }
}
ORDER BY ?year
LIMIT 1000
"""
