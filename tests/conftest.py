"""Shared fixtures for arqtab tests."""

from __future__ import annotations

import pytest

PEOPLE_TTL = """\
@prefix ex: <http://example.com/ns#> .
@prefix foaf: <http://xmlns.com/foaf/0.1/> .

ex:alice a foaf:Person ;
    foaf:name "Alice" ;
    foaf:knows ex:bob .

ex:bob a foaf:Person ;
    foaf:name "Bob" .
"""

NAMES_QUERY = """\
PREFIX ex: <http://example.com/ns#>
PREFIX foaf: <http://xmlns.com/foaf/0.1/>

SELECT ?person ?name
WHERE { ?person foaf:name ?name }
ORDER BY ?name
"""


@pytest.fixture()
def people_ttl(tmp_path):
    """Small Turtle file with two people."""
    path = tmp_path / "people.ttl"
    path.write_text(PEOPLE_TTL, encoding="utf-8")
    return path


@pytest.fixture()
def names_query(tmp_path):
    """Query file selecting every person with their name."""
    path = tmp_path / "names.rq"
    path.write_text(NAMES_QUERY, encoding="utf-8")
    return path
