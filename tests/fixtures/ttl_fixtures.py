"""
TTL/RDF test fixtures.

Subjects live under BASE_URI so they map onto repository nodes.
"""

from rdflib import Namespace

BASE_URI = "http://localhost:8080/rest"

EX = Namespace("http://example.org/ns#")


# =============================================================================
# Loadable documents
# =============================================================================

BOOK_TTL = """
@prefix ex: <http://example.org/ns#> .

<http://localhost:8080/rest/books/1> a ex:Book ;
    ex:title "Hello" ;
    ex:pages 10 ;
    ex:cites <http://localhost:8080/rest/books/2> .

<http://elsewhere.org/x> ex:title "Outside the repository" .
"""

MANAGED_PREDICATE_TTL = """
@prefix ex: <http://example.org/ns#> .
@prefix repo: <http://fedora.info/definitions/v4/repository#> .

<http://localhost:8080/rest/books/1> ex:title "Hello" ;
    repo:created "2024-01-01T00:00:00Z" .
"""

INVALID_TTL = """
@prefix ex: <http://example.org/ns#> .

<http://localhost:8080/rest/books/1> ex:title "unterminated ;
"""
