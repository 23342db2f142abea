"""
Centralized test fixtures for the repository RDF test suite.

This package provides reusable fixtures for testing, including:
- Base URI and example vocabulary
- TTL/RDF sample content
- Configuration fixtures

Usage:
    from fixtures import BASE_URI, EX, BOOK_TTL, SAMPLE_CONFIG
"""

from .ttl_fixtures import (
    BASE_URI,
    EX,
    BOOK_TTL,
    MANAGED_PREDICATE_TTL,
    INVALID_TTL,
)

from .config_fixtures import (
    SAMPLE_CONFIG,
    write_config,
)

__all__ = [
    "BASE_URI",
    "EX",
    "BOOK_TTL",
    "MANAGED_PREDICATE_TTL",
    "INVALID_TTL",
    "SAMPLE_CONFIG",
    "write_config",
]
