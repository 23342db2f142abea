"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # CLI and end-to-end translation tests

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import pytest
import sys
import os

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

from fixtures import BASE_URI, EX

from repository_rdf.app.cli import helpers
from repository_rdf.formats.rdf import RepositoryRdfTools
from repository_rdf.repository import BaseUriIdentifierConverter, InMemoryRepository


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: CLI and end-to-end translation tests")


# =============================================================================
# Repository Fixtures
# =============================================================================

@pytest.fixture
def repository():
    """Fresh in-memory repository with only the default workspace."""
    return InMemoryRepository()


@pytest.fixture
def session(repository):
    """Session on the default workspace."""
    return repository.login()


@pytest.fixture
def registry(session):
    return session.namespace_registry


@pytest.fixture
def id_converter(session):
    """Identifier converter publishing nodes under BASE_URI."""
    return BaseUriIdentifierConverter(session, BASE_URI)


@pytest.fixture
def tools(id_converter, session):
    """Translator bound to the session and identifier converter."""
    return RepositoryRdfTools.with_context(id_converter, session)


@pytest.fixture
def node(session):
    """An unstructured node at /books/1."""
    return session.add_node("/books/1")


@pytest.fixture
def hints():
    """Namespace hints for the example vocabulary."""
    return {"ex": str(EX)}


# =============================================================================
# Logging
# =============================================================================

@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so each test starts clean."""
    yield
    helpers.reset_logging()
