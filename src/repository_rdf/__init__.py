"""
Repository RDF Tools

Bidirectional translation between a typed property-graph repository (nodes
with typed properties and mixin type-tags) and RDF.

Usage:
    from repository_rdf import RepositoryRdfTools
    from repository_rdf.repository import InMemoryRepository, BaseUriIdentifierConverter
    
    session = InMemoryRepository().login()
    id_converter = BaseUriIdentifierConverter(session, "http://localhost:8080/rest")
    tools = RepositoryRdfTools.with_context(id_converter, session)
"""

from .core.exceptions import (
    RepositoryRdfError,
    MalformedInput,
    InvalidValueShape,
    IncompatibleType,
    ManagedPropertyViolation,
    StoreOperationFailed,
)
from .shared.models import PropertyType, Value, ValueFactory, NodeType, FixityResult, FixityState
from .formats.rdf import RepositoryRdfTools

__version__ = "0.1.0"

__all__ = [
    "RepositoryRdfTools",
    "PropertyType",
    "Value",
    "ValueFactory",
    "NodeType",
    "FixityResult",
    "FixityState",
    "RepositoryRdfError",
    "MalformedInput",
    "InvalidValueShape",
    "IncompatibleType",
    "ManagedPropertyViolation",
    "StoreOperationFailed",
]
