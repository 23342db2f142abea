"""
Shared data models for repository RDF translation.

This module contains the value, node type and fixity classes used by the
translator, the triple sources and the in-memory repository.

Usage:
    from repository_rdf.shared.models import PropertyType, Value, ValueFactory
    
    # Or import specific classes
    from repository_rdf.shared.models.node_types import NodeType, PropertyDefinition
    from repository_rdf.shared.models.fixity import FixityResult, FixityState
"""

from .values import (
    PropertyType,
    Value,
    ValueFactory,
)
from .node_types import (
    NodeType,
    PropertyDefinition,
)
from .fixity import (
    FixityResult,
    FixityState,
)

__all__ = [
    # Values
    "PropertyType",
    "Value",
    "ValueFactory",
    # Node types
    "NodeType",
    "PropertyDefinition",
    # Fixity
    "FixityResult",
    "FixityState",
]
