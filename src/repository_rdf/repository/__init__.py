"""
Reference store implementation and identifier conversion.
"""

from .memory import (
    InMemoryRepository,
    InMemorySession,
    InMemoryNode,
    InMemoryProperty,
    InMemoryNamespaceRegistry,
    InMemoryNodeTypeManager,
)
from .identifiers import BaseUriIdentifierConverter

__all__ = [
    "InMemoryRepository",
    "InMemorySession",
    "InMemoryNode",
    "InMemoryProperty",
    "InMemoryNamespaceRegistry",
    "InMemoryNodeTypeManager",
    "BaseUriIdentifierConverter",
]
