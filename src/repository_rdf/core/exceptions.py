"""
Exception hierarchy for RDF translation.

Every failure raised while translating between repository nodes and RDF
derives from RepositoryRdfError and carries enough context (predicate,
resource or node path) to build a precise user-facing message.

Hierarchy:
    RepositoryRdfError
    ├── MalformedInput
    │   ├── InvalidValueShape
    │   └── IncompatibleType
    ├── ManagedPropertyViolation
    └── StoreOperationFailed
        ├── NamespaceRegistryError
        ├── ValueFormatError
        └── NodeNotFoundError
"""

from typing import Optional


class RepositoryRdfError(Exception):
    """Base class for all translation errors."""


class MalformedInput(RepositoryRdfError):
    """RDF input that cannot be stored as given."""
    
    def __init__(self, message: str, resource: Optional[str] = None):
        self.resource = resource
        self.message = message
        super().__init__(message)


class InvalidValueShape(MalformedInput):
    """An RDF term has the wrong shape for the requested property type."""


class IncompatibleType(MalformedInput):
    """A type-tag cannot be added to a node given its current types."""
    
    def __init__(self, type_name: str, node_path: str, resource: Optional[str] = None):
        self.type_name = type_name
        self.node_path = node_path
        super().__init__(
            f"Could not persist triple containing type assertion: {resource or type_name} "
            f"because no such mixin/type can be added to this node: {node_path}!",
            resource=resource,
        )


class ManagedPropertyViolation(RepositoryRdfError):
    """Attempted external mutation of a repository-managed predicate."""
    
    def __init__(self, predicate: str, node_path: Optional[str] = None, action: str = "persist"):
        self.predicate = predicate
        self.node_path = node_path
        self.action = action
        target = f" to node {node_path}" if node_path else ""
        super().__init__(f"Could not {action} triple containing predicate {predicate}{target}")


class StoreOperationFailed(RepositoryRdfError):
    """Wraps a failure raised by the underlying store."""


class NamespaceRegistryError(StoreOperationFailed):
    """Illegal namespace registration (bad prefix, prefix in use, unknown prefix)."""
    
    def __init__(self, message: str, prefix: Optional[str] = None, uri: Optional[str] = None):
        self.prefix = prefix
        self.uri = uri
        super().__init__(message)


class ValueFormatError(StoreOperationFailed):
    """A lexical value cannot be represented as the requested property type."""
    
    def __init__(
        self,
        lexical: str,
        type_name: str,
        property_name: Optional[str] = None,
        node_path: Optional[str] = None,
    ):
        self.lexical = lexical
        self.type_name = type_name
        self.property_name = property_name
        self.node_path = node_path
        message = f"Cannot convert '{lexical}' to a {type_name} value"
        if property_name:
            message += f" for property {property_name}"
        if node_path:
            message += f" on {node_path}"
        super().__init__(message)


class NodeNotFoundError(StoreOperationFailed):
    """No node exists at the requested path."""
    
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No node found at path: {path}")
