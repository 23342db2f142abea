"""
Protocol Definitions for Store Collaborators.

The translator does not own the structured store. It talks to an
already-open session through the protocols below, so any store (the bundled
in-memory repository, or an adapter over a real one) can be plugged in by
duck typing.

Protocols:
    NamespaceRegistryProtocol: Session-scoped prefix <-> URI table
    NodeTypeManagerProtocol: Node type lookup and registration
    PropertyProtocol: A named property holding typed values
    NodeProtocol: A node handle with properties and type-tags
    SessionProtocol: An open session on the store
    IdentifierConverterProtocol: Node <-> external resource identifiers
"""

from typing import (
    Iterable,
    Iterator,
    List,
    Protocol,
    Sequence,
    runtime_checkable,
)

from rdflib import URIRef

from .models import NodeType, PropertyType, Value, ValueFactory


__all__ = [
    "NamespaceRegistryProtocol",
    "NodeTypeManagerProtocol",
    "PropertyProtocol",
    "NodeProtocol",
    "SessionProtocol",
    "IdentifierConverterProtocol",
]


@runtime_checkable
class NamespaceRegistryProtocol(Protocol):
    """
    Protocol for the session's namespace registry.
    
    Invariants: a URI has at most one active prefix, prefixes are unique.
    Implementations raise NamespaceRegistryError for illegal registrations.
    """
    
    def is_registered_uri(self, uri: str) -> bool:
        ...
    
    def get_prefix(self, uri: str) -> str:
        """Return the prefix bound to uri; raise NamespaceRegistryError if unbound."""
        ...
    
    def get_uri(self, prefix: str) -> str:
        """Return the URI bound to prefix; raise NamespaceRegistryError if unbound."""
        ...
    
    def register_namespace(self, prefix: str, uri: str) -> None:
        """Bind prefix to uri, replacing any previous prefix of uri."""
        ...
    
    def register_uri(self, uri: str) -> str:
        """Allocate a fresh prefix for uri, bind it, and return it."""
        ...
    
    def get_prefixes(self) -> List[str]:
        ...
    
    def get_uris(self) -> List[str]:
        ...


@runtime_checkable
class NodeTypeManagerProtocol(Protocol):
    """Protocol for node type lookup and registration."""
    
    def has_node_type(self, name: str) -> bool:
        ...
    
    def get_node_type(self, name: str) -> NodeType:
        ...
    
    def register_node_type(self, node_type: NodeType, allow_update: bool = False) -> NodeType:
        ...


@runtime_checkable
class PropertyProtocol(Protocol):
    """Protocol for a property on a node."""
    
    name: str
    namespace_uri: str
    local_name: str
    type: PropertyType
    is_multiple: bool
    
    @property
    def values(self) -> Sequence[Value]:
        ...
    
    @property
    def node(self) -> "NodeProtocol":
        ...


@runtime_checkable
class NodeProtocol(Protocol):
    """
    Protocol for a node handle.
    
    Handles are owned by the session that produced them and must not
    outlive it.
    """
    
    path: str
    identifier: str
    
    @property
    def session(self) -> "SessionProtocol":
        ...
    
    @property
    def primary_node_type(self) -> NodeType:
        ...
    
    @property
    def mixin_node_types(self) -> List[NodeType]:
        ...
    
    def is_node_type(self, name: str) -> bool:
        ...
    
    def can_add_mixin(self, name: str) -> bool:
        ...
    
    def add_mixin(self, name: str) -> None:
        ...
    
    def remove_mixin(self, name: str) -> None:
        ...
    
    def has_property(self, name: str) -> bool:
        ...
    
    def get_property(self, name: str) -> PropertyProtocol:
        ...
    
    def get_properties(self) -> Iterator[PropertyProtocol]:
        ...
    
    def set_property(
        self,
        name: str,
        values: Sequence[Value],
        multiple: bool = False,
    ) -> PropertyProtocol:
        ...
    
    def remove_property(self, name: str) -> None:
        ...


@runtime_checkable
class SessionProtocol(Protocol):
    """Protocol for an open session on the structured store."""
    
    workspace_name: str
    
    @property
    def namespace_registry(self) -> NamespaceRegistryProtocol:
        ...
    
    @property
    def node_type_manager(self) -> NodeTypeManagerProtocol:
        ...
    
    @property
    def value_factory(self) -> ValueFactory:
        ...
    
    @property
    def root_node(self) -> NodeProtocol:
        ...
    
    def get_node(self, path: str) -> NodeProtocol:
        ...
    
    def get_node_by_identifier(self, identifier: str) -> NodeProtocol:
        ...
    
    def workspace_names(self) -> Iterable[str]:
        ...


@runtime_checkable
class IdentifierConverterProtocol(Protocol):
    """
    Protocol for the injected identifier converter.
    
    to_node may raise (unknown or foreign resource); to_resource is total.
    """
    
    def to_node(self, resource: URIRef) -> NodeProtocol:
        ...
    
    def to_resource(self, node: NodeProtocol) -> URIRef:
        ...
    
    def path_to_resource(self, path: str) -> URIRef:
        ...
    
    def in_domain(self, resource: URIRef) -> bool:
        ...
