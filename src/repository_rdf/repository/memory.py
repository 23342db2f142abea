"""
In-memory structured store.

A small reference implementation of the store protocols: a repository of
workspaces holding nodes with typed properties and mixins, a shared
namespace registry and a node type manager. The translator runs unchanged
against it, so it backs the CLI and the test suite.

Example:
    repository = InMemoryRepository()
    session = repository.login()
    node = session.add_node("/books/1")
"""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from ..constants import Namespaces, RegistryConfig
from ..core.exceptions import (
    NamespaceRegistryError,
    NodeNotFoundError,
    StoreOperationFailed,
    ValueFormatError,
)
from ..shared.models import NodeType, PropertyDefinition, PropertyType, Value, ValueFactory

logger = logging.getLogger(__name__)

BUILTIN_NAMESPACES: Dict[str, str] = {
    "": "",
    "jcr": Namespaces.JCR,
    "nt": Namespaces.NT,
    "mix": Namespaces.MIX,
    "xml": Namespaces.XML,
}

BUILTIN_NODE_TYPES: Sequence[NodeType] = (
    NodeType("nt:base"),
    NodeType(
        "nt:unstructured",
        property_definitions=(
            PropertyDefinition(RegistryConfig.RESIDUAL_PROPERTY_NAME, multiple=True),
        ),
        child_node_definitions=(RegistryConfig.RESIDUAL_PROPERTY_NAME,),
        supertypes=("nt:base",),
    ),
    NodeType("nt:frozenNode", supertypes=("nt:base",), allows_mixins=False),
    NodeType("mix:referenceable", is_mixin=True),
    NodeType(
        "mix:created",
        is_mixin=True,
        property_definitions=(PropertyDefinition("jcr:created", PropertyType.DATE),),
    ),
)


class InMemoryNamespaceRegistry:
    """
    Thread-safe prefix <-> URI table.
    
    Registering a new prefix for an already-registered URI replaces the old
    prefix, so a URI never has more than one active prefix.
    """
    
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._uri_by_prefix: Dict[str, str] = dict(BUILTIN_NAMESPACES)
        self._prefix_by_uri: Dict[str, str] = {uri: prefix for prefix, uri in BUILTIN_NAMESPACES.items()}
        self._generated = 0
    
    def is_registered_uri(self, uri: str) -> bool:
        with self._lock:
            return uri in self._prefix_by_uri
    
    def is_registered_prefix(self, prefix: str) -> bool:
        with self._lock:
            return prefix in self._uri_by_prefix
    
    def get_prefix(self, uri: str) -> str:
        with self._lock:
            try:
                return self._prefix_by_uri[uri]
            except KeyError:
                raise NamespaceRegistryError(f"No prefix registered for namespace {uri}", uri=uri) from None
    
    def get_uri(self, prefix: str) -> str:
        with self._lock:
            try:
                return self._uri_by_prefix[prefix]
            except KeyError:
                raise NamespaceRegistryError(f"No namespace registered for prefix {prefix}", prefix=prefix) from None
    
    def get_prefixes(self) -> List[str]:
        with self._lock:
            return list(self._uri_by_prefix)
    
    def get_uris(self) -> List[str]:
        with self._lock:
            return list(self._prefix_by_uri)
    
    def register_namespace(self, prefix: str, uri: str) -> None:
        """
        Bind prefix to uri.
        
        Raises:
            NamespaceRegistryError: Empty or reserved prefix, builtin namespace,
                or prefix already bound to another URI.
        """
        if not prefix or prefix.lower().startswith(RegistryConfig.RESERVED_PREFIX_START):
            raise NamespaceRegistryError(f"Illegal namespace prefix: '{prefix}'", prefix=prefix, uri=uri)
        if ":" in prefix:
            raise NamespaceRegistryError(f"Namespace prefix may not contain ':': '{prefix}'", prefix=prefix, uri=uri)
        with self._lock:
            if BUILTIN_NAMESPACES.get(prefix) not in (None, uri) or (
                uri in BUILTIN_NAMESPACES.values() and BUILTIN_NAMESPACES.get(prefix) != uri
            ):
                raise NamespaceRegistryError(f"Cannot remap builtin namespace {prefix} -> {uri}", prefix=prefix, uri=uri)
            existing = self._uri_by_prefix.get(prefix)
            if existing is not None and existing != uri:
                raise NamespaceRegistryError(
                    f"Prefix '{prefix}' is already bound to {existing}", prefix=prefix, uri=uri
                )
            old_prefix = self._prefix_by_uri.get(uri)
            if old_prefix is not None and old_prefix != prefix:
                del self._uri_by_prefix[old_prefix]
            self._uri_by_prefix[prefix] = uri
            self._prefix_by_uri[uri] = prefix
        logger.info(f"Registered namespace {prefix} -> {uri}")
    
    def register_uri(self, uri: str) -> str:
        """Return the prefix of uri, allocating a generated one if needed."""
        with self._lock:
            if uri in self._prefix_by_uri:
                return self._prefix_by_uri[uri]
            while True:
                self._generated += 1
                prefix = RegistryConfig.GENERATED_PREFIX_TEMPLATE.format(self._generated)
                if prefix not in self._uri_by_prefix:
                    break
            self.register_namespace(prefix, uri)
            return prefix
    
    def unregister_namespace(self, prefix: str) -> None:
        with self._lock:
            if prefix in BUILTIN_NAMESPACES:
                raise NamespaceRegistryError(f"Cannot unregister builtin prefix '{prefix}'", prefix=prefix)
            uri = self.get_uri(prefix)
            del self._uri_by_prefix[prefix]
            del self._prefix_by_uri[uri]


class InMemoryNodeTypeManager:
    """Node type lookup and registration; type names must use registered prefixes."""
    
    def __init__(self, registry: InMemoryNamespaceRegistry) -> None:
        self._registry = registry
        self._lock = threading.RLock()
        self._types: Dict[str, NodeType] = {t.name: t for t in BUILTIN_NODE_TYPES}
    
    def has_node_type(self, name: str) -> bool:
        with self._lock:
            return name in self._types
    
    def get_node_type(self, name: str) -> NodeType:
        with self._lock:
            try:
                return self._types[name]
            except KeyError:
                raise StoreOperationFailed(f"No such node type: {name}") from None
    
    def get_all_node_types(self) -> List[NodeType]:
        with self._lock:
            return list(self._types.values())
    
    def register_node_type(self, node_type: NodeType, allow_update: bool = False) -> NodeType:
        prefix, sep, _ = node_type.name.partition(":")
        if sep and not self._registry.is_registered_prefix(prefix):
            raise NamespaceRegistryError(
                f"Unregistered prefix in node type name: {node_type.name}", prefix=prefix
            )
        with self._lock:
            if node_type.name in self._types and not allow_update:
                raise StoreOperationFailed(f"Node type already exists: {node_type.name}")
            self._types[node_type.name] = node_type
        logger.info(f"Registered node type {node_type.name} (mixin={node_type.is_mixin})")
        return node_type


@dataclass
class InMemoryProperty:
    """A named property on an in-memory node."""
    name: str
    node: "InMemoryNode"
    _values: List[Value] = field(default_factory=list)
    is_multiple: bool = False
    
    @property
    def values(self) -> List[Value]:
        return list(self._values)
    
    @property
    def type(self) -> PropertyType:
        return self._values[0].type if self._values else PropertyType.UNDEFINED
    
    @property
    def value(self) -> Value:
        """The single value of a single-valued property."""
        if self.is_multiple:
            raise ValueFormatError(self.name, "single-valued property")
        return self._values[0]
    
    @property
    def prefix(self) -> str:
        prefix, sep, _ = self.name.partition(":")
        return prefix if sep else ""
    
    @property
    def local_name(self) -> str:
        _, sep, local_name = self.name.partition(":")
        return local_name if sep else self.name
    
    @property
    def namespace_uri(self) -> str:
        if not self.prefix:
            return ""
        return self.node.session.namespace_registry.get_uri(self.prefix)


class InMemoryNode:
    """A node in an in-memory workspace."""
    
    def __init__(self, session: "InMemorySession", path: str, primary_type: str) -> None:
        self.path = path
        self.identifier = str(uuid.uuid4())
        self._session = session
        self._primary_type = primary_type
        self._mixins: List[str] = []
        self._properties: Dict[str, InMemoryProperty] = {}
    
    def __repr__(self) -> str:
        return f"InMemoryNode({self.path!r})"
    
    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]
    
    @property
    def session(self) -> "InMemorySession":
        return self._session
    
    @property
    def _types(self) -> InMemoryNodeTypeManager:
        return self._session.node_type_manager
    
    @property
    def primary_node_type(self) -> NodeType:
        return self._types.get_node_type(self._primary_type)
    
    @property
    def mixin_node_types(self) -> List[NodeType]:
        return [self._types.get_node_type(name) for name in self._mixins]
    
    def is_node_type(self, name: str) -> bool:
        """True if the node's primary type, a mixin, or one of their supertypes is name."""
        for node_type in [self.primary_node_type] + self.mixin_node_types:
            if node_type.name == name or name in node_type.supertypes:
                return True
        return False
    
    def can_add_mixin(self, name: str) -> bool:
        if not self._types.has_node_type(name):
            return False
        return self._types.get_node_type(name).is_mixin and self.primary_node_type.allows_mixins
    
    def add_mixin(self, name: str) -> None:
        if not self.can_add_mixin(name):
            raise StoreOperationFailed(f"Cannot add mixin {name} to node {self.path}")
        if name not in self._mixins:
            self._mixins.append(name)
    
    def remove_mixin(self, name: str) -> None:
        if name not in self._mixins:
            raise StoreOperationFailed(f"Node {self.path} does not carry mixin {name}")
        self._mixins.remove(name)
    
    def has_property(self, name: str) -> bool:
        return name in self._properties
    
    def get_property(self, name: str) -> InMemoryProperty:
        try:
            return self._properties[name]
        except KeyError:
            raise StoreOperationFailed(f"No property {name} on node {self.path}") from None
    
    def get_properties(self) -> Iterator[InMemoryProperty]:
        return iter(list(self._properties.values()))
    
    def _definition(self, name: str) -> Optional[PropertyDefinition]:
        for node_type in [self.primary_node_type] + self.mixin_node_types:
            for definition in node_type.property_definitions:
                if definition.name == name:
                    return definition
        return None
    
    def set_property(self, name: str, values: Sequence[Value], multiple: bool = False) -> InMemoryProperty:
        """
        Replace the values of a property, creating it if needed.
        
        Raises:
            ValueFormatError: If a value does not match the declared type.
            StoreOperationFailed: If several values are set on a single-valued property.
        """
        if not values:
            self.remove_property(name)
            return InMemoryProperty(name, self)
        definition = self._definition(name)
        if definition is not None:
            required = definition.required_type
            for value in values:
                if required != PropertyType.UNDEFINED and value.type != required:
                    raise ValueFormatError(value.string, required.name)
            if not definition.multiple and len(values) > 1:
                raise StoreOperationFailed(f"Property {name} on {self.path} is single-valued")
        prop = InMemoryProperty(name, self, list(values), multiple)
        self._properties[name] = prop
        return prop
    
    def remove_property(self, name: str) -> None:
        self._properties.pop(name, None)


class InMemoryRepository:
    """
    A repository of named workspaces sharing one namespace registry and one
    set of node types.
    """
    
    def __init__(self, workspaces: Sequence[str] = (RegistryConfig.DEFAULT_WORKSPACE,)) -> None:
        self.namespace_registry = InMemoryNamespaceRegistry()
        self.node_type_manager = InMemoryNodeTypeManager(self.namespace_registry)
        self.value_factory = ValueFactory()
        self._lock = threading.RLock()
        self._workspaces: Dict[str, Dict[str, InMemoryNode]] = {}
        for name in workspaces:
            self.create_workspace(name)
    
    def workspace_names(self) -> List[str]:
        with self._lock:
            return list(self._workspaces)
    
    def create_workspace(self, name: str) -> None:
        with self._lock:
            if name in self._workspaces:
                raise StoreOperationFailed(f"Workspace already exists: {name}")
            self._workspaces[name] = {}
        logger.info(f"Created workspace {name}")
    
    def delete_workspace(self, name: str) -> None:
        with self._lock:
            if name not in self._workspaces:
                raise NodeNotFoundError(RegistryConfig.WORKSPACE_PATH_PREFIX + name)
            del self._workspaces[name]
        logger.info(f"Deleted workspace {name}")
    
    def login(self, workspace: str = RegistryConfig.DEFAULT_WORKSPACE) -> "InMemorySession":
        with self._lock:
            if workspace not in self._workspaces:
                raise NodeNotFoundError(RegistryConfig.WORKSPACE_PATH_PREFIX + workspace)
            nodes = self._workspaces[workspace]
        return InMemorySession(self, workspace, nodes)


class InMemorySession:
    """An open session on one workspace of an InMemoryRepository."""
    
    def __init__(self, repository: InMemoryRepository, workspace_name: str, nodes: Dict[str, InMemoryNode]):
        self.repository = repository
        self.workspace_name = workspace_name
        self._nodes = nodes
        if "/" not in self._nodes:
            self._nodes["/"] = InMemoryNode(self, "/", RegistryConfig.DEFAULT_PRIMARY_TYPE)
    
    @property
    def namespace_registry(self) -> InMemoryNamespaceRegistry:
        return self.repository.namespace_registry
    
    @property
    def node_type_manager(self) -> InMemoryNodeTypeManager:
        return self.repository.node_type_manager
    
    @property
    def value_factory(self) -> ValueFactory:
        return self.repository.value_factory
    
    @property
    def root_node(self) -> InMemoryNode:
        return self._nodes["/"]
    
    def workspace_names(self) -> List[str]:
        return self.repository.workspace_names()
    
    def node_exists(self, path: str) -> bool:
        return path in self._nodes
    
    def get_node(self, path: str) -> InMemoryNode:
        try:
            return self._nodes[path]
        except KeyError:
            raise NodeNotFoundError(path) from None
    
    def get_node_by_identifier(self, identifier: str) -> InMemoryNode:
        for node in self._nodes.values():
            if node.identifier == identifier:
                return node
        raise NodeNotFoundError(identifier)
    
    def get_nodes(self) -> Iterator[InMemoryNode]:
        """All nodes in path order, root first."""
        for path in sorted(self._nodes):
            yield self._nodes[path]
    
    def add_node(self, path: str, primary_type: str = RegistryConfig.DEFAULT_PRIMARY_TYPE) -> InMemoryNode:
        """
        Create a node, creating missing ancestors as unstructured nodes.
        
        Raises:
            StoreOperationFailed: If the path is not absolute, already exists,
                or the primary type is unknown or a mixin.
        """
        if not path.startswith("/") or path == "/":
            raise StoreOperationFailed(f"Invalid node path: {path}")
        path = path.rstrip("/")
        if path in self._nodes:
            raise StoreOperationFailed(f"Node already exists: {path}")
        if self.node_type_manager.get_node_type(primary_type).is_mixin:
            raise StoreOperationFailed(f"Cannot use mixin {primary_type} as a primary type")
        parent_path = path.rsplit("/", 1)[0] or "/"
        if parent_path not in self._nodes:
            self.add_node(parent_path)
        node = InMemoryNode(self, path, primary_type)
        self._nodes[path] = node
        logger.debug(f"Created node {path} ({primary_type})")
        return node
    
    def get_or_add_node(self, path: str) -> InMemoryNode:
        if self.node_exists(path):
            return self.get_node(path)
        return self.add_node(path)
