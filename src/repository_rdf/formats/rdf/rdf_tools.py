"""
Repository <-> RDF translator.

RepositoryRdfTools is the facade callers use to write RDF into repository
nodes and to read nodes, fixity results, namespaces and workspaces back out
as RDF. It is bound to an identifier converter and (optionally) a session,
and delegates to focused components:

- core.namespaces: namespace bridge and prefix resolution
- core.lexicon: managed-property guard
- value_converter: RDF term <-> typed value conversion
- type_tags: mixin definition and application
- node_properties: append-or-replace / remove of property values
- streams: lazy triple sources

A translator serves one logical flow on one session; the session is the
serialization boundary for concurrent use.
"""

import logging
from typing import Iterable, Mapping, Optional

from rdflib import Graph, URIRef
from rdflib.term import Node

from ...core.exceptions import ValueFormatError
from ...core.lexicon import assert_mutable, is_managed_predicate
from ...core.namespaces import resolve_property_name, split_predicate
from ...shared.models import FixityResult, NodeType, PropertyType, Value, ValueFactory
from ...shared.protocols import (
    IdentifierConverterProtocol,
    NamespaceRegistryProtocol,
    NodeProtocol,
    SessionProtocol,
)
from . import type_tags
from .node_properties import (
    append_or_replace_node_property,
    get_definition_for_property_name,
    get_reference_property_name,
    remove_node_property,
)
from .streams import (
    FixityTripleSource,
    NamespaceTripleSource,
    PropertiesTripleSource,
    TripleStream,
    WorkspaceTripleSource,
)
from .value_converter import ValueConverter

logger = logging.getLogger(__name__)


class RepositoryRdfTools:
    """
    Translates between repository nodes and RDF.
    
    Example:
        tools = RepositoryRdfTools.with_context(id_converter, session)
        node = session.get_node("/books/1")
        tools.add_property(node, EX.title, Literal("Hello"), {"ex": str(EX)})
        graph = tools.get_properties_triples([node]).to_graph()
    """
    
    def __init__(
        self,
        id_converter: IdentifierConverterProtocol,
        session: Optional[SessionProtocol] = None,
    ):
        """
        Initialize the translator.
        
        Args:
            id_converter: Maps RDF resources to nodes and back.
            session: Session for session-level operations (namespace and
                workspace triples, predicate resolution without a node).
        """
        self.id_converter = id_converter
        self.session = session
        self.value_converter = ValueConverter(id_converter)
    
    @classmethod
    def with_context(
        cls,
        id_converter: IdentifierConverterProtocol,
        session: SessionProtocol,
    ) -> "RepositoryRdfTools":
        """Create a translator bound to both an identifier converter and a session."""
        if id_converter is None:
            raise ValueError("RepositoryRdfTools must operate with a non-null identifier converter for context!")
        return cls(id_converter, session)
    
    def _require_session(self) -> SessionProtocol:
        if self.session is None:
            raise ValueError("This operation requires a translator bound to a session")
        return self.session
    
    @staticmethod
    def problems_graph() -> Graph:
        """An empty graph in which to collect statements about extraction problems."""
        return Graph()
    
    # ------------------------------------------------------------------
    # Reading the repository as RDF
    # ------------------------------------------------------------------
    
    def get_properties_triples(
        self,
        nodes: Iterable[NodeProtocol],
        grouping_subject: Optional[URIRef] = None,
    ) -> PropertiesTripleSource:
        """Stream the properties of nodes, linking each to grouping_subject if given."""
        return PropertiesTripleSource(nodes, self.id_converter, grouping_subject)
    
    def get_fixity_triples(
        self,
        node: NodeProtocol,
        results: Iterable[FixityResult],
        digest: str,
        size: int,
    ) -> FixityTripleSource:
        """Stream fixity results for node against the expected digest and size."""
        return FixityTripleSource(node, self.id_converter, results, digest, size)
    
    def get_namespace_triples(self) -> NamespaceTripleSource:
        """Stream the namespaces registered in the bound session."""
        return NamespaceTripleSource(self._require_session())
    
    def get_workspace_triples(
        self,
        id_converter: Optional[IdentifierConverterProtocol] = None,
    ) -> WorkspaceTripleSource:
        """Stream the repository's workspaces."""
        return WorkspaceTripleSource(self._require_session(), id_converter or self.id_converter)
    
    @staticmethod
    def concat(*sources) -> TripleStream:
        return TripleStream(*sources)
    
    # ------------------------------------------------------------------
    # Type inspection
    # ------------------------------------------------------------------
    
    @staticmethod
    def is_container(node: NodeProtocol) -> bool:
        """True if the node's primary type or any mixin declares child node definitions."""
        if node.primary_node_type.has_child_node_definitions:
            return True
        return any(t.has_child_node_definitions for t in node.mixin_node_types)
    
    def is_internal_property(self, node: NodeProtocol, predicate: URIRef) -> bool:
        """True if predicate is managed by the repository and must not be set externally."""
        return is_managed_predicate(predicate)
    
    def get_property_type(self, node: NodeProtocol, property_name: str) -> PropertyType:
        """
        Required type of property_name on node, or UNDEFINED when undeclared.
        """
        logger.debug(f"Getting type of property: {property_name} from node: {node.path}")
        definition = get_definition_for_property_name(node, property_name)
        if definition is None:
            return PropertyType.UNDEFINED
        return definition.required_type
    
    def get_property_type_for_node_type(self, node_type, property_name: str) -> PropertyType:
        """
        Required type of property_name declared by node_type.
        
        Args:
            node_type: A NodeType or the name of one (resolved via the session).
        
        Returns:
            The declared type, or UNDEFINED when undeclared or ambiguous
            (declared more than once).
        """
        if isinstance(node_type, str):
            node_type = self._require_session().node_type_manager.get_node_type(node_type)
        result = PropertyType.UNDEFINED
        for definition in node_type.property_definitions:
            if definition.name == property_name:
                if result != PropertyType.UNDEFINED:
                    return PropertyType.UNDEFINED
                result = definition.required_type
        return result
    
    # ------------------------------------------------------------------
    # Predicate -> property name
    # ------------------------------------------------------------------
    
    def get_property_name_from_predicate(
        self,
        node: Optional[NodeProtocol],
        predicate: URIRef,
        namespace_mapping: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Translate a predicate (or type resource) into a property name.
        
        Uses the node's session registry, or the bound session's registry
        when node is None.
        """
        session = node.session if node is not None else self._require_session()
        return self.get_property_name(session.namespace_registry, predicate, namespace_mapping)
    
    @staticmethod
    def get_property_name(
        registry: NamespaceRegistryProtocol,
        predicate: URIRef,
        namespace_mapping: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Translate a predicate into a property name against an explicit registry."""
        if registry is None:
            raise ValueError("registry is required")
        namespace, local_name = split_predicate(predicate, registry.get_uris())
        return resolve_property_name(registry, namespace, local_name, namespace_mapping)
    
    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------
    
    def create_value(
        self,
        term: Node,
        target_type: PropertyType = PropertyType.UNDEFINED,
        node: Optional[NodeProtocol] = None,
        value_factory: Optional[ValueFactory] = None,
    ) -> Value:
        """
        Create a value from an RDF term.
        
        The value factory is taken, in order, from the argument, the node's
        session, or the bound session.
        """
        if value_factory is None:
            session = node.session if node is not None else self._require_session()
            value_factory = session.value_factory
        return self.value_converter.create_value(value_factory, term, target_type)
    
    # ------------------------------------------------------------------
    # Writing RDF into the repository
    # ------------------------------------------------------------------
    
    def add_property(
        self,
        node: NodeProtocol,
        predicate: URIRef,
        value: Node,
        namespace_mapping: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Store one (predicate, object) pair on node.
        
        Raises:
            ManagedPropertyViolation: If predicate is managed; nothing is written.
            MalformedInput: If the object is a non-URI for a reference property.
            ValueFormatError: If the object cannot be converted for the property's
                type; names the property and the node.
        """
        assert_mutable(predicate, node.path, action="persist")
        property_name = self.get_property_name_from_predicate(node, predicate, namespace_mapping)
        try:
            new_value = self.create_value(value, self.get_property_type(node, property_name), node=node)
        except ValueFormatError as e:
            raise ValueFormatError(e.lexical, e.type_name, property_name=property_name, node_path=node.path) from e
        append_or_replace_node_property(node, property_name, new_value)
    
    def remove_property(
        self,
        node: NodeProtocol,
        predicate: URIRef,
        value: Node,
        namespace_mapping: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Remove one (predicate, object) pair from node; absent pairs are ignored.
        
        Raises:
            ManagedPropertyViolation: If predicate is managed; nothing is removed.
        """
        assert_mutable(predicate, node.path, action="remove")
        property_name = self.get_property_name_from_predicate(node, predicate, namespace_mapping)
        if not (node.has_property(property_name)
                or node.has_property(get_reference_property_name(property_name))):
            return
        old_value = self.create_value(value, self.get_property_type(node, property_name), node=node)
        remove_node_property(node, property_name, old_value)
    
    def add_mixin(
        self,
        node: NodeProtocol,
        mixin_resource: URIRef,
        namespace_mapping: Optional[Mapping[str, str]] = None,
    ) -> None:
        """
        Tag node with the type named by mixin_resource, defining it if unknown.
        
        Raises:
            IncompatibleType: If the node's types refuse the mixin.
        """
        mixin_name = self.get_property_name_from_predicate(node, mixin_resource, namespace_mapping)
        type_tags.add_type_tag(node, mixin_name, resource=str(mixin_resource))
    
    def lookup_or_define_type(
        self,
        mixin_resource: URIRef,
        namespace_mapping: Optional[Mapping[str, str]] = None,
    ) -> NodeType:
        """First step of add_mixin on its own: resolve and define the type."""
        session = self._require_session()
        mixin_name = self.get_property_name_from_predicate(None, mixin_resource, namespace_mapping)
        return type_tags.lookup_or_define(session, mixin_name)
    
    def remove_mixin(
        self,
        node: NodeProtocol,
        mixin_resource: URIRef,
        namespace_mapping: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Remove the type named by mixin_resource from node, if present."""
        mixin_name = self.get_property_name_from_predicate(node, mixin_resource, namespace_mapping)
        type_tags.remove_type_tag(node, mixin_name)
