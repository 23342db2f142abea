"""
Streaming triple sources.

Every source is a lazy, finite, single-pass iterator of triples: nothing is
computed until the first triple is pulled, at most the triple being yielded
is held in memory, and a consumed source cannot be restarted (build a new
one instead). Callers may stop pulling at any point.

Sources:
    PropertiesTripleSource: node properties (+ optional result membership)
    FixityTripleSource: fixity check results for one node
    NamespaceTripleSource: namespaces registered in a session
    WorkspaceTripleSource: workspaces of the repository
    TripleStream: lazy concatenation of other sources
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional, Tuple

from rdflib import BNode, Graph, Literal, RDF, URIRef, XSD
from rdflib.term import Node

from ...constants import RegistryConfig
from ...core import lexicon
from ...core.namespaces import to_rdf_namespace
from ...shared.models import FixityResult
from ...shared.protocols import (
    IdentifierConverterProtocol,
    NamespaceRegistryProtocol,
    NodeProtocol,
    SessionProtocol,
)
from .node_properties import get_predicate_for_property
from .value_converter import ValueConverter

logger = logging.getLogger(__name__)

Triple = Tuple[Node, Node, Node]


def is_public_prefix(prefix: str) -> bool:
    """Prefixes worth publishing: not empty, not reserved for XML."""
    return bool(prefix) and not prefix.lower().startswith(RegistryConfig.RESERVED_PREFIX_START)


class TripleSource(ABC):
    """
    Base class for lazy, forward-only triple producers.
    
    Subclasses implement _triples() as a generator; iteration starts it on
    the first pull.
    """
    
    def __init__(self) -> None:
        self._iterator: Optional[Iterator[Triple]] = None
    
    @abstractmethod
    def _triples(self) -> Iterator[Triple]:
        """Generate the triples of this source."""
        pass
    
    def __iter__(self) -> "TripleSource":
        return self
    
    def __next__(self) -> Triple:
        if self._iterator is None:
            self._iterator = self._triples()
        return next(self._iterator)
    
    def concat(self, *others: Iterable[Triple]) -> "TripleStream":
        """Chain this source with others, lazily."""
        return TripleStream(self, *others)
    
    def to_graph(
        self,
        graph: Optional[Graph] = None,
        namespace_registry: Optional[NamespaceRegistryProtocol] = None,
    ) -> Graph:
        """
        Drain the source into an rdflib Graph.
        
        Args:
            graph: Graph to add to (a new one when omitted).
            namespace_registry: Registry whose prefixes are bound on the graph.
        """
        graph = graph if graph is not None else Graph()
        if namespace_registry is not None:
            for prefix in namespace_registry.get_prefixes():
                if is_public_prefix(prefix):
                    graph.bind(prefix, to_rdf_namespace(namespace_registry.get_uri(prefix)), override=True)
        count = 0
        for triple in self:
            graph.add(triple)
            count += 1
        logger.debug(f"Materialized {count} triples into graph")
        return graph


class TripleStream(TripleSource):
    """Lazy concatenation of triple iterables."""
    
    def __init__(self, *sources: Iterable[Triple]) -> None:
        super().__init__()
        self._sources = list(sources)
    
    def _triples(self) -> Iterator[Triple]:
        for source in self._sources:
            yield from source


class PropertiesTripleSource(TripleSource):
    """
    Triples for every property value of a sequence of nodes.
    
    When a grouping subject is given (e.g. a search result), one
    `grouping ldp:member node` triple is emitted after each node's
    properties.
    """
    
    def __init__(
        self,
        nodes: Iterable[NodeProtocol],
        id_converter: IdentifierConverterProtocol,
        grouping_subject: Optional[URIRef] = None,
    ) -> None:
        super().__init__()
        self.nodes = nodes
        self.id_converter = id_converter
        self.grouping_subject = grouping_subject
        self.value_converter = ValueConverter(id_converter)
    
    def _triples(self) -> Iterator[Triple]:
        for node in self.nodes:
            subject = self.id_converter.to_resource(node)
            logger.debug(f"Emitting properties of {node.path}")
            yield from self._type_triples(node, subject)
            for prop in node.get_properties():
                predicate = get_predicate_for_property(prop)
                for value in prop.values:
                    yield subject, predicate, self.value_converter.value_to_term(value, node.session)
            if self.grouping_subject is not None:
                yield self.grouping_subject, lexicon.HAS_MEMBER_OF_RESULT, subject
    
    def _type_triples(self, node: NodeProtocol, subject: URIRef) -> Iterator[Triple]:
        registry = node.session.namespace_registry
        yield subject, lexicon.HAS_PRIMARY_TYPE, Literal(node.primary_node_type.name)
        for mixin in node.mixin_node_types:
            yield subject, lexicon.HAS_MIXIN_TYPE, Literal(mixin.name)
            prefix, _, local_name = mixin.name.partition(":")
            if local_name and prefix in registry.get_prefixes():
                namespace = to_rdf_namespace(registry.get_uri(prefix))
                yield subject, RDF.type, URIRef(namespace + local_name)


class FixityTripleSource(TripleSource):
    """
    Triples describing fixity check results for one node.
    
    Each result gets its own blank node linked from the node's external
    identifier; results are never aggregated.
    """
    
    def __init__(
        self,
        node: NodeProtocol,
        id_converter: IdentifierConverterProtocol,
        results: Iterable[FixityResult],
        digest: str,
        size: int,
    ) -> None:
        super().__init__()
        self.node = node
        self.id_converter = id_converter
        self.results = results
        self.digest = str(digest)
        self.size = size
    
    def _triples(self) -> Iterator[Triple]:
        subject = self.id_converter.to_resource(self.node)
        for result in self.results:
            result_subject = BNode()
            yield subject, lexicon.HAS_FIXITY_RESULT, result_subject
            yield result_subject, RDF.type, lexicon.FIXITY_TYPE
            for state in sorted(result.status(self.size, self.digest), key=lambda s: s.value):
                yield result_subject, lexicon.HAS_FIXITY_STATE, Literal(state.value)
            yield result_subject, lexicon.HAS_MESSAGE_DIGEST, URIRef(result.computed_checksum)
            yield result_subject, lexicon.HAS_SIZE, Literal(result.computed_size, datatype=XSD.long)
            if result.store_identifier:
                yield result_subject, lexicon.HAS_CONTENT_LOCATION, Literal(result.store_identifier)


class NamespaceTripleSource(TripleSource):
    """One vocabulary description per registered (public) namespace."""
    
    def __init__(self, session: SessionProtocol) -> None:
        super().__init__()
        self.session = session
    
    def _triples(self) -> Iterator[Triple]:
        registry = self.session.namespace_registry
        for prefix in registry.get_prefixes():
            if not is_public_prefix(prefix):
                continue
            namespace = to_rdf_namespace(registry.get_uri(prefix))
            subject = URIRef(namespace)
            yield subject, RDF.type, lexicon.VOAF_VOCABULARY
            yield subject, lexicon.HAS_NAMESPACE_PREFIX, Literal(prefix)
            yield subject, lexicon.HAS_NAMESPACE_URI, Literal(namespace)


class WorkspaceTripleSource(TripleSource):
    """One description per workspace, identified through the identifier converter."""
    
    def __init__(
        self,
        session: SessionProtocol,
        id_converter: IdentifierConverterProtocol,
    ) -> None:
        super().__init__()
        self.session = session
        self.id_converter = id_converter
    
    def _triples(self) -> Iterator[Triple]:
        root = self.id_converter.to_resource(self.session.root_node)
        for name in self.session.workspace_names():
            workspace = self.id_converter.path_to_resource(RegistryConfig.WORKSPACE_PATH_PREFIX + name)
            yield root, lexicon.HAS_WORKSPACE, workspace
            yield workspace, RDF.type, lexicon.WORKSPACE_TYPE
            yield workspace, lexicon.DC_TITLE, Literal(name)
