"""
RDF package - repository <-> RDF translation components.

Components:
- rdf_tools: RepositoryRdfTools facade
- value_converter: RDF term <-> typed value conversion and literal inference
- type_tags: mixin definition and application
- node_properties: property write semantics and predicate mapping
- streams: lazy triple sources
"""

from .value_converter import (
    ValueConverter,
    InferenceRule,
    LITERAL_INFERENCE_ORDER,
    PROPERTY_TYPE_TO_XSD,
    infer_literal_type,
)
from .type_tags import (
    lookup_or_define,
    apply_type,
    add_type_tag,
    remove_type_tag,
)
from .node_properties import (
    append_or_replace_node_property,
    remove_node_property,
    get_predicate_for_property,
    get_definition_for_property_name,
)
from .streams import (
    Triple,
    TripleSource,
    TripleStream,
    PropertiesTripleSource,
    FixityTripleSource,
    NamespaceTripleSource,
    WorkspaceTripleSource,
)
from .rdf_tools import RepositoryRdfTools

__all__ = [
    'RepositoryRdfTools',
    # Values
    'ValueConverter',
    'InferenceRule',
    'LITERAL_INFERENCE_ORDER',
    'PROPERTY_TYPE_TO_XSD',
    'infer_literal_type',
    # Type tags
    'lookup_or_define',
    'apply_type',
    'add_type_tag',
    'remove_type_tag',
    # Properties
    'append_or_replace_node_property',
    'remove_node_property',
    'get_predicate_for_property',
    'get_definition_for_property_name',
    # Streams
    'Triple',
    'TripleSource',
    'TripleStream',
    'PropertiesTripleSource',
    'FixityTripleSource',
    'NamespaceTripleSource',
    'WorkspaceTripleSource',
]
