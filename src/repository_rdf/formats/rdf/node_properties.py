"""
Node property helpers.

Append-or-replace and remove semantics for writing RDF-derived values into
node properties, definition lookup, and the predicate <-> property name
mapping for properties read back out as RDF.

Reference values are stored under `<name>_ref` so that a node can carry both
a literal and a reference form of the same predicate; the suffix is removed
again when the property is mapped back to a predicate.
"""

import logging
from typing import List, Optional

from rdflib import URIRef

from ...constants import RegistryConfig
from ...core.namespaces import to_rdf_namespace
from ...shared.models import PropertyDefinition, PropertyType, Value
from ...shared.protocols import NodeProtocol, PropertyProtocol

logger = logging.getLogger(__name__)

REFERENCE_SUFFIX = RegistryConfig.REFERENCE_PROPERTY_SUFFIX


def get_reference_property_name(property_name: str) -> str:
    """Storage name for reference values of property_name."""
    return property_name + REFERENCE_SUFFIX


def get_reference_property_original_name(property_name: str) -> str:
    """Strip the reference suffix from a stored property name."""
    if property_name.endswith(REFERENCE_SUFFIX):
        return property_name[:-len(REFERENCE_SUFFIX)]
    return property_name


def is_reference_property(prop: PropertyProtocol) -> bool:
    return PropertyType(prop.type).is_reference


def get_definition_for_property_name(
    node: NodeProtocol,
    property_name: str,
) -> Optional[PropertyDefinition]:
    """
    Find the definition of property_name on the node's primary or mixin types.
    
    Only exactly-named definitions count; residual definitions are ignored.
    """
    node_types = [node.primary_node_type] + list(node.mixin_node_types)
    for node_type in node_types:
        for definition in node_type.property_definitions:
            if definition.name == property_name:
                return definition
    return None


def is_multivalued_property(node: NodeProtocol, property_name: str) -> bool:
    """Undeclared properties are multi-valued, as RDF predicates are."""
    definition = get_definition_for_property_name(node, property_name)
    if definition is None:
        return True
    return definition.multiple


def get_predicate_for_property(prop: PropertyProtocol) -> URIRef:
    """
    Map a node property to an RDF predicate.
    
    The property's namespace is bridged back to its RDF form; reference
    properties lose their storage suffix.
    """
    logger.debug(f"Creating predicate for property: {prop.name}")
    if not prop.namespace_uri:
        return URIRef(prop.name)
    local_name = prop.local_name
    if is_reference_property(prop):
        local_name = get_reference_property_original_name(local_name)
    return URIRef(to_rdf_namespace(prop.namespace_uri) + local_name)


def storage_name_for(property_name: str, value: Value) -> str:
    """Name under which value is stored for property_name."""
    if value.type.is_reference:
        return get_reference_property_name(property_name)
    return property_name


def append_or_replace_node_property(
    node: NodeProtocol,
    property_name: str,
    new_value: Value,
) -> None:
    """
    Write a value to a node property.
    
    - Existing multi-valued property: append if not already present
    - Existing single-valued property: replace
    - New property: created multi-valued unless its definition says otherwise
    """
    name = storage_name_for(property_name, new_value)
    
    if node.has_property(name):
        prop = node.get_property(name)
        if prop.is_multiple:
            values: List[Value] = list(prop.values)
            if new_value in values:
                logger.debug(f"Value {new_value.string} already present on {node.path} {name}")
                return
            values.append(new_value)
            logger.debug(f"Appending value {new_value.string} to {node.path} {name}")
            node.set_property(name, values, multiple=True)
        else:
            logger.debug(f"Replacing value of {node.path} {name} with {new_value.string}")
            node.set_property(name, [new_value], multiple=False)
        return
    
    multiple = is_multivalued_property(node, property_name)
    logger.debug(f"Creating property {node.path} {name} = {new_value.string}")
    node.set_property(name, [new_value], multiple=multiple)


def remove_node_property(
    node: NodeProtocol,
    property_name: str,
    value_to_remove: Value,
) -> bool:
    """
    Remove one value from a node property.
    
    The property disappears entirely once its last value is removed.
    
    Returns:
        True if a value was removed.
    """
    name = storage_name_for(property_name, value_to_remove)
    if not node.has_property(name):
        return False
    
    prop = node.get_property(name)
    values = list(prop.values)
    if value_to_remove not in values:
        logger.debug(f"Value {value_to_remove.string} not present on {node.path} {name}")
        return False
    
    values.remove(value_to_remove)
    if values and prop.is_multiple:
        node.set_property(name, values, multiple=True)
    else:
        logger.debug(f"Removing property {node.path} {name}")
        node.remove_property(name)
    return True
