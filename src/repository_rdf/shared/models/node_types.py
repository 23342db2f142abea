"""
Node type definitions.

A node type names the properties a node may carry (with their required
value types) and whether the node may hold children. Mixin types are
auxiliary type-tags assignable to a node on top of its primary type.
"""

from dataclasses import dataclass, field
from typing import Tuple

from .values import PropertyType


@dataclass(frozen=True)
class PropertyDefinition:
    """
    Declared property of a node type.
    
    Attributes:
        name: Property name (prefix:localName), or '*' for a residual definition.
        required_type: Declared value type (UNDEFINED accepts anything).
        multiple: Whether the property holds a list of values.
    """
    name: str
    required_type: PropertyType = PropertyType.UNDEFINED
    multiple: bool = False


@dataclass(frozen=True)
class NodeType:
    """
    A primary or mixin node type.
    
    Attributes:
        name: Type name (prefix:localName).
        is_mixin: True for type-tags that can be added to existing nodes.
        is_queryable: Whether nodes of this type are visible to queries.
        property_definitions: Properties declared by the type.
        child_node_definitions: Names of child node definitions; a type with
            any is a container.
        supertypes: Names of the types this one extends.
        allows_mixins: False when nodes of this primary type refuse new mixins.
    
    Example:
        >>> NodeType("ex:Tagged", is_mixin=True).has_child_node_definitions
        False
    """
    name: str
    is_mixin: bool = False
    is_queryable: bool = True
    property_definitions: Tuple[PropertyDefinition, ...] = field(default_factory=tuple)
    child_node_definitions: Tuple[str, ...] = field(default_factory=tuple)
    supertypes: Tuple[str, ...] = field(default_factory=tuple)
    allows_mixins: bool = True
    
    @property
    def has_child_node_definitions(self) -> bool:
        return len(self.child_node_definitions) > 0
    
    @classmethod
    def mixin(cls, name: str) -> "NodeType":
        """Template for an on-demand mixin: queryable, no structural constraints."""
        return cls(name=name, is_mixin=True, is_queryable=True)
