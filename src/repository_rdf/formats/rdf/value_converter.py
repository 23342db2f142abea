"""
RDF term <-> typed value conversion.

This module converts RDF terms into repository values, either as an
explicit target type or by inferring one from a literal's datatype, and
converts stored values back into RDF terms.

Conversion policy (create_value), evaluated in order:
    1. URI + (weak) reference target -> resolve via the identifier converter
    2. non-URI + (weak) reference target -> InvalidValueShape
    3. URI term, or URI target -> opaque URI value
    4. blank node -> untyped value from its string form
    5. literal + UNDEFINED target -> inferred per LITERAL_INFERENCE_ORDER
    6. literal + explicit target -> parsed from the lexical form

The inference order is a fixed contract: boolean, byte, double, float, long,
short, integer, timestamp, then string. An integer literal tagged as
xsd:byte therefore becomes a BYTE value, not a generic integer. Bounded
integer datatypes map through DECLARED_INTEGER_TYPES, so xsd:unsignedInt
is LONG and xsd:unsignedByte is SHORT.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Optional, Tuple, Union

from rdflib import BNode, Literal, URIRef, XSD
from rdflib.term import Node

from ...core.exceptions import InvalidValueShape, MalformedInput, RepositoryRdfError
from ...shared.models import PropertyType, Value, ValueFactory
from ...shared.models.values import INTEGER_RANGES
from ...shared.protocols import IdentifierConverterProtocol, SessionProtocol

logger = logging.getLogger(__name__)

RDFTerm = Union[URIRef, BNode, Literal]

# Integer datatypes with a fixed value type
DECLARED_INTEGER_TYPES: Dict[URIRef, PropertyType] = {
    XSD.byte: PropertyType.BYTE,
    XSD.short: PropertyType.SHORT,
    XSD.unsignedByte: PropertyType.SHORT,
    XSD.int: PropertyType.INTEGER,
    XSD.unsignedShort: PropertyType.INTEGER,
    XSD.long: PropertyType.LONG,
    XSD.unsignedInt: PropertyType.LONG,
}

# Unbounded integer datatypes, narrowed to the smallest of INTEGER and LONG
NARROWED_INTEGER_DATATYPES = frozenset({
    XSD.integer,
    XSD.nonNegativeInteger,
    XSD.nonPositiveInteger,
    XSD.positiveInteger,
    XSD.negativeInteger,
    XSD.unsignedLong,
})

# Value type -> datatype used when emitting typed literals
PROPERTY_TYPE_TO_XSD: Dict[PropertyType, URIRef] = {
    PropertyType.BOOLEAN: XSD.boolean,
    PropertyType.BYTE: XSD.byte,
    PropertyType.SHORT: XSD.short,
    PropertyType.INTEGER: XSD.int,
    PropertyType.LONG: XSD.long,
    PropertyType.FLOAT: XSD.float,
    PropertyType.DOUBLE: XSD.double,
    PropertyType.DATE: XSD.dateTime,
}


def _native(literal: Literal) -> Any:
    """The literal's Python value, or None when it is ill-typed."""
    return literal.value if literal.datatype is not None else None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _in_range(value: Any, value_type: PropertyType) -> bool:
    low, high = INTEGER_RANGES[value_type]
    return _is_int(value) and low <= value <= high


def _integer_type(literal: Literal) -> Optional[PropertyType]:
    """Value type of an integer literal, or None when it is not one or does not fit."""
    value = _native(literal)
    if not _is_int(value):
        return None
    declared = DECLARED_INTEGER_TYPES.get(literal.datatype)
    if declared is not None:
        return declared if _in_range(value, declared) else None
    if literal.datatype not in NARROWED_INTEGER_DATATYPES:
        return None
    for value_type in (PropertyType.INTEGER, PropertyType.LONG):
        if _in_range(value, value_type):
            return value_type
    return None


def _is_boolean(literal: Literal) -> bool:
    return isinstance(_native(literal), bool)


def _is_byte(literal: Literal) -> bool:
    return _integer_type(literal) == PropertyType.BYTE


def _is_double(literal: Literal) -> bool:
    return literal.datatype == XSD.double and isinstance(_native(literal), float)


def _is_float(literal: Literal) -> bool:
    return literal.datatype == XSD.float and isinstance(_native(literal), float)


def _is_long(literal: Literal) -> bool:
    return _integer_type(literal) == PropertyType.LONG


def _is_short(literal: Literal) -> bool:
    return _integer_type(literal) == PropertyType.SHORT


def _is_integer(literal: Literal) -> bool:
    return _integer_type(literal) == PropertyType.INTEGER


def _is_timestamp(literal: Literal) -> bool:
    value = _native(literal)
    return isinstance(value, date) and not isinstance(value, time)


def _as_datetime(literal: Literal) -> datetime:
    value = _native(literal)
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time())


@dataclass(frozen=True)
class InferenceRule:
    """
    One step of literal type inference.
    
    Attributes:
        type: Value type produced when the rule matches.
        matches: Predicate over the literal.
        accessor: Reads the literal's native value for that type.
    """
    type: PropertyType
    matches: Callable[[Literal], bool]
    accessor: Callable[[Literal], Any]


LITERAL_INFERENCE_ORDER: Tuple[InferenceRule, ...] = (
    InferenceRule(PropertyType.BOOLEAN, _is_boolean, _native),
    InferenceRule(PropertyType.BYTE, _is_byte, _native),
    InferenceRule(PropertyType.DOUBLE, _is_double, _native),
    InferenceRule(PropertyType.FLOAT, _is_float, _native),
    InferenceRule(PropertyType.LONG, _is_long, _native),
    InferenceRule(PropertyType.SHORT, _is_short, _native),
    InferenceRule(PropertyType.INTEGER, _is_integer, _native),
    InferenceRule(PropertyType.DATE, _is_timestamp, _as_datetime),
)


def infer_literal_type(literal: Literal) -> Tuple[PropertyType, Any]:
    """
    Infer a value type for a literal.
    
    Returns:
        (type, native value); STRING and the lexical form when no rule matches.
    """
    for rule in LITERAL_INFERENCE_ORDER:
        if rule.matches(literal):
            return rule.type, rule.accessor(literal)
    return PropertyType.STRING, str(literal)


class ValueConverter:
    """
    Converts between RDF terms and repository values.
    
    Bound to the identifier converter used to resolve references in both
    directions.
    """
    
    def __init__(self, id_converter: IdentifierConverterProtocol):
        self.id_converter = id_converter
    
    def create_value(
        self,
        value_factory: ValueFactory,
        term: Node,
        target_type: PropertyType = PropertyType.UNDEFINED,
    ) -> Value:
        """
        Create a repository value from an RDF term.
        
        Args:
            value_factory: Factory of the session the value is for.
            term: URIRef, BNode or Literal.
            target_type: Declared type of the property, or UNDEFINED to infer.
        
        Raises:
            MalformedInput: Reference target that cannot be resolved.
            InvalidValueShape: Reference target given a non-URI term.
            ValueFormatError: Literal whose lexical form does not fit target_type.
        """
        if value_factory is None:
            raise ValueError("value_factory is required")
        
        is_uri = isinstance(term, URIRef)
        
        if is_uri and target_type.is_reference:
            try:
                node = self.id_converter.to_node(term)
            except (RepositoryRdfError, LookupError) as e:
                raise MalformedInput("Unable to find referenced node", resource=str(term)) from e
            return value_factory.create_reference(node, weak=target_type == PropertyType.WEAKREFERENCE)
        
        if not is_uri and target_type.is_reference:
            raise InvalidValueShape(
                "Reference properties can only refer to URIs, not literals",
                resource=str(term),
            )
        
        if is_uri or target_type == PropertyType.URI:
            return value_factory.create_from_string(str(term), PropertyType.URI)
        
        if isinstance(term, BNode):
            return value_factory.create_from_string(str(term), PropertyType.UNDEFINED)
        
        if isinstance(term, Literal) and target_type == PropertyType.UNDEFINED:
            inferred_type, native = infer_literal_type(term)
            return value_factory.create_value(native, inferred_type)
        
        logger.debug(f"Using default value creation for RDF literal: {term!r}")
        return value_factory.create_from_string(str(term), target_type)
    
    def value_to_term(self, value: Value, session: Optional[SessionProtocol] = None) -> Node:
        """
        Convert a stored value into an RDF term.
        
        References resolve through session to the referenced node's
        external identifier.
        """
        if value.type.is_reference:
            if session is None:
                raise ValueError("A session is required to convert reference values")
            node = session.get_node_by_identifier(value.raw)
            return self.id_converter.to_resource(node)
        if value.type == PropertyType.URI:
            return URIRef(value.raw)
        datatype = PROPERTY_TYPE_TO_XSD.get(value.type)
        if datatype is None:
            return Literal(value.string)
        return Literal(value.raw, datatype=datatype)
