"""
Typed property values.

This module defines the value types a repository property can hold and the
factory that builds them. Values are immutable; a property holds one or more
of them.

Reference:
    Value types follow the structured store's property type model
    (boolean, integer variants, floating variants, string, URI, date,
    reference, weak reference, undefined).
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

from ...core.exceptions import ValueFormatError


class PropertyType(IntEnum):
    """Value types understood by the structured store."""
    UNDEFINED = 0
    STRING = 1
    BOOLEAN = 2
    BYTE = 3
    SHORT = 4
    INTEGER = 5
    LONG = 6
    FLOAT = 7
    DOUBLE = 8
    DATE = 9
    URI = 10
    REFERENCE = 11
    WEAKREFERENCE = 12
    
    @property
    def is_reference(self) -> bool:
        return self in (PropertyType.REFERENCE, PropertyType.WEAKREFERENCE)


# Inclusive bounds for the bounded integer types
INTEGER_RANGES: Dict[PropertyType, Tuple[int, int]] = {
    PropertyType.BYTE: (-2 ** 7, 2 ** 7 - 1),
    PropertyType.SHORT: (-2 ** 15, 2 ** 15 - 1),
    PropertyType.INTEGER: (-2 ** 31, 2 ** 31 - 1),
    PropertyType.LONG: (-2 ** 63, 2 ** 63 - 1),
}

FLOATING_TYPES = (PropertyType.FLOAT, PropertyType.DOUBLE)


@dataclass(frozen=True)
class Value:
    """
    A single typed property value.
    
    Attributes:
        type: The property type of the value.
        raw: Native Python representation (bool, int, float, str or datetime).
            Reference values hold the identifier of the referenced node.
    
    Example:
        >>> Value(PropertyType.LONG, 42).string
        '42'
    """
    type: PropertyType
    raw: Any
    
    @property
    def string(self) -> str:
        """Lexical form of the value."""
        if self.type == PropertyType.BOOLEAN:
            return "true" if self.raw else "false"
        if self.type == PropertyType.DATE:
            return self.raw.isoformat()
        return str(self.raw)


def _parse_boolean(lexical: str) -> bool:
    normalized = lexical.strip().lower()
    if normalized in ("true", "1"):
        return True
    if normalized in ("false", "0"):
        return False
    raise ValueFormatError(lexical, PropertyType.BOOLEAN.name)


def _parse_date(lexical: str) -> datetime:
    text = lexical.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise ValueFormatError(lexical, PropertyType.DATE.name) from e


class ValueFactory:
    """
    Builds typed values from native Python objects or lexical strings.
    
    An UNDEFINED target type resolves to STRING, matching the store's
    behavior for values created without a known type.
    """
    
    def create_value(self, raw: Any, value_type: Optional[PropertyType] = None) -> Value:
        """
        Create a value from a native Python object.
        
        Args:
            raw: bool, int, float, str or datetime.
            value_type: Explicit target type; inferred from raw when omitted.
        
        Raises:
            ValueFormatError: If raw cannot be held by the target type.
        """
        if value_type is None or value_type == PropertyType.UNDEFINED:
            value_type = self._infer_type(raw)
        if isinstance(raw, str) and value_type != PropertyType.STRING:
            return self.create_from_string(raw, value_type)
        return Value(value_type, self._coerce(raw, value_type))
    
    def create_from_string(self, lexical: str, value_type: PropertyType) -> Value:
        """
        Create a value by parsing a lexical form as the given type.
        
        Raises:
            ValueFormatError: If the lexical form is invalid for the type.
        """
        if value_type == PropertyType.UNDEFINED:
            value_type = PropertyType.STRING
        
        if value_type == PropertyType.BOOLEAN:
            return Value(value_type, _parse_boolean(lexical))
        if value_type in INTEGER_RANGES:
            try:
                number = int(lexical.strip())
            except ValueError as e:
                raise ValueFormatError(lexical, value_type.name) from e
            return Value(value_type, self._check_range(number, value_type))
        if value_type in FLOATING_TYPES:
            try:
                return Value(value_type, float(lexical.strip()))
            except ValueError as e:
                raise ValueFormatError(lexical, value_type.name) from e
        if value_type == PropertyType.DATE:
            return Value(value_type, _parse_date(lexical))
        return Value(value_type, lexical)
    
    def create_reference(self, node: Any, weak: bool = False) -> Value:
        """Create a (weak) reference value pointing at a node."""
        value_type = PropertyType.WEAKREFERENCE if weak else PropertyType.REFERENCE
        return Value(value_type, node.identifier)
    
    @staticmethod
    def _infer_type(raw: Any) -> PropertyType:
        if isinstance(raw, bool):
            return PropertyType.BOOLEAN
        if isinstance(raw, int):
            return PropertyType.LONG
        if isinstance(raw, float):
            return PropertyType.DOUBLE
        if isinstance(raw, datetime):
            return PropertyType.DATE
        return PropertyType.STRING
    
    def _coerce(self, raw: Any, value_type: PropertyType) -> Any:
        if value_type == PropertyType.BOOLEAN:
            return bool(raw)
        if value_type in INTEGER_RANGES:
            if isinstance(raw, bool) or not isinstance(raw, int):
                raise ValueFormatError(str(raw), value_type.name)
            return self._check_range(raw, value_type)
        if value_type in FLOATING_TYPES:
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ValueFormatError(str(raw), value_type.name)
            return float(raw)
        if value_type == PropertyType.DATE:
            if not isinstance(raw, datetime):
                raise ValueFormatError(str(raw), value_type.name)
            return raw
        return str(raw)
    
    @staticmethod
    def _check_range(number: int, value_type: PropertyType) -> int:
        low, high = INTEGER_RANGES[value_type]
        if not low <= number <= high:
            raise ValueFormatError(str(number), value_type.name)
        return number
