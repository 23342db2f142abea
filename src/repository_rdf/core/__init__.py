"""
Core translation primitives: errors, namespace handling and the managed
predicate lexicon.
"""

from .exceptions import (
    RepositoryRdfError,
    MalformedInput,
    InvalidValueShape,
    IncompatibleType,
    ManagedPropertyViolation,
    StoreOperationFailed,
    NamespaceRegistryError,
    ValueFormatError,
    NodeNotFoundError,
)
from .namespaces import (
    to_store_namespace,
    to_rdf_namespace,
    split_predicate,
    resolve_prefix,
    resolve_property_name,
)
from .lexicon import (
    MANAGED_NAMESPACES,
    MANAGED_PREDICATES,
    is_managed_predicate,
    assert_mutable,
)

__all__ = [
    # Errors
    "RepositoryRdfError",
    "MalformedInput",
    "InvalidValueShape",
    "IncompatibleType",
    "ManagedPropertyViolation",
    "StoreOperationFailed",
    "NamespaceRegistryError",
    "ValueFormatError",
    "NodeNotFoundError",
    # Namespaces
    "to_store_namespace",
    "to_rdf_namespace",
    "split_predicate",
    "resolve_prefix",
    "resolve_property_name",
    # Managed predicates
    "MANAGED_NAMESPACES",
    "MANAGED_PREDICATES",
    "is_managed_predicate",
    "assert_mutable",
]
