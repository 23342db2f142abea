"""
Namespace bridging and prefix resolution.

Two namespace universes meet here: RDF namespace URIs and the structured
store's namespace registry. The bridge maps the store's reserved namespace
onto its public RDF counterpart, and the resolver turns an RDF predicate
into a `prefix:localName` property name, registering prefixes on demand.

The registry is passed explicitly to every call. It is shared by all
translations in a session, so registrations made here are visible to every
caller on that session.
"""

import logging
from typing import TYPE_CHECKING, Dict, Iterable, Mapping, Optional, Tuple

from rdflib.namespace import split_uri

from ..constants import Namespaces

if TYPE_CHECKING:
    from ..shared.protocols import NamespaceRegistryProtocol

logger = logging.getLogger(__name__)

# Store namespace -> RDF namespace
STORE_TO_RDF_NAMESPACES: Dict[str, str] = {
    Namespaces.JCR: Namespaces.REPOSITORY,
}

# RDF namespace -> store namespace
RDF_TO_STORE_NAMESPACES: Dict[str, str] = {
    rdf_ns: store_ns for store_ns, rdf_ns in STORE_TO_RDF_NAMESPACES.items()
}


def to_store_namespace(rdf_namespace: str) -> str:
    """Map an RDF namespace URI to its store equivalent (identity when not special-cased)."""
    return RDF_TO_STORE_NAMESPACES.get(rdf_namespace, rdf_namespace)


def to_rdf_namespace(store_namespace: str) -> str:
    """Map a store namespace URI to its RDF equivalent (identity when not special-cased)."""
    return STORE_TO_RDF_NAMESPACES.get(store_namespace, store_namespace)


# Namespaces with no trailing separator; NCName splitting cannot find their boundary
STORE_NAMESPACES: Tuple[str, ...] = (
    Namespaces.JCR,
    Namespaces.NT,
    Namespaces.MIX,
    Namespaces.XML,
)


def split_predicate(uri: str, known_namespaces: Iterable[str] = ()) -> Tuple[str, str]:
    """
    Split a predicate URI into (namespace, local name).
    
    The longest matching known namespace wins, provided the remainder is a
    single path segment. The store's own namespaces are always known.
    Otherwise XML NCName rules apply, then a split after the last '#' or '/'.
    
    Args:
        uri: Predicate URI.
        known_namespaces: Extra namespace URIs, typically the registry's.
    """
    text = str(uri)
    matches = [
        ns for ns in (*STORE_NAMESPACES, *known_namespaces)
        if ns and text.startswith(ns) and len(text) > len(ns)
        and not any(sep in text[len(ns):] for sep in "#/")
    ]
    if matches:
        namespace = max(matches, key=len)
        return namespace, text[len(namespace):]
    try:
        namespace, local_name = split_uri(text)
        return str(namespace), str(local_name)
    except ValueError:
        cut = max(text.rfind("#"), text.rfind("/"))
        return text[:cut + 1], text[cut + 1:]


def resolve_prefix(
    registry: "NamespaceRegistryProtocol",
    namespace_uri: str,
    namespace_mapping: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Find or allocate the registry prefix for an RDF namespace.
    
    Resolution order:
    1. The prefix already registered for the (bridged) URI
    2. A caller-supplied hint whose URI matches; registered explicitly
    3. A prefix auto-allocated by the registry
    
    Args:
        registry: The session's namespace registry.
        namespace_uri: RDF namespace URI.
        namespace_mapping: Optional prefix -> URI hints.
    
    Returns:
        The prefix now bound to the namespace.
    
    Raises:
        NamespaceRegistryError: Propagated unchanged from the registry.
    """
    namespace = to_store_namespace(namespace_uri)
    
    if registry.is_registered_uri(namespace):
        logger.debug(f"Discovered namespace: {namespace} in namespace registry.")
        return registry.get_prefix(namespace)
    
    logger.debug(f"Didn't discover namespace: {namespace} in namespace registry.")
    for prefix, uri in (namespace_mapping or {}).items():
        if uri == namespace:
            logger.debug(f"Discovered namespace: {namespace} in namespace map: {namespace_mapping}.")
            registry.register_namespace(prefix, namespace)
            return prefix
    
    return registry.register_uri(namespace)


def resolve_property_name(
    registry: "NamespaceRegistryProtocol",
    namespace_uri: str,
    local_name: str,
    namespace_mapping: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Translate an RDF predicate (namespace + local name) into a property name.
    
    Returns:
        A name of the form `prefix:localName`.
    """
    prefix = resolve_prefix(registry, namespace_uri, namespace_mapping)
    property_name = f"{prefix}:{local_name}"
    logger.debug(f"Took RDF predicate {namespace_uri}{local_name} and translated it to property {property_name}")
    return property_name
