"""
RDF vocabulary used by the translator and the managed-property guard.

Managed predicates describe state the repository maintains itself (creation
dates, containment, digests). They are never accepted from external RDF.
"""

import logging
from typing import FrozenSet, Optional

from rdflib import Namespace, URIRef

from ..constants import Namespaces
from .exceptions import ManagedPropertyViolation

logger = logging.getLogger(__name__)

REPOSITORY = Namespace(Namespaces.REPOSITORY)
LDP = Namespace(Namespaces.LDP)
PREMIS = Namespace(Namespaces.PREMIS)
VANN = Namespace(Namespaces.VANN)
VOAF = Namespace(Namespaces.VOAF)
DC = Namespace(Namespaces.DC)

# Result-set membership
HAS_MEMBER_OF_RESULT = LDP.member

# Fixity
HAS_FIXITY_RESULT = PREMIS.hasFixity
FIXITY_TYPE = PREMIS.Fixity
HAS_FIXITY_STATE = PREMIS.hasEventOutcome
HAS_MESSAGE_DIGEST = PREMIS.hasMessageDigest
HAS_SIZE = PREMIS.hasSize
HAS_CONTENT_LOCATION = PREMIS.hasContentLocation

# Namespaces
VOAF_VOCABULARY = VOAF.Vocabulary
HAS_NAMESPACE_PREFIX = VANN.preferredNamespacePrefix
HAS_NAMESPACE_URI = VANN.preferredNamespaceUri

# Workspaces
HAS_WORKSPACE = REPOSITORY.hasWorkspace
WORKSPACE_TYPE = REPOSITORY.RepositoryWorkspace
DC_TITLE = DC.title

# Node state maintained by the repository
HAS_PRIMARY_IDENTIFIER = REPOSITORY.uuid
HAS_PRIMARY_TYPE = REPOSITORY.primaryType
HAS_MIXIN_TYPE = REPOSITORY.mixinTypes
CREATED_DATE = REPOSITORY.created
LAST_MODIFIED_DATE = REPOSITORY.lastModified
HAS_PARENT = REPOSITORY.hasParent
HAS_CHILD = REPOSITORY.hasChild

MANAGED_NAMESPACES: FrozenSet[str] = frozenset({
    Namespaces.REPOSITORY,
    Namespaces.JCR,
})

MANAGED_PREDICATES: FrozenSet[URIRef] = frozenset({
    HAS_PRIMARY_IDENTIFIER,
    HAS_PRIMARY_TYPE,
    HAS_MIXIN_TYPE,
    CREATED_DATE,
    LAST_MODIFIED_DATE,
    HAS_PARENT,
    HAS_CHILD,
    HAS_SIZE,
    HAS_MESSAGE_DIGEST,
    LDP.contains,
})


def is_managed_predicate(predicate: URIRef) -> bool:
    """True if predicate is maintained by the repository and must not be written externally."""
    if URIRef(predicate) in MANAGED_PREDICATES:
        return True
    text = str(predicate)
    return any(text.startswith(namespace) for namespace in MANAGED_NAMESPACES)


def assert_mutable(
    predicate: URIRef,
    node_path: Optional[str] = None,
    action: str = "persist",
) -> None:
    """
    Reject external mutation of a managed predicate.
    
    Raises:
        ManagedPropertyViolation: If predicate is managed.
    """
    if is_managed_predicate(predicate):
        logger.debug(f"Rejected {action} of managed predicate {predicate} on {node_path}")
        raise ManagedPropertyViolation(str(predicate), node_path=node_path, action=action)
