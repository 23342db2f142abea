"""
Type-tag (mixin) management.

Adding a tag is a two-step protocol:
    1. lookup_or_define(session, name) -> NodeType
       Side-effecting: registers a queryable mixin type the store has
       never seen.
    2. apply_type(node, node_type)
       Idempotent: no-op when the node already carries the type.

Mixin operations are not subject to the managed-property guard; type names
live in their own namespace.
"""

import logging
from typing import Optional

from ...core.exceptions import IncompatibleType
from ...shared.models import NodeType
from ...shared.protocols import NodeProtocol, SessionProtocol

logger = logging.getLogger(__name__)


def repository_has_type(session: SessionProtocol, type_name: str) -> bool:
    """True if the session's node type manager knows type_name."""
    return session.node_type_manager.has_node_type(type_name)


def lookup_or_define(session: SessionProtocol, type_name: str) -> NodeType:
    """
    Return the node type named type_name, registering a mixin if unknown.
    
    The synthesized type is a queryable mixin with no structural
    constraints.
    """
    manager = session.node_type_manager
    if manager.has_node_type(type_name):
        return manager.get_node_type(type_name)
    logger.info(f"Registering new mixin type: {type_name}")
    return manager.register_node_type(NodeType.mixin(type_name), allow_update=False)


def apply_type(node: NodeProtocol, node_type: NodeType, resource: Optional[str] = None) -> bool:
    """
    Add node_type to node as a mixin.
    
    Args:
        node: Target node.
        node_type: Type returned by lookup_or_define.
        resource: RDF resource the type came from, for error messages.
    
    Returns:
        True if the mixin was added, False if the node already carried it.
    
    Raises:
        IncompatibleType: If the node's current types refuse the mixin.
    """
    if node.is_node_type(node_type.name):
        logger.debug(f"Subject {node.path} is already a {node_type.name}; skipping")
        return False
    
    if not node.can_add_mixin(node_type.name):
        raise IncompatibleType(node_type.name, node.path, resource=resource)
    
    logger.debug(f"Adding mixin: {node_type.name} to node: {node.path}.")
    node.add_mixin(node_type.name)
    return True


def add_type_tag(node: NodeProtocol, type_name: str, resource: Optional[str] = None) -> bool:
    """Define the type if needed, then apply it to node."""
    node_type = lookup_or_define(node.session, type_name)
    return apply_type(node, node_type, resource=resource)


def remove_type_tag(node: NodeProtocol, type_name: str) -> bool:
    """
    Remove a mixin from node if the type exists and the node carries it.
    
    Returns:
        True if a mixin was removed.
    """
    session = node.session
    if repository_has_type(session, type_name) and node.is_node_type(type_name):
        logger.debug(f"Removing mixin: {type_name} from node: {node.path}.")
        node.remove_mixin(type_name)
        return True
    return False
