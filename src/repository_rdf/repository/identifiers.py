"""
Identifier conversion between node paths and external resource URIs.

Nodes are published under a base URI: the node at `/books/1` becomes
`<base>/books/1` and the root node becomes `<base>/`.
"""

import logging
from urllib.parse import quote, unquote

from rdflib import URIRef

from ..core.exceptions import MalformedInput
from ..shared.protocols import NodeProtocol, SessionProtocol

logger = logging.getLogger(__name__)


class BaseUriIdentifierConverter:
    """
    Converts between nodes of one session and URIs under a base URI.
    
    Attributes:
        session: Session that resolves paths to nodes.
        base_uri: URI prefix, without a trailing slash.
    """
    
    def __init__(self, session: SessionProtocol, base_uri: str):
        self.session = session
        self.base_uri = base_uri.rstrip("/")
    
    def in_domain(self, resource: URIRef) -> bool:
        text = str(resource)
        return text == self.base_uri or text.startswith(self.base_uri + "/")
    
    def to_path(self, resource: URIRef) -> str:
        """
        Path of the node a resource identifies.
        
        Raises:
            MalformedInput: If the resource is outside the base URI.
        """
        if not self.in_domain(resource):
            raise MalformedInput(f"Resource is not in the repository domain: {resource}", resource=str(resource))
        path = unquote(str(resource)[len(self.base_uri):]).split("#", 1)[0]
        if not path or path == "/":
            return "/"
        return path.rstrip("/")
    
    def to_node(self, resource: URIRef) -> NodeProtocol:
        """
        Node a resource identifies.
        
        Raises:
            MalformedInput: Resource outside the base URI.
            NodeNotFoundError: No node at the resource's path.
        """
        return self.session.get_node(self.to_path(resource))
    
    def path_to_resource(self, path: str) -> URIRef:
        return URIRef(self.base_uri + quote(path, safe="/:"))
    
    def to_resource(self, node: NodeProtocol) -> URIRef:
        return self.path_to_resource(node.path)
