"""
Describe commands: print repository-level RDF (namespaces, workspaces).
"""

import argparse
import logging
import sys

from .base import BaseCommand
from ....constants import ExitCode


logger = logging.getLogger(__name__)


class NamespacesCommand(BaseCommand):
    """Print the registered namespaces as RDF."""
    
    def execute(self, args: argparse.Namespace) -> int:
        self.setup_logging_from_config(args)
        session, _, tools = self.open_translator(args)
        for prefix, uri in self.namespace_hints.items():
            session.namespace_registry.register_namespace(prefix, uri)
        graph = tools.get_namespace_triples().to_graph()
        sys.stdout.write(graph.serialize(format=args.output_format))
        return ExitCode.SUCCESS


class WorkspacesCommand(BaseCommand):
    """Print the repository's workspaces as RDF."""
    
    def execute(self, args: argparse.Namespace) -> int:
        self.setup_logging_from_config(args)
        _, _, tools = self.open_translator(args)
        graph = tools.get_workspace_triples().to_graph()
        sys.stdout.write(graph.serialize(format=args.output_format))
        return ExitCode.SUCCESS
